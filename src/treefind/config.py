"""
TOML-based defaults for the treefind command line.

Searches for `.treefind.toml`, `treefind.toml`, or `pyproject.toml [tool.treefind]`
walking up from the current directory. Values are merged with CLI flags using
three-way precedence: explicit CLI flags > config file > built-in defaults.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, TypeVar

if sys.version_info >= (3, 11):
    import tomllib  # pyright: ignore[reportUnreachable]
else:
    import tomli as tomllib  # type: ignore[no-redef]  # pyright: ignore[reportUnreachable]


@dataclass
class TreefindConfig:
    """
    Parsed config from a TOML file. Fields are `None` when not set in the config,
    so the merge can tell "not configured" from "explicitly set to the default".
    """

    exclude: list[str] | None = None
    not_path: list[str] | None = None
    not_name: list[str] | None = None
    follow_links: bool | None = None
    ignore_vcs: bool | None = None
    ignore_dot_files: bool | None = None
    ignore_vcs_ignored: bool | None = None


# Config file search order (first match wins within each directory level)
_CONFIG_FILENAMES = [".treefind.toml", "treefind.toml", "pyproject.toml"]

_VALID_FIELDS = {f.name for f in fields(TreefindConfig)}


def find_config_file(start_dir: Path) -> Path | None:
    """
    Walk up from `start_dir` looking for a config file. Returns the first
    found, or `None`. `pyproject.toml` only counts if it has `[tool.treefind]`.
    """
    current = start_dir.resolve()
    while True:
        for filename in _CONFIG_FILENAMES:
            candidate = current / filename
            if candidate.is_file():
                if filename != "pyproject.toml" or _pyproject_has_treefind_section(candidate):
                    return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def _pyproject_has_treefind_section(path: Path) -> bool:
    try:
        data = tomllib.loads(path.read_text())
        return "treefind" in data.get("tool", {})
    except (tomllib.TOMLDecodeError, OSError):
        return False


def load_config(config_path: Path) -> TreefindConfig:
    """
    Load a `TreefindConfig` from a TOML file. For `pyproject.toml` only the
    `[tool.treefind]` table is read. Kebab-case keys map to snake_case fields;
    unknown keys are ignored.
    """
    data = tomllib.loads(config_path.read_text())

    if config_path.name == "pyproject.toml":
        data = data.get("tool", {}).get("treefind", {})

    return _parse_config_data(data)


_LIST_FIELDS = {"exclude", "not_path", "not_name"}


def _parse_config_data(data: dict[str, Any]) -> TreefindConfig:
    """
    Map TOML keys onto `TreefindConfig` fields. A bare string is accepted where a
    list is expected. Raises `ValueError` for values of the wrong type.
    """
    mapped: dict[str, Any] = {}
    for key, value in data.items():
        snake_key = key.replace("-", "_")
        if snake_key not in _VALID_FIELDS:
            continue
        if snake_key in _LIST_FIELDS:
            if isinstance(value, str):
                value = [value]
            elif not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise ValueError(f"`{key}` must be a string or a list of strings, got {value!r}")
        elif not isinstance(value, bool):
            raise ValueError(f"`{key}` must be true or false, got {value!r}")
        mapped[snake_key] = value
    return TreefindConfig(**mapped)


_T = TypeVar("_T")


def merge_cli_with_config(
    cli_opts: _T,
    config: TreefindConfig | None,
    explicit_flags: set[str],
) -> _T:
    """
    Apply config values to `cli_opts` for every field the user did not pass
    explicitly on the command line.
    """
    if config is None:
        return cli_opts

    for cfg_field in fields(TreefindConfig):
        cfg_value = getattr(config, cfg_field.name)
        if cfg_value is None:
            continue  # Not set in config
        if cfg_field.name in explicit_flags:
            continue
        if hasattr(cli_opts, cfg_field.name):
            setattr(cli_opts, cfg_field.name, cfg_value)

    return cli_opts
