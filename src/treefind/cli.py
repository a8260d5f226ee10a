#!/usr/bin/env python3
"""
treefind: Declarative file-tree search

Common usage:
  treefind . --name '*.py'
  treefind src tests --type f --not-path '/fixtures/'
  treefind . --type d --max-depth 1
  treefind . --depth --min-depth 1

Defaults for ignore rules and exclusions can be set in `.treefind.toml`,
`treefind.toml` or `pyproject.toml` under `[tool.treefind]`.
"""

from __future__ import annotations

import argparse
import importlib.metadata
import logging
import sys
from dataclasses import dataclass
from pathlib import Path

from treefind.config import find_config_file, load_config, merge_cli_with_config
from treefind.entry import describe
from treefind.finder import Finder

log = logging.getLogger("treefind")


@dataclass
class Options:
    """Command-line options for the treefind tool."""

    roots: list[str]
    names: list[str]
    not_name: list[str] | None
    paths: list[str]
    not_path: list[str] | None
    exclude: list[str] | None
    file_type: str | None
    min_depth: int | None
    max_depth: int | None
    follow_links: bool | None
    ignore_vcs: bool | None
    ignore_dot_files: bool | None
    ignore_vcs_ignored: bool | None
    show_depth: bool
    strict: bool
    verbose: bool
    version: bool


# Options a config file may supply; `None` after parsing means "not given on the command line".
_CONFIGURABLE = (
    "not_name",
    "not_path",
    "exclude",
    "follow_links",
    "ignore_vcs",
    "ignore_dot_files",
    "ignore_vcs_ignored",
)


def _parse_args(args: list[str] | None = None) -> tuple[Options, set[str]]:
    """
    Parse command-line arguments.

    Returns `(options, explicit_flags)`, where `explicit_flags` names the
    configurable options the user actually passed.
    """
    module_doc = __doc__ or ""
    doc_parts = module_doc.split("\n\n")
    description = doc_parts[0]
    epilog = "\n\n".join(doc_parts[1:])

    parser = argparse.ArgumentParser(
        prog="treefind",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "roots",
        nargs="*",
        default=[],
        help="Directories to search (default: current directory)",
    )
    parser.add_argument(
        "--name",
        action="append",
        default=[],
        dest="names",
        metavar="GLOB",
        help="Report files whose name matches GLOB ('*' and '?'). Can be repeated",
    )
    parser.add_argument(
        "--not-name",
        action="append",
        default=None,
        metavar="GLOB",
        help="Skip entries whose name matches GLOB. Can be repeated",
    )
    parser.add_argument(
        "--path",
        action="append",
        default=[],
        dest="paths",
        metavar="GLOB",
        help="Report entries whose relative path contains a match of GLOB. Can be repeated",
    )
    parser.add_argument(
        "--not-path",
        action="append",
        default=None,
        metavar="GLOB",
        help="Skip entries whose relative path contains a match of GLOB. Can be repeated",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        default=None,
        metavar="DIR",
        help="Do not descend into this root-relative directory. Can be repeated",
    )
    parser.add_argument(
        "--type",
        choices=["f", "d"],
        default=None,
        dest="file_type",
        help="Only report regular files (f) or directories (d)",
    )
    parser.add_argument("--min-depth", type=int, default=None, metavar="N")
    parser.add_argument("--max-depth", type=int, default=None, metavar="N")
    parser.add_argument(
        "--follow",
        action="store_true",
        default=None,
        dest="follow_links",
        help="Classify symlinks by their final target",
    )
    parser.add_argument(
        "--no-ignore-vcs",
        action="store_false",
        default=None,
        dest="ignore_vcs",
        help="Also search version-control directories (.git, .hg, .svn, ...)",
    )
    parser.add_argument(
        "--no-ignore-dot",
        action="store_false",
        default=None,
        dest="ignore_dot_files",
        help="Also report names starting with '.'",
    )
    parser.add_argument(
        "--ignore-vcs-ignored",
        action="store_true",
        default=None,
        dest="ignore_vcs_ignored",
        help="Skip entries matched by .gitignore files",
    )
    parser.add_argument(
        "--depth",
        action="store_true",
        dest="show_depth",
        help="Print names indented by depth instead of full paths",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 if any path could not be searched",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")
    parser.add_argument("--version", action="store_true", help="Show version information and exit")
    opts = parser.parse_args(args)

    explicit_flags = {name for name in _CONFIGURABLE if getattr(opts, name) is not None}

    return (
        Options(
            roots=opts.roots,
            names=opts.names,
            not_name=opts.not_name,
            paths=opts.paths,
            not_path=opts.not_path,
            exclude=opts.exclude,
            file_type=opts.file_type,
            min_depth=opts.min_depth,
            max_depth=opts.max_depth,
            follow_links=opts.follow_links,
            ignore_vcs=opts.ignore_vcs,
            ignore_dot_files=opts.ignore_dot_files,
            ignore_vcs_ignored=opts.ignore_vcs_ignored,
            show_depth=opts.show_depth,
            strict=opts.strict,
            verbose=opts.verbose,
            version=opts.version,
        ),
        explicit_flags,
    )


def build_finder(options: Options) -> Finder:
    """Translate options into a `Finder`. Raises `ValueError` for invalid depth bounds."""
    finder = Finder().in_dir(*(options.roots or ["."]))
    finder = finder.name(*options.names).not_name(*(options.not_name or []))
    finder = finder.path(*options.paths).not_path(*(options.not_path or []))
    finder = finder.exclude(*(options.exclude or []))

    if options.file_type == "f":
        finder = finder.files()
    elif options.file_type == "d":
        finder = finder.directories()

    if options.min_depth is not None:
        finder = finder.min_depth(options.min_depth)
    if options.max_depth is not None:
        finder = finder.max_depth(options.max_depth)

    finder = finder.follow_symlinks(bool(options.follow_links))
    finder = finder.ignore_vcs(options.ignore_vcs is not False)
    finder = finder.ignore_dot_files(options.ignore_dot_files is not False)
    return finder.ignore_vcs_ignored(bool(options.ignore_vcs_ignored))


def main(args: list[str] | None = None) -> int:
    """
    Main entry point for the treefind CLI.

    Args:
        args: Command-line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    options, explicit_flags = _parse_args(args)

    if options.version:
        try:
            version = importlib.metadata.version("treefind")
            print(f"v{version}")
        except importlib.metadata.PackageNotFoundError:
            print("unknown (package not installed)")
        return 0

    logging.basicConfig(
        level=logging.DEBUG if options.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    config_path = find_config_file(Path.cwd())
    if config_path:
        log.debug("Using config %s", config_path)
        try:
            config = load_config(config_path)
        except (ValueError, OSError) as e:
            print(f"Error: could not read {config_path}: {e}", file=sys.stderr)
            return 1
        merge_cli_with_config(options, config, explicit_flags)

    try:
        finder = build_finder(options)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    result = finder.find_with_errors()
    for entry in result.entries:
        print(describe(entry) if options.show_depth else entry.path)

    for skipped in result.errors:
        log.warning("%s: %s", skipped.path, skipped.error.strerror or skipped.error)

    if options.strict and result.errors:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
