"""Gitignore handling using pathspec."""

from __future__ import annotations

import logging
import posixpath

import pathspec

from treefind.defaults import GITIGNORE_FILENAME
from treefind.roots import Root

log = logging.getLogger(__name__)


def _read_ignore_file(root: Root, rel_path: str) -> list[str] | None:
    """
    Read an ignore file relative to `root` and return its pattern lines, or
    `None` if it is missing, unreadable, or not UTF-8.
    """
    try:
        text = root.read_text(rel_path)
    except (OSError, UnicodeDecodeError) as e:
        if not isinstance(e, FileNotFoundError):
            log.debug("Ignoring unreadable %s in %s: %s", rel_path, root, e)
        return None
    return [
        line for line in text.splitlines() if line.strip() and not line.strip().startswith("#")
    ]


def compile_ignore_lines(lines: list[str]) -> pathspec.PathSpec | None:
    if not lines:
        return None
    return pathspec.PathSpec.from_lines("gitignore", lines)


class GitignoreRules:
    """
    `.gitignore` rules for one walk root. Each directory's ignore file is read
    at most once; rules from the root down to a node's directory all apply,
    each matched against the path relative to its own directory.
    """

    def __init__(self, root: Root) -> None:
        self._root: Root = root
        self._cache: dict[str, pathspec.PathSpec | None] = {}

    def _spec_for(self, rel_dir: str) -> pathspec.PathSpec | None:
        if rel_dir not in self._cache:
            ignore_path = posixpath.join(rel_dir, GITIGNORE_FILENAME) if rel_dir else GITIGNORE_FILENAME
            if self._root.sep != "/":
                ignore_path = ignore_path.replace("/", self._root.sep)
            lines = _read_ignore_file(self._root, ignore_path)
            self._cache[rel_dir] = compile_ignore_lines(lines or [])
        return self._cache[rel_dir]

    def is_ignored(self, rel_path: str, is_dir: bool) -> bool:
        """Check a `/`-separated root-relative path against every applicable ignore file."""
        parts = rel_path.split("/")
        for i in range(len(parts)):
            rel_dir = "/".join(parts[:i])
            spec = self._spec_for(rel_dir)
            if spec is None:
                continue
            subject = "/".join(parts[i:])
            if is_dir:
                subject += "/"
            if spec.match_file(subject):
                return True
        return False
