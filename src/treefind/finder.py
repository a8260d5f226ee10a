"""
Immutable search configuration.

Every builder method returns a new `Finder`; the receiver is never changed,
so a partially configured finder can serve as the base for several searches::

    base = Finder().in_dir("src").files()
    python = base.name("*.py").find()
    docs = base.name("*.md", "*.rst").not_path("build/").find()
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

import fsspec

from treefind import traversal
from treefind.glob import GlobPattern, compile_glob
from treefind.types import DEFAULT_IGNORE, FileType, Ignore

if TYPE_CHECKING:
    from treefind.entry import Entry


@dataclass(frozen=True)
class Finder:
    """
    Match criteria plus the roots to search.

    Repeated name or path includes are alternatives (any may match); excludes
    reject on any match. Depth bounds of `None` are unbounded. Hidden entries
    (names starting with `.`) and version-control directories are skipped
    unless `ignore_dot_files(False)` or `ignore_vcs(False)` is set.
    """

    include_names: tuple[GlobPattern, ...] = ()
    include_name_regexes: tuple[re.Pattern[str], ...] = ()
    exclude_names: tuple[GlobPattern, ...] = ()
    include_paths: tuple[GlobPattern, ...] = ()
    exclude_paths: tuple[GlobPattern, ...] = ()
    file_type: FileType = FileType.ANY
    lower_depth: int | None = None
    upper_depth: int | None = None
    ignore_mask: Ignore = DEFAULT_IGNORE
    excluded_dirs: tuple[str, ...] = ()
    root_dirs: tuple[str, ...] = ()
    root_filesystems: tuple[tuple[fsspec.AbstractFileSystem, str], ...] = ()
    follow_links: bool = False

    # Name and path criteria

    def name(self, *patterns: str) -> Finder:
        """
        Require file names to match one of the glob `patterns` (`*.txt`,
        `README.*`, `?.x`). Directories are not filtered by name includes so
        the walk can still reach files beneath them.
        """
        added = tuple(compile_glob(p, anchored=True) for p in patterns)
        return replace(self, include_names=self.include_names + added)

    def name_regex(self, *regexes: str | re.Pattern[str]) -> Finder:
        """Like `name`, but with regular expressions searched in the file name."""
        added = tuple(re.compile(r) if isinstance(r, str) else r for r in regexes)
        return replace(self, include_name_regexes=self.include_name_regexes + added)

    def not_name(self, *patterns: str) -> Finder:
        added = tuple(compile_glob(p, anchored=True) for p in patterns)
        return replace(self, exclude_names=self.exclude_names + added)

    def path(self, *patterns: str) -> Finder:
        """Require the `/`-separated relative path to contain a match of one of `patterns`."""
        added = tuple(compile_glob(p, anchored=False) for p in patterns)
        return replace(self, include_paths=self.include_paths + added)

    def not_path(self, *patterns: str) -> Finder:
        added = tuple(compile_glob(p, anchored=False) for p in patterns)
        return replace(self, exclude_paths=self.exclude_paths + added)

    # Type and depth

    def files(self) -> Finder:
        return replace(self, file_type=FileType.FILE)

    def directories(self) -> Finder:
        return replace(self, file_type=FileType.DIRECTORY)

    def any_type(self) -> Finder:
        return replace(self, file_type=FileType.ANY)

    def min_depth(self, depth: int) -> Finder:
        """Only report entries at `depth` or deeper (0 = direct children of a root)."""
        if depth < 0:
            raise ValueError(f"min_depth must be >= 0, got {depth}")
        return replace(self, lower_depth=depth)

    def max_depth(self, depth: int) -> Finder:
        """Do not descend below `depth`; directories at `depth` are still reported."""
        if depth < 0:
            raise ValueError(f"max_depth must be >= 0, got {depth}")
        return replace(self, upper_depth=depth)

    # Ignore rules

    def ignore(self, mask: Ignore) -> Finder:
        return replace(self, ignore_mask=mask)

    def _toggle(self, flag: Ignore, enabled: bool) -> Finder:
        mask = self.ignore_mask | flag if enabled else self.ignore_mask & ~flag
        return replace(self, ignore_mask=mask)

    def ignore_vcs(self, ignore: bool = True) -> Finder:
        return self._toggle(Ignore.VCS_DIRS, ignore)

    def ignore_dot_files(self, ignore: bool = True) -> Finder:
        return self._toggle(Ignore.DOT_FILES, ignore)

    def ignore_vcs_ignored(self, ignore: bool = True) -> Finder:
        """Skip entries matched by `.gitignore` files found under each root."""
        return self._toggle(Ignore.VCS_IGNORED, ignore)

    def exclude(self, *directories: str) -> Finder:
        """Never descend into these root-relative directories."""
        added = tuple(d.replace(os.sep, "/").strip("/") for d in directories)
        return replace(self, excluded_dirs=self.excluded_dirs + added)

    def follow_symlinks(self, follow: bool = True) -> Finder:
        return replace(self, follow_links=follow)

    # Roots

    def in_dir(self, *directories: str | os.PathLike[str]) -> Finder:
        """Add physical directories to search; may be called repeatedly."""
        added = tuple(os.fspath(d) for d in directories)
        return replace(self, root_dirs=self.root_dirs + added)

    def in_fs(self, fs: fsspec.AbstractFileSystem, path: str = "") -> Finder:
        """Add an fsspec filesystem to search, rooted at `path` (default: its root)."""
        return replace(self, root_filesystems=self.root_filesystems + ((fs, path),))

    # Execution

    def find(self) -> list[Entry]:
        return traversal.find(self)

    def find_with_errors(self) -> traversal.FindResult:
        return traversal.find_with_errors(self)

    def must_find(self) -> list[Entry]:
        """Like `find`, but raise `FindError` if any node had to be skipped."""
        return traversal.must_find(self)
