"""Result values produced by a search."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from treefind.types import is_regular, is_symlink

if TYPE_CHECKING:
    from treefind.roots import Root


@dataclass(frozen=True)
class FileInfo:
    """Extended metadata for an entry, fetched on demand."""

    name: str
    size: int
    mode: int
    mtime: float
    is_dir: bool


@dataclass(frozen=True)
class Entry:
    """
    One matched filesystem node.

    `depth` is 0 for direct children of the search root and grows by one per
    nesting level. `type` holds the `stat.S_IFMT` bits of the node (or of the
    link target, when symlinks are followed).
    """

    path: str
    relative_path: str
    name: str
    depth: int
    is_dir: bool
    type: int
    _root: Root = field(repr=False, compare=False)
    _follow_links: bool = field(default=False, repr=False, compare=False)

    @property
    def is_file(self) -> bool:
        return is_regular(self.type)

    @property
    def is_symlink(self) -> bool:
        return is_symlink(self.type)

    def info(self) -> FileInfo:
        """
        Fetch size, mode and modification time from the owning root.
        Not cached: each call reads fresh metadata. Raises `OSError` if
        the node no longer exists.
        """
        return self._root.info(self.path, follow_links=self._follow_links)

    def __str__(self) -> str:
        return self.path


def describe(entry: Entry) -> str:
    """Render an entry as an indented line, marking directories."""
    suffix = " (dir)" if entry.is_dir else ""
    return "  " * entry.depth + entry.name + suffix
