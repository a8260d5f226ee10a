"""Incremental depth computation over a pre-order walk."""

from __future__ import annotations


class DepthTracker:
    """
    Derives each node's depth from its root-relative directory.

    Pre-order walks mostly move between siblings or one level down, so the
    previous directory is remembered and only arbitrary jumps (ascents or
    moves across branches) fall back to counting separators.
    """

    def __init__(self, sep: str) -> None:
        self.sep: str = sep
        self.prefix: str = ""
        self.depth: int = 0

    def update(self, rel_dir: str) -> int:
        """Return the depth of a node whose parent directory is `rel_dir` ("" for the root)."""
        if rel_dir == self.prefix:
            return self.depth

        if self.prefix and rel_dir.startswith(self.prefix + self.sep):
            rest = rel_dir[len(self.prefix) + len(self.sep) :]
            if rest and self.sep not in rest:
                self.depth += 1
                self.prefix = rel_dir
                return self.depth

        self.depth = self.count(rel_dir)
        self.prefix = rel_dir
        return self.depth

    def count(self, rel_dir: str) -> int:
        if not rel_dir:
            return 0
        return len(rel_dir.split(self.sep))
