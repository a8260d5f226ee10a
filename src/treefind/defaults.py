"""
Default names and limits used while walking.

Version-control directories are pruned when `Ignore.VCS_DIRS` is set
(prune, don't enter).
"""

from __future__ import annotations

VCS_DIRECTORIES: list[str] = [
    ".svn",
    "_svn",
    "CVS",
    "_darcs",
    ".arch-params",
    ".monotone",
    ".bzr",
    ".git",
    ".hg",
]

# Upper bound on links followed when resolving one symlink chain.
MAX_SYMLINK_HOPS: int = 32

GITIGNORE_FILENAME: str = ".gitignore"
