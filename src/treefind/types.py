"""Enumerations shared by the finder configuration and the filter pipeline."""

from __future__ import annotations

import stat
from enum import Enum, Flag, auto


class FileType(str, Enum):
    """Which kind of entry a search reports."""

    ANY = "any"
    FILE = "file"
    DIRECTORY = "directory"


class Ignore(Flag):
    """
    Bitmask of entry classes the finder skips.

    `VCS_DIRS` prunes version-control directories, `DOT_FILES` skips names
    starting with `.` (pruning dot-directories), and `VCS_IGNORED` applies
    `.gitignore` rules found under each root.
    """

    NONE = 0
    VCS_DIRS = auto()
    DOT_FILES = auto()
    VCS_IGNORED = auto()


DEFAULT_IGNORE = Ignore.DOT_FILES | Ignore.VCS_DIRS


def is_regular(mode: int) -> bool:
    return stat.S_ISREG(mode)


def is_symlink(mode: int) -> bool:
    return stat.S_ISLNK(mode)
