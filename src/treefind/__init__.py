"""
Declarative file-tree search.

Usage::

    from treefind import Finder

    for entry in Finder().in_dir("docs").files().name("*.md").max_depth(2).find():
        print(entry.depth, entry.path)
"""

from treefind.entry import Entry, FileInfo
from treefind.finder import Finder
from treefind.glob import GlobPattern, compile_glob
from treefind.traversal import FindError, FindResult, SkippedNode, find, find_with_errors, must_find
from treefind.types import FileType, Ignore

__all__ = [
    "Entry",
    "FileInfo",
    "FileType",
    "FindError",
    "FindResult",
    "Finder",
    "GlobPattern",
    "Ignore",
    "SkippedNode",
    "compile_glob",
    "find",
    "find_with_errors",
    "must_find",
]
