"""
Walkable search roots.

A root lists children of a directory in lexical order and walks them
depth-first, pre-order, asking a visitor after every node whether to
descend. `DirectoryRoot` walks the local filesystem with `os.scandir`;
`FilesystemRoot` walks any `fsspec` filesystem.
"""

from __future__ import annotations

import errno
import os
import posixpath
import stat
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator
from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Any

import fsspec

from treefind.entry import FileInfo
from treefind import symlinks


class WalkAction(Enum):
    CONTINUE = "continue"
    SKIP_SUBTREE = "skip_subtree"


@dataclass(frozen=True)
class Node:
    """
    Lightweight descriptor of one visited node.

    `rel_path` uses the root's own separator. `mode` holds only the
    `stat.S_IFMT` bits. A node carrying an `error` could not be read and is
    never descended into.
    """

    path: str
    rel_path: str
    name: str
    is_dir: bool
    mode: int
    error: OSError | None = None

    @property
    def is_link(self) -> bool:
        return stat.S_ISLNK(self.mode)


Visitor = Callable[[Node], WalkAction]


class Root(ABC):
    """A starting point for traversal."""

    sep: str = "/"

    def walk(self, visit: Visitor) -> None:
        """
        Walk all descendants of the root in pre-order. The root itself is
        not visited. Raises `OSError` only if the root cannot be listed.
        """
        stack: list[Iterator[Node]] = [iter(self._children(self.path, ""))]
        while stack:
            node = next(stack[-1], None)
            if node is None:
                stack.pop()
                continue
            action = visit(node)
            if action is not WalkAction.CONTINUE or node.error is not None or not node.is_dir:
                continue
            try:
                children = self._children(node.path, node.rel_path)
            except OSError as e:
                # Reported like a second visit of the directory, carrying the error.
                visit(replace(node, error=e))
                continue
            stack.append(iter(children))

    @property
    @abstractmethod
    def path(self) -> str: ...

    @abstractmethod
    def _children(self, path: str, rel_dir: str) -> list[Node]:
        """List the children of directory `path`, sorted by name."""

    @abstractmethod
    def info(self, path: str, follow_links: bool = False) -> FileInfo: ...

    @abstractmethod
    def resolve_link(self, node: Node) -> Node:
        """Return `node` with the type of its final link target. Raises `OSError`."""

    @abstractmethod
    def read_text(self, rel_path: str) -> str:
        """Read a UTF-8 text file relative to the root."""

    def norm(self, rel_path: str) -> str:
        """Root-relative path with `/` separators."""
        if self.sep == "/":
            return rel_path
        return rel_path.replace(self.sep, "/")

    def __str__(self) -> str:
        return self.path


def _scandir_mode(entry: os.DirEntry[str]) -> int:
    if entry.is_symlink():
        return stat.S_IFLNK
    if entry.is_dir(follow_symlinks=False):
        return stat.S_IFDIR
    if entry.is_file(follow_symlinks=False):
        return stat.S_IFREG
    return stat.S_IFMT(entry.stat(follow_symlinks=False).st_mode)


class DirectoryRoot(Root):
    """A physical directory on the local filesystem."""

    sep = os.sep

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._path: str = os.fspath(path)

    @property
    def path(self) -> str:
        return self._path

    def _children(self, path: str, rel_dir: str) -> list[Node]:
        with os.scandir(path) as it:
            entries = sorted(it, key=lambda e: e.name)

        nodes: list[Node] = []
        for entry in entries:
            rel = os.path.join(rel_dir, entry.name) if rel_dir else entry.name
            try:
                mode = _scandir_mode(entry)
            except OSError as e:
                nodes.append(Node(entry.path, rel, entry.name, False, 0, error=e))
                continue
            nodes.append(Node(entry.path, rel, entry.name, stat.S_ISDIR(mode), mode))
        return nodes

    def info(self, path: str, follow_links: bool = False) -> FileInfo:
        st = os.stat(path, follow_symlinks=follow_links)
        return FileInfo(
            name=os.path.basename(path),
            size=st.st_size,
            mode=st.st_mode,
            mtime=st.st_mtime,
            is_dir=stat.S_ISDIR(st.st_mode),
        )

    def resolve_link(self, node: Node) -> Node:
        st = symlinks.resolve_link(node.path)
        mode = stat.S_IFMT(st.st_mode)
        return replace(node, is_dir=stat.S_ISDIR(mode), mode=mode)

    def read_text(self, rel_path: str) -> str:
        with open(os.path.join(self._path, rel_path), encoding="utf-8") as f:
            return f.read()


def _fsspec_mode(item: dict[str, Any]) -> int:
    if item.get("islink"):
        return stat.S_IFLNK
    kind = item.get("type")
    if kind == "directory":
        return stat.S_IFDIR
    if kind == "file":
        return stat.S_IFREG
    mode = item.get("mode")
    return stat.S_IFMT(mode) if isinstance(mode, int) else 0


def _timestamp(value: Any) -> float:
    if isinstance(value, datetime):
        return value.timestamp()
    if isinstance(value, (int, float)):
        return float(value)
    return 0.0


class FilesystemRoot(Root):
    """
    An abstract filesystem handle. `path` defaults to the filesystem's root
    marker; wrap a `DirFileSystem` to present a sub-directory as `""`.
    Relative paths always use `/`.
    """

    sep = "/"

    def __init__(self, fs: fsspec.AbstractFileSystem, path: str = "") -> None:
        self.fs: fsspec.AbstractFileSystem = fs
        self._path: str = path or fs.root_marker

    @property
    def path(self) -> str:
        return self._path

    def walk(self, visit: Visitor) -> None:
        # `ls` on a file lists the file itself, which would otherwise walk as empty.
        if not self.fs.isdir(self._path):
            if self.fs.exists(self._path):
                raise NotADirectoryError(errno.ENOTDIR, os.strerror(errno.ENOTDIR), self._path)
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), self._path)
        super().walk(visit)

    def _children(self, path: str, rel_dir: str) -> list[Node]:
        own = path.rstrip("/")
        nodes: list[Node] = []
        for item in self.fs.ls(path, detail=True):
            full = str(item["name"]).rstrip("/")
            name = full.rsplit("/", 1)[-1]
            # Some implementations list the directory itself.
            if not name or full == own:
                continue
            rel = f"{rel_dir}/{name}" if rel_dir else name
            mode = _fsspec_mode(item)
            nodes.append(Node(full, rel, name, stat.S_ISDIR(mode), mode))
        nodes.sort(key=lambda n: n.name)
        return nodes

    def info(self, path: str, follow_links: bool = False) -> FileInfo:
        item = self.fs.info(path)
        mode = item.get("mode")
        if not isinstance(mode, int):
            mode = _fsspec_mode({**item, "islink": False})
        mtime = item.get("mtime", item.get("created"))
        return FileInfo(
            name=posixpath.basename(path.rstrip("/")),
            size=int(item.get("size") or 0),
            mode=mode,
            mtime=_timestamp(mtime),
            is_dir=item.get("type") == "directory",
        )

    def resolve_link(self, node: Node) -> Node:
        # fsspec reports the target's type from `info`; a missing target raises.
        item = self.fs.info(node.path)
        mode = _fsspec_mode({**item, "islink": False})
        return replace(node, is_dir=stat.S_ISDIR(mode), mode=mode)

    def read_text(self, rel_path: str) -> str:
        base = self._path.rstrip("/")
        target = f"{base}/{rel_path}" if base else rel_path
        return self.fs.cat_file(target).decode("utf-8")

    def __str__(self) -> str:
        return f"{type(self.fs).__name__}:{self._path}"
