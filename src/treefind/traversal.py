"""
Traversal driver: walks every configured root and collects matching entries.

Searching never fails because of a single bad node or root. Anything that
could not be read is skipped, logged at debug level, and recorded in
`FindResult.errors`; `must_find` turns those records into an exception.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from treefind.depth import DepthTracker
from treefind.entry import Entry
from treefind.gitignore import GitignoreRules
from treefind.pipeline import FilterPipeline
from treefind.roots import DirectoryRoot, FilesystemRoot, Node, Root, WalkAction
from treefind.types import Ignore

if TYPE_CHECKING:
    from treefind.finder import Finder

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class SkippedNode:
    """A node or root that could not be read."""

    path: str
    error: OSError


@dataclass
class FindResult:
    entries: list[Entry] = field(default_factory=list)
    errors: list[SkippedNode] = field(default_factory=list)

    def skip(self, path: str, error: OSError) -> None:
        log.debug("Skipping %s: %s", path, error)
        self.errors.append(SkippedNode(path, error))


class FindError(Exception):
    """Raised by `must_find` when nodes were skipped. Carries the partial result."""

    def __init__(self, result: FindResult) -> None:
        self.result: FindResult = result
        message = f"{len(result.errors)} path(s) could not be searched"
        if result.errors:
            first = result.errors[0]
            message += f"; first: {first.path}: {first.error}"
        super().__init__(message)


def configured_roots(finder: Finder) -> list[Root]:
    """Physical directories first, then abstract filesystems, each in configuration order."""
    roots: list[Root] = [DirectoryRoot(d) for d in finder.root_dirs]
    roots.extend(FilesystemRoot(fs, path) for fs, path in finder.root_filesystems)
    return roots


def _walk_root(root: Root, finder: Finder, pipeline: FilterPipeline, result: FindResult) -> None:
    tracker = DepthTracker(root.sep)
    rules = GitignoreRules(root) if finder.ignore_mask & Ignore.VCS_IGNORED else None

    def visit(node: Node) -> WalkAction:
        if node.error is not None:
            result.skip(node.path, node.error)
            return WalkAction.SKIP_SUBTREE

        depth = tracker.update(node.rel_path.rpartition(root.sep)[0])
        try:
            decision = pipeline.decide(node, depth, root, rules)
        except OSError as e:
            result.skip(node.path, e)
            return WalkAction.SKIP_SUBTREE

        if decision.accept:
            matched = decision.node or node
            result.entries.append(
                Entry(
                    path=node.path,
                    relative_path=root.norm(node.rel_path),
                    name=node.name,
                    depth=depth,
                    is_dir=matched.is_dir,
                    type=matched.mode,
                    _root=root,
                    _follow_links=finder.follow_links,
                )
            )
        return WalkAction.SKIP_SUBTREE if decision.prune else WalkAction.CONTINUE

    try:
        root.walk(visit)
    except OSError as e:
        result.skip(root.path, e)


def find_with_errors(finder: Finder) -> FindResult:
    """Search all roots of `finder`, returning matches in walk order plus skipped paths."""
    pipeline = FilterPipeline.from_finder(finder)
    result = FindResult()
    for root in configured_roots(finder):
        log.debug("Searching %s", root)
        _walk_root(root, finder, pipeline, result)
    return result


def find(finder: Finder) -> list[Entry]:
    """
    Search all roots of `finder` and return the matching entries, pre-order,
    directories before their contents.
    """
    return find_with_errors(finder).entries


def must_find(finder: Finder) -> list[Entry]:
    result = find_with_errors(finder)
    if result.errors:
        raise FindError(result)
    return result.entries
