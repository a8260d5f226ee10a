"""
Per-node filter pipeline.

Rules run in a fixed order and the first rejection wins. Rejecting a node
only removes it from the results; pruning also keeps the walk out of its
subtree. The two are decided independently, so a directory at the maximum
depth is pruned whether or not it is itself reported.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from treefind.defaults import VCS_DIRECTORIES
from treefind.glob import GlobPattern
from treefind.types import FileType, Ignore, is_regular

if TYPE_CHECKING:
    from treefind.finder import Finder
    from treefind.gitignore import GitignoreRules
    from treefind.roots import Node, Root


@dataclass(frozen=True)
class Decision:
    """Outcome for one node. `node` is the (possibly link-resolved) node to report."""

    accept: bool
    prune: bool = False
    node: Node | None = None


REJECT = Decision(accept=False)
PRUNE = Decision(accept=False, prune=True)


def _any_match(patterns: tuple[GlobPattern, ...], subject: str) -> bool:
    return any(p.matches(subject) for p in patterns)


@dataclass(frozen=True)
class FilterPipeline:
    """Criteria of one `Finder`, compiled once per search."""

    prune_names: frozenset[str]
    skip_dot_names: bool
    excluded_dirs: frozenset[str]
    file_type: FileType
    min_depth: int | None
    max_depth: int | None
    follow_links: bool
    exclude_names: tuple[GlobPattern, ...]
    include_names: tuple[GlobPattern, ...]
    include_name_regexes: tuple[re.Pattern[str], ...]
    exclude_paths: tuple[GlobPattern, ...]
    include_paths: tuple[GlobPattern, ...]

    @classmethod
    def from_finder(cls, finder: Finder) -> FilterPipeline:
        mask = finder.ignore_mask
        return cls(
            prune_names=frozenset(VCS_DIRECTORIES if mask & Ignore.VCS_DIRS else ()),
            skip_dot_names=bool(mask & Ignore.DOT_FILES),
            excluded_dirs=frozenset(finder.excluded_dirs),
            file_type=finder.file_type,
            min_depth=finder.lower_depth,
            max_depth=finder.upper_depth,
            follow_links=finder.follow_links,
            exclude_names=finder.exclude_names,
            include_names=finder.include_names,
            include_name_regexes=finder.include_name_regexes,
            exclude_paths=finder.exclude_paths,
            include_paths=finder.include_paths,
        )

    def _pruned_dir(self, name: str, rel_path: str) -> bool:
        if name in self.prune_names:
            return True
        if self.skip_dot_names and name.startswith("."):
            return True
        return rel_path in self.excluded_dirs

    def decide(
        self,
        node: Node,
        depth: int,
        root: Root,
        ignored: GitignoreRules | None = None,
    ) -> Decision:
        """
        Decide whether `node` at `depth` is reported and whether its subtree
        is walked. Raises `OSError` if a followed symlink cannot be resolved.
        """
        rel_path = root.norm(node.rel_path)

        # Ignore rules
        if node.is_dir and self._pruned_dir(node.name, rel_path):
            return PRUNE
        if not node.is_dir and self.skip_dot_names and node.name.startswith("."):
            return REJECT
        if ignored is not None and ignored.is_ignored(rel_path, node.is_dir):
            return PRUNE if node.is_dir else REJECT

        # Depth bounds
        prune = node.is_dir and self.max_depth is not None and depth >= self.max_depth
        rejected = PRUNE if prune else REJECT
        if self.min_depth is not None and depth < self.min_depth:
            return rejected

        if node.is_link and self.follow_links:
            node = root.resolve_link(node)

        if self.file_type is FileType.FILE and not is_regular(node.mode):
            return rejected
        if self.file_type is FileType.DIRECTORY and not node.is_dir:
            return rejected

        if _any_match(self.exclude_names, node.name):
            return rejected

        if not node.is_dir and (self.include_names or self.include_name_regexes):
            if not (
                _any_match(self.include_names, node.name)
                or any(r.search(node.name) for r in self.include_name_regexes)
            ):
                return rejected

        if _any_match(self.exclude_paths, rel_path):
            return rejected
        if self.include_paths and not _any_match(self.include_paths, rel_path):
            return rejected

        return Decision(accept=True, prune=prune, node=node)
