"""Tests for the per-node filter pipeline."""

from __future__ import annotations

import os
import stat
from pathlib import Path

import pytest

from treefind import Finder
from treefind.pipeline import PRUNE, REJECT, FilterPipeline
from treefind.roots import DirectoryRoot, Node


@pytest.fixture
def root(tmp_path: Path) -> DirectoryRoot:
    return DirectoryRoot(tmp_path)


def _dir(root: DirectoryRoot, rel: str) -> Node:
    rel = rel.replace("/", os.sep)
    return Node(os.path.join(root.path, rel), rel, os.path.basename(rel), True, stat.S_IFDIR)


def _file(root: DirectoryRoot, rel: str) -> Node:
    rel = rel.replace("/", os.sep)
    return Node(os.path.join(root.path, rel), rel, os.path.basename(rel), False, stat.S_IFREG)


def _decide(finder: Finder, node: Node, depth: int, root: DirectoryRoot):
    return FilterPipeline.from_finder(finder).decide(node, depth, root)


def test_no_criteria_accepts(root: DirectoryRoot):
    decision = _decide(Finder(), _file(root, "a.txt"), 0, root)
    assert decision.accept
    assert not decision.prune
    assert decision.node is not None and decision.node.name == "a.txt"


def test_vcs_directories_pruned(root: DirectoryRoot):
    finder = Finder().ignore_dot_files(False)
    assert _decide(finder, _dir(root, ".git"), 0, root) == PRUNE
    assert _decide(finder, _dir(root, "pkg/CVS"), 1, root) == PRUNE
    assert _decide(finder, _dir(root, ".gitx"), 0, root).accept
    assert _decide(finder.ignore_vcs(False), _dir(root, ".git"), 0, root).accept


def test_vcs_names_only_prune_directories(root: DirectoryRoot):
    finder = Finder().ignore_dot_files(False)
    assert _decide(finder, _file(root, "CVS"), 0, root).accept


def test_dot_names(root: DirectoryRoot):
    assert _decide(Finder(), _dir(root, ".cache"), 0, root) == PRUNE
    assert _decide(Finder(), _file(root, ".hidden"), 0, root) == REJECT
    assert _decide(Finder().ignore_dot_files(False), _file(root, ".hidden"), 0, root).accept


def test_excluded_directory_pruned(root: DirectoryRoot):
    finder = Finder().exclude("dir-a/subdir-b")
    assert _decide(finder, _dir(root, "dir-a/subdir-b"), 1, root) == PRUNE
    assert _decide(finder, _dir(root, "dir-a/subdir-a"), 1, root).accept
    assert _decide(finder, _dir(root, "subdir-b"), 0, root).accept


def test_min_depth_rejects_without_pruning(root: DirectoryRoot):
    finder = Finder().min_depth(1)
    assert _decide(finder, _dir(root, "dir-a"), 0, root) == REJECT
    assert _decide(finder, _dir(root, "dir-a/sub"), 1, root).accept


def test_max_depth_prunes_accepted_directory(root: DirectoryRoot):
    decision = _decide(Finder().max_depth(1), _dir(root, "dir-a/sub"), 1, root)
    assert decision.accept
    assert decision.prune
    assert not _decide(Finder().max_depth(1), _dir(root, "dir-a"), 0, root).prune


def test_max_depth_prunes_rejected_directory(root: DirectoryRoot):
    """Pruning at the maximum depth does not depend on the directory being reported."""
    assert _decide(Finder().max_depth(0).files(), _dir(root, "dir-a"), 0, root) == PRUNE
    assert _decide(Finder().max_depth(0).not_name("dir-*"), _dir(root, "dir-a"), 0, root) == PRUNE
    assert _decide(Finder().max_depth(0).path("nothing"), _dir(root, "dir-a"), 0, root) == PRUNE
    assert _decide(Finder().max_depth(0).min_depth(1), _dir(root, "dir-a"), 0, root) == PRUNE


def test_type_filter(root: DirectoryRoot):
    assert _decide(Finder().files(), _dir(root, "d"), 0, root) == REJECT
    assert _decide(Finder().files(), _file(root, "f"), 0, root).accept
    assert _decide(Finder().directories(), _file(root, "f"), 0, root) == REJECT
    assert _decide(Finder().directories(), _dir(root, "d"), 0, root).accept


def test_name_include_exempts_directories(root: DirectoryRoot):
    finder = Finder().name("*.txt")
    assert _decide(finder, _dir(root, "build"), 0, root).accept
    assert _decide(finder, _file(root, "a.txt"), 0, root).accept
    assert _decide(finder, _file(root, "a.md"), 0, root) == REJECT


def test_name_regex_include(root: DirectoryRoot):
    finder = Finder().name_regex(r"^test_.*\.py$")
    assert _decide(finder, _file(root, "test_x.py"), 0, root).accept
    assert _decide(finder, _file(root, "x.py"), 0, root) == REJECT
    # Globs and regexes are alternatives.
    assert _decide(finder.name("*.md"), _file(root, "x.md"), 0, root).accept


def test_name_exclude_applies_to_directories(root: DirectoryRoot):
    finder = Finder().not_name("build")
    assert _decide(finder, _dir(root, "build"), 0, root) == REJECT
    assert _decide(finder, _file(root, "build.txt"), 0, root).accept


def test_path_filters_use_normalized_relative_path(root: DirectoryRoot):
    assert _decide(Finder().not_path("a/sub"), _dir(root, "dir-a/subdir-b"), 1, root) == REJECT
    assert _decide(Finder().path("dir-a/*.txt"), _file(root, "dir-a/x.txt"), 1, root).accept
    assert _decide(Finder().path("dir-a/*.txt"), _file(root, "a.txt"), 0, root) == REJECT
