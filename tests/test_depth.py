"""Tests for the incremental depth tracker."""

from __future__ import annotations

from treefind.depth import DepthTracker


def test_preorder_sequence():
    tracker = DepthTracker("/")
    # Parent directories of a pre-order walk over a small tree.
    walk = [
        ("", 0),  # a.txt
        ("", 0),  # dir-a
        ("dir-a", 1),  # dir-a/sub
        ("dir-a/sub", 2),  # dir-a/sub/deep.txt
        ("dir-a", 1),  # dir-a/x.txt (ascent)
        ("", 0),  # z.txt
    ]
    for rel_dir, expected in walk:
        assert tracker.update(rel_dir) == expected


def test_jump_across_branches_recomputes():
    tracker = DepthTracker("/")
    assert tracker.update("a/b/c") == 3
    assert tracker.update("x/y") == 2
    assert tracker.update("x/y/z") == 3


def test_prefix_without_separator_is_not_a_descendant():
    tracker = DepthTracker("/")
    assert tracker.update("dir-a") == 1
    assert tracker.update("dir-a2/sub") == 2


def test_skipping_levels_recomputes():
    tracker = DepthTracker("/")
    assert tracker.update("a") == 1
    assert tracker.update("a/b/c") == 3


def test_backslash_separator():
    tracker = DepthTracker("\\")
    assert tracker.update("dir-a") == 1
    assert tracker.update("dir-a\\sub") == 2
    assert tracker.update("") == 0


def test_count():
    tracker = DepthTracker("/")
    assert tracker.count("") == 0
    assert tracker.count("a") == 1
    assert tracker.count("a/b") == 2
