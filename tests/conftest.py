"""Shared fixtures: the sample tree used across traversal tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from treefind import Entry
from treefind.entry import describe


def make_tree(root: Path) -> Path:
    """
    Create::

        root/
          .gitx/file
          .hidden
          a.txt
          b.txt
          dir-a/
            subdir-a/README
            subdir-b/README
            x.txt
            y.txt
    """
    root.mkdir(parents=True, exist_ok=True)
    (root / ".gitx").mkdir()
    (root / ".gitx" / "file").write_text("file\n")
    (root / ".hidden").write_text("hidden\n")
    (root / "a.txt").write_text("a\n")
    (root / "b.txt").write_text("b\n")
    dir_a = root / "dir-a"
    for sub in ("subdir-a", "subdir-b"):
        (dir_a / sub).mkdir(parents=True)
        (dir_a / sub / "README").write_text(f"{sub}\n")
    (dir_a / "x.txt").write_text("x\n")
    (dir_a / "y.txt").write_text("y\n")
    return root


@pytest.fixture
def tree(tmp_path: Path) -> Path:
    return make_tree(tmp_path / "root")


def dump(entries: list[Entry]) -> str:
    """Render entries one per line, indented by depth."""
    return "\n".join(describe(e) for e in entries)
