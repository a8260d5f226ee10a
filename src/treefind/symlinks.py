"""Bounded resolution of symbolic-link chains on the local filesystem."""

from __future__ import annotations

import errno
import os
import stat

from treefind.defaults import MAX_SYMLINK_HOPS


def resolve_link(path: str, max_hops: int = MAX_SYMLINK_HOPS) -> os.stat_result:
    """
    Follow the link at `path` until a non-link target is reached and return
    that target's `lstat` result.

    Raises `OSError` for dangling links, unreadable links, and chains longer
    than `max_hops` (which covers cycles).
    """
    current = path
    for _ in range(max_hops):
        target = os.readlink(current)
        if not os.path.isabs(target):
            target = os.path.join(os.path.dirname(current), target)
        st = os.lstat(target)
        if not stat.S_ISLNK(st.st_mode):
            return st
        current = target
    raise OSError(errno.ELOOP, os.strerror(errno.ELOOP), path)
