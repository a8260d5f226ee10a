"""
Shell-style glob compilation.

Only `*` (any run of characters, including `/`) and `?` (exactly one
character) are wildcards. Everything else, `[` included, is literal, so
compiling never fails.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import lru_cache

_TOKEN_RE = re.compile(r"[*?]|[^*?]+", re.DOTALL)


def glob_to_regex(pattern: str) -> str:
    """
    Translate a glob into an (unanchored) regular expression body.

    `"*.y?ml"` becomes `".*\\.y.ml"`.
    """
    parts: list[str] = []
    for token in _TOKEN_RE.findall(pattern):
        if token == "*":
            parts.append(".*")
        elif token == "?":
            parts.append(".")
        else:
            parts.append(re.escape(token))
    return "".join(parts)


@dataclass(frozen=True)
class GlobPattern:
    """
    A compiled glob. Anchored patterns must match the whole subject,
    unanchored ones may match any substring of it.
    """

    pattern: str
    anchored: bool = True
    regex: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "regex", re.compile(glob_to_regex(self.pattern), re.DOTALL))

    def matches(self, subject: str) -> bool:
        if self.anchored:
            return self.regex.fullmatch(subject) is not None
        return self.regex.search(subject) is not None

    def __call__(self, subject: str) -> bool:
        return self.matches(subject)


@lru_cache(maxsize=512)
def compile_glob(pattern: str, anchored: bool = True) -> GlobPattern:
    """Compile `pattern` into a reusable `GlobPattern`."""
    return GlobPattern(pattern, anchored)
