"""Property-based tests for glob compilation using Hypothesis."""

from __future__ import annotations

from hypothesis import given, strategies as st

from treefind.glob import compile_glob

# Text without the two wildcard characters, so it compiles to a pure literal.
literals = st.text(alphabet=st.characters(exclude_characters="*?"))


class TestGlobInvariants:
    @given(literals)
    def test_literal_matches_itself(self, text: str) -> None:
        assert compile_glob(text).matches(text)

    @given(literals, st.text(), st.text())
    def test_unanchored_literal_matches_inside_any_text(
        self, text: str, before: str, after: str
    ) -> None:
        assert compile_glob(text, anchored=False).matches(before + text + after)

    @given(st.text())
    def test_star_matches_everything(self, subject: str) -> None:
        assert compile_glob("*").matches(subject)

    @given(st.text(min_size=1, max_size=1))
    def test_question_mark_matches_single_character(self, char: str) -> None:
        assert compile_glob("?").matches(char)

    @given(st.text().filter(lambda s: len(s) != 1))
    def test_question_mark_rejects_other_lengths(self, subject: str) -> None:
        assert not compile_glob("?").matches(subject)

    @given(st.text())
    def test_compile_never_fails(self, pattern: str) -> None:
        compiled = compile_glob(pattern)
        assert compiled.pattern == pattern
