"""Tests for htmlchop.ellipsis — trimming the truncation point."""

from __future__ import annotations

import pytest

from htmlchop.ellipsis import splice, trim_trailing


class TestTrimTrailing:
    """Trailing whitespace, punctuation and entity references are stripped."""

    @pytest.mark.parametrize(
        ("markup", "expected"),
        [
            ("One two three.", "One two three"),
            ("Second sentence! ", "Second sentence"),
            ("Sentence one... ", "Sentence one"),
            ("fish &amp; ", "fish"),
            ("quote &#8230;", "quote"),
            ("hex &#x2026;", "hex"),
            ("guillemet «", "guillemet"),
            ("...!? ", ""),
        ],
    )
    def test_stripped(self, markup: str, expected: str) -> None:
        assert trim_trailing(markup) == expected

    def test_closing_tag_is_kept(self) -> None:
        assert trim_trailing("This is a <strong>sample</strong>") == (
            "This is a <strong>sample</strong>"
        )

    def test_math_symbols_are_not_punctuation(self) -> None:
        assert trim_trailing("a+") == "a+"

    def test_empty(self) -> None:
        assert trim_trailing("") == ""


class TestSplice:
    """splice trims and appends the marker verbatim."""

    def test_appends_marker(self) -> None:
        assert splice("Example text fo", "…") == "Example text fo…"

    def test_trims_before_marker(self) -> None:
        assert splice("First sentence. Second sentence! ", "…") == "First sentence. Second sentence…"

    def test_empty_marker_only_trims(self) -> None:
        assert splice("done. ", "") == "done"

    def test_marker_is_not_escaped(self) -> None:
        assert splice("Read", ' <a href="/more">more</a>') == 'Read <a href="/more">more</a>'
