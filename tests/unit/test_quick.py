"""Tests for htmlchop.quick — strip-tags word truncation."""

from __future__ import annotations

import pytest

from htmlchop.quick import strip_tags, truncate_words_quick


class TestStripTags:
    """strip_tags returns plain text."""

    def test_removes_tags(self) -> None:
        assert strip_tags("<p>Hello <b>world</b></p>") == "Hello world"

    def test_removes_script_and_style_content(self) -> None:
        html = "<style>p {}</style><p>Hi</p><SCRIPT type='x'>alert(1)</SCRIPT>"
        assert strip_tags(html) == "Hi"

    def test_decodes_entities(self) -> None:
        assert strip_tags("<p>Tom &amp; Jerry</p>") == "Tom & Jerry"

    def test_remove_breaks(self) -> None:
        assert strip_tags("<p>a\n\n\t b</p>", remove_breaks=True) == "a b"

    def test_keeps_breaks_by_default(self) -> None:
        assert strip_tags(" <p>a\nb</p> ") == "a\nb"

    @pytest.mark.parametrize("value", [None, 3, ["<p>x</p>"]])
    def test_non_string_is_empty(self, value: object) -> None:
        assert strip_tags(value) == ""


class TestTruncateWordsQuick:
    """truncate_words_quick drops markup once a cut is needed."""

    def test_fits_returns_input(self) -> None:
        html = "<p>Short <b>text</b></p>"
        assert truncate_words_quick(html, 2) == html

    def test_cut_returns_plain_words(self) -> None:
        assert truncate_words_quick("<p>One <b>two</b>\nthree four</p>", 3) == "One two three"

    def test_zero_words(self) -> None:
        assert truncate_words_quick("<p>One</p>", 0) == ""

    def test_negative_rejected(self) -> None:
        with pytest.raises(ValueError, match="words"):
            truncate_words_quick("<p>One</p>", -1)
