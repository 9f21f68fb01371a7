"""Tests for htmlchop.models — options and results."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from htmlchop.models import TruncateBy, TruncateOptions, TruncationResult


class TestTruncateOptions:
    """TruncateOptions validation and aliases."""

    def test_defaults(self) -> None:
        opts = TruncateOptions()
        assert opts.ellipsis == "…"
        assert opts.truncate_by is TruncateBy.WORDS
        assert opts.preserve_words is False

    def test_camel_case_aliases(self) -> None:
        opts = TruncateOptions.model_validate({"truncateBy": "chars", "preserveWords": True})
        assert opts.truncate_by is TruncateBy.CHARS
        assert opts.preserve_words is True

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(ValidationError):
            TruncateOptions.model_validate({"lengthInChars": True})

    def test_unknown_unit_rejected(self) -> None:
        with pytest.raises(ValidationError):
            TruncateOptions(truncate_by="paragraphs")

    def test_frozen(self) -> None:
        opts = TruncateOptions()
        with pytest.raises(ValidationError):
            opts.ellipsis = "..."


class TestFromSettings:
    """from_settings fills unspecified fields from the configured defaults."""

    def test_uses_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HTMLCHOP_ELLIPSIS", "...")
        monkeypatch.setenv("HTMLCHOP_TRUNCATE_BY", "sentences")
        opts = TruncateOptions.from_settings()
        assert opts.ellipsis == "..."
        assert opts.truncate_by is TruncateBy.SENTENCES

    def test_explicit_overrides_win(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HTMLCHOP_TRUNCATE_BY", "sentences")
        opts = TruncateOptions.from_settings(truncateBy="chars")
        assert opts.truncate_by is TruncateBy.CHARS

    def test_explicit_default_value_still_wins(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HTMLCHOP_ELLIPSIS", "...")
        assert TruncateOptions.from_settings(ellipsis="…").ellipsis == "…"


class TestCoerce:
    """coerce accepts options, mappings, ellipsis strings and None."""

    def test_options_passthrough(self) -> None:
        opts = TruncateOptions(ellipsis="!")
        assert TruncateOptions.coerce(opts) is opts

    def test_none_is_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HTMLCHOP_PRESERVE_WORDS", "1")
        assert TruncateOptions.coerce(None).preserve_words is True

    def test_string_is_ellipsis(self) -> None:
        opts = TruncateOptions.coerce(" (more)")
        assert opts.ellipsis == " (more)"
        assert opts.truncate_by is TruncateBy.WORDS

    def test_mapping(self) -> None:
        opts = TruncateOptions.coerce({"truncateBy": "blocks", "ellipsis": ""})
        assert opts.truncate_by is TruncateBy.BLOCKS
        assert opts.ellipsis == ""


class TestTruncationResult:
    """Tests for TruncationResult dataclass."""

    def test_to_dict(self) -> None:
        result = TruncationResult(content="<p>a…</p>", truncated=True, length=1, unit=TruncateBy.WORDS)
        assert result.to_dict() == {
            "content": "<p>a…</p>",
            "truncated": True,
            "length": 1,
            "unit": "words",
        }
