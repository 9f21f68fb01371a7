"""Centralized configuration for htmlchop.

All settings are configurable via environment variables with the ``HTMLCHOP_``
prefix.  For example, ``HTMLCHOP_ELLIPSIS`` overrides the default marker.

Environment Variables
---------------------
HTMLCHOP_ELLIPSIS : str
    Marker appended at the truncation point.
    Default: ``…``
HTMLCHOP_TRUNCATE_BY : str
    Default counting strategy. One of: words, chars, sentences, blocks.
    Default: ``words``
HTMLCHOP_PRESERVE_WORDS : bool
    In char mode, stop at a whole-word boundary instead of splitting a word.
    Default: ``false``
HTMLCHOP_PARSERS : JSON list
    BeautifulSoup tree builders to try, in order. A builder that is not
    installed is skipped silently.
    Default: ``["lxml", "html.parser"]``
HTMLCHOP_LOG_LEVEL : str
    Logging level used by the CLI. One of: DEBUG, INFO, WARNING, ERROR, CRITICAL.
    Default: ``INFO``
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_DEFAULT_PARSERS = ("lxml", "html.parser")


class HtmlchopSettings(BaseSettings):
    """Centralized settings for htmlchop.

    All fields can be overridden via environment variables prefixed with
    ``HTMLCHOP_``.  See module docstring for the full list.
    """

    model_config = SettingsConfigDict(
        env_prefix="HTMLCHOP_",
    )

    # Truncation defaults
    ellipsis: str = "…"
    truncate_by: Literal["words", "chars", "sentences", "blocks"] = "words"
    preserve_words: bool = False

    # Markup parsing
    parsers: list[str] = Field(default_factory=lambda: list(_DEFAULT_PARSERS), min_length=1)

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, v: str) -> str:
        """Normalize log level to uppercase and validate."""
        return v.upper() if isinstance(v, str) else v

    @field_validator("truncate_by", mode="before")
    @classmethod
    def _normalize_truncate_by(cls, v: str) -> str:
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("parsers", mode="after")
    @classmethod
    def _validate_parsers(cls, v: list[str]) -> list[str]:
        """Reject blank parser names."""
        names = [name.strip() for name in v]
        if any(not name for name in names):
            msg = "parsers must not contain blank names"
            raise ValueError(msg)
        return names


# ---------------------------------------------------------------------------
# Singleton / cached accessor
# ---------------------------------------------------------------------------

_settings_instance: HtmlchopSettings | None = None


def get_settings() -> HtmlchopSettings:
    """Return the cached HtmlchopSettings singleton.

    Creates the instance on first call, then returns the same object
    on subsequent calls.  Use :func:`_clear_settings_cache` in tests
    to reset.

    Returns
    -------
    HtmlchopSettings
        The application settings instance.
    """
    global _settings_instance  # noqa: PLW0603
    if _settings_instance is None:
        _settings_instance = HtmlchopSettings()
    return _settings_instance


def _clear_settings_cache() -> None:
    """Clear the settings singleton cache.

    Intended for test teardown so each test can start with fresh settings.
    """
    global _settings_instance  # noqa: PLW0603
    _settings_instance = None
