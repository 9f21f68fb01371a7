"""Pydantic models and enums for htmlchop."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from htmlchop.config import get_settings


class TruncateBy(StrEnum):
    """Unit in which the truncation length is measured."""

    WORDS = "words"
    CHARS = "chars"
    SENTENCES = "sentences"
    BLOCKS = "blocks"


class TruncateOptions(BaseModel):
    """Immutable truncation options.

    Accepts both snake_case field names and the camelCase aliases
    (``truncateBy``, ``preserveWords``).
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    ellipsis: str = "…"
    truncate_by: TruncateBy = TruncateBy.WORDS
    preserve_words: bool = False

    @classmethod
    def from_settings(cls, **overrides: Any) -> TruncateOptions:
        """Build options from the configured defaults, applying ``overrides``.

        Only the fields explicitly present in ``overrides`` replace the
        settings-derived defaults.
        """
        settings = get_settings()
        explicit = cls.model_validate(overrides)
        values: dict[str, Any] = {
            "ellipsis": settings.ellipsis,
            "truncate_by": settings.truncate_by,
            "preserve_words": settings.preserve_words,
        }
        for name in explicit.model_fields_set:
            values[name] = getattr(explicit, name)
        return cls(**values)

    @classmethod
    def coerce(cls, opts: TruncateOptions | Mapping[str, Any] | str | None) -> TruncateOptions:
        """Normalize the accepted option shapes into a TruncateOptions.

        ``None`` yields the configured defaults, a plain string is taken as the
        ellipsis marker, and a mapping is validated field by field.
        """
        if isinstance(opts, TruncateOptions):
            return opts
        if opts is None:
            return cls.from_settings()
        if isinstance(opts, str):
            return cls.from_settings(ellipsis=opts)
        return cls.from_settings(**dict(opts))


@dataclass(frozen=True)
class TruncationResult:
    """Result of an HTML truncation.

    Attributes:
        content: Truncated markup (with ellipsis if truncated).
        truncated: Whether any content was cut.
        length: Requested length.
        unit: Unit the length was measured in.
    """

    content: str
    truncated: bool
    length: int
    unit: TruncateBy

    def to_dict(self) -> dict[str, Any]:
        return {
            "content": self.content,
            "truncated": self.truncated,
            "length": self.length,
            "unit": self.unit.value,
        }
