"""htmlchop - Truncate HTML fragments without breaking markup."""

from __future__ import annotations

__version__ = "0.1.0"

from htmlchop.markup import MarkupError
from htmlchop.models import TruncateBy, TruncateOptions, TruncationResult
from htmlchop.quick import strip_tags, truncate_words_quick
from htmlchop.truncator import measure, truncate, truncate_html

__all__ = [
    "__version__",
    "MarkupError",
    "TruncateBy",
    "TruncateOptions",
    "TruncationResult",
    "measure",
    "strip_tags",
    "truncate",
    "truncate_html",
    "truncate_words_quick",
]
