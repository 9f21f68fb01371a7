"""Ellipsis splicing at a truncation point."""

from __future__ import annotations

import re
import unicodedata

_TRAILING_ENTITY = re.compile(r"&(?:[A-Za-z][A-Za-z0-9]*|#[0-9]+|#[xX][0-9A-Fa-f]+);?\Z")

# Longest entity reference the trailing search needs to see.
_ENTITY_WINDOW = 40


def _is_trimmable(char: str) -> bool:
    return char.isspace() or unicodedata.category(char).startswith("P")


def trim_trailing(markup: str) -> str:
    """Strip trailing whitespace, punctuation and entity references."""
    end = len(markup)
    while end:
        match = _TRAILING_ENTITY.search(markup, max(0, end - _ENTITY_WINDOW), end)
        if match:
            end = match.start()
        elif _is_trimmable(markup[end - 1]):
            end -= 1
        else:
            break
    return markup[:end]


def splice(markup: str, ellipsis: str) -> str:
    """Trim the truncation point and append ``ellipsis`` (inserted as markup)."""
    return trim_trailing(markup) + ellipsis
