"""Quick, structure-discarding truncation: strip tags, then cut after N words."""

from __future__ import annotations

import re

from bs4 import BeautifulSoup

_SCRIPT_OR_STYLE = re.compile(r"<(script|style)[^>]*?>.*?</\1>", re.DOTALL | re.IGNORECASE)
_BREAKS = re.compile(r"[\r\n\t ]+")


def strip_tags(text: object, remove_breaks: bool = False) -> str:
    """Return the text content of ``text`` with all markup removed.

    Script and style blocks are dropped with their content. Non-string input
    yields an empty string.

    Args:
        text: Markup to strip.
        remove_breaks: Collapse runs of whitespace into single spaces.
    """
    if not isinstance(text, str):
        return ""

    text = _SCRIPT_OR_STYLE.sub("", text)
    text = BeautifulSoup(text, "html.parser").get_text()

    if remove_breaks:
        text = _BREAKS.sub(" ", text)

    return text.strip()


def truncate_words_quick(html: str, words: int) -> str:
    """Cut ``html`` to its first ``words`` words of plain text.

    Input whose stripped text already fits is returned unchanged, markup
    included. Otherwise the result is plain text, words joined by single
    spaces, without an ellipsis.
    """
    if words < 0:
        msg = f"words must be >= 0, got {words}"
        raise ValueError(msg)

    tokens = strip_tags(html).split()
    if len(tokens) <= words:
        return html
    return " ".join(tokens[:words])
