"""Markup tree adapter built on BeautifulSoup.

Parses a markup fragment into an immutable tree of ``Element``, ``Text`` and
``Other`` nodes and renders nodes back to markup. The fragment is scrubbed of
characters that are not valid in XML and wrapped in a synthetic custom element
so that multi-root input parses as a single tree. The wrapper uses a name
that input markup does not use, so a stray ``</div>`` cannot close it.

Parsing tries each configured BeautifulSoup tree builder in order. A builder
that is not installed is skipped silently; only exhausting every builder is
an error.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TypeAlias

from bs4 import BeautifulSoup, FeatureNotFound
from bs4.dammit import EntitySubstitution
from bs4.element import NavigableString, PreformattedString, Tag

from htmlchop.config import get_settings

logger = logging.getLogger(__name__)

WRAPPER_TAG = "htmlchop-fragment"
WRAPPER_OPEN = f"<{WRAPPER_TAG}>"
WRAPPER_CLOSE = f"</{WRAPPER_TAG}>"

# Text inside these elements is emitted as-is, never entity-escaped.
_VERBATIM_TAGS = frozenset({"script", "style"})

# XML 1.0 Char ranges, supplementary planes included: emoji are kept, not
# replaced by a space.
_INVALID_XML_CHARS = re.compile(r"[^\t\n\r\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]+")


class MarkupError(Exception):
    """Raised when markup cannot be parsed by any configured strategy.

    Attributes:
        strategies: Parser names that were tried, in order.
        reasons: One failure description per strategy.
    """

    def __init__(self, strategies: Sequence[str], reasons: Sequence[str]) -> None:
        self.strategies = list(strategies)
        self.reasons = list(reasons)
        detail = "; ".join(self.reasons) if self.reasons else "no parser strategies configured"
        super().__init__(f"Markup could not be parsed ({detail})")


# ---------------------------------------------------------------------------
# Node model
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Element:
    """An element with its attributes and ordered children.

    Attributes:
        name: Lowercased tag name.
        attrs: Attribute (name, value) pairs in source order.
        children: Child nodes.
        empty: True for a void element rendered as ``<name/>``.
    """

    name: str
    attrs: tuple[tuple[str, str], ...] = ()
    children: tuple[Node, ...] = ()
    empty: bool = False


@dataclass(frozen=True, slots=True)
class Text:
    """A run of decoded character data."""

    data: str
    verbatim: bool = False


@dataclass(frozen=True, slots=True)
class Other:
    """Comments, doctypes, processing instructions: passed through opaque."""

    markup: str


Node: TypeAlias = Element | Text | Other


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def scrub(markup: str) -> str:
    """Replace each run of characters invalid in XML with a single space."""
    return _INVALID_XML_CHARS.sub(" ", markup)


def parse(markup: str, parsers: Sequence[str] | None = None) -> Element:
    """Parse a fragment and return the synthetic wrapper element.

    Args:
        markup: Arbitrary, possibly multi-root, markup.
        parsers: BeautifulSoup builder names to try. Defaults to the
            configured ``parsers`` setting.

    Returns:
        The wrapper element holding the parsed fragment.

    Raises:
        MarkupError: If no strategy produced a tree.
    """
    strategies = list(parsers) if parsers is not None else list(get_settings().parsers)
    wrapped = f"{WRAPPER_OPEN}{scrub(markup)}{WRAPPER_CLOSE}"
    reasons: list[str] = []

    for name in strategies:
        try:
            soup = BeautifulSoup(wrapped, name)
        except FeatureNotFound:
            logger.debug("Parser %r is not available, falling back", name)
            reasons.append(f"{name}: not available")
            continue
        except Exception as exc:
            logger.warning("Parser %r failed: %s", name, exc)
            reasons.append(f"{name}: {exc}")
            continue

        wrapper = soup.find(WRAPPER_TAG)
        if not isinstance(wrapper, Tag):
            reasons.append(f"{name}: wrapper element missing from parse result")
            continue

        logger.debug("Parsed %d chars of markup with %r", len(markup), name)
        return _convert(wrapper)

    raise MarkupError(strategies, reasons)


def _attr_value(value: str | list[str]) -> str:
    # multi-valued attributes (class, rel, ...) come back as lists
    if isinstance(value, str):
        return value
    return " ".join(value)


def _convert(tag: Tag) -> Element:
    name = tag.name.lower()
    verbatim = name in _VERBATIM_TAGS
    children: list[Node] = []
    for child in tag.contents:
        if isinstance(child, Tag):
            children.append(_convert(child))
        elif isinstance(child, PreformattedString):
            children.append(Other(str(child.output_ready())))
        elif isinstance(child, NavigableString):
            children.append(Text(str(child), verbatim=verbatim))
    return Element(
        name=name,
        attrs=tuple((key, _attr_value(value)) for key, value in tag.attrs.items()),
        children=tuple(children),
        empty=tag.is_empty_element,
    )


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def open_tag(element: Element) -> str:
    """Render the start tag of ``element``, attributes included."""
    parts = [element.name]
    for key, value in element.attrs:
        parts.append(f"{key}={EntitySubstitution.substitute_xml(value, True)}")
    return f"<{' '.join(parts)}>"


def close_tag(element: Element) -> str:
    return f"</{element.name}>"


def render_text(text: str, *, verbatim: bool = False) -> str:
    """Escape character data for output."""
    if verbatim:
        return text
    return EntitySubstitution.substitute_xml(text)


def render(node: Node) -> str:
    """Serialize a node and its subtree to markup."""
    match node:
        case Element(empty=True, children=()):
            return open_tag(node)[:-1] + "/>"
        case Element():
            inner = "".join(render(child) for child in node.children)
            return f"{open_tag(node)}{inner}{close_tag(node)}"
        case Text(data=data, verbatim=verbatim):
            return render_text(data, verbatim=verbatim)
        case Other(markup=markup):
            return markup
