"""Length-bounded HTML truncation.

The default strategy walks the tree depth-first, left to right, spending a
single budget of words, characters or sentences. Every unit kept anywhere in
a left subtree is unavailable to everything to its right. Each element is
rebuilt bottom-up from the markup of its truncated children, so tags always
stay balanced.

When the budget runs out, the nearest enclosing *ellipsable* element (or the
synthetic root) gets the ellipsis marker, once per call. Block truncation
is the shallow alternative: it keeps whole top-level block elements.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterator, Mapping
from typing import Any, NamedTuple

from htmlchop.counters import CharCounter, SentenceCounter, WordCounter, counter_for
from htmlchop.ellipsis import splice
from htmlchop.markup import (
    WRAPPER_CLOSE,
    WRAPPER_OPEN,
    Element,
    Node,
    Other,
    Text,
    close_tag,
    open_tag,
    parse,
    render,
    render_text,
)
from htmlchop.models import TruncateBy, TruncateOptions, TruncationResult

logger = logging.getLogger(__name__)

# Elements that may receive the ellipsis as trailing content.
ELLIPSABLE_TAGS = frozenset(
    {
        "p",
        "ol",
        "ul",
        "li",
        "div",
        "header",
        "article",
        "nav",
        "section",
        "footer",
        "aside",
        "dd",
        "dt",
        "dl",
    }
)

# Content-less elements, kept whenever they are reached with budget to spare.
SELF_CLOSING_TAGS = frozenset({"br", "hr", "img"})

# Units of selection for block truncation.
BLOCK_TAGS = frozenset(
    {
        "p",
        "ul",
        "ol",
        "div",
        "header",
        "article",
        "nav",
        "section",
        "footer",
        "aside",
        "dd",
        "dt",
        "dl",
    }
)


class Cut(NamedTuple):
    """Outcome of truncating one node.

    Attributes:
        markup: Serialized (possibly truncated) node, empty when elided.
        leftover: Budget remaining after the node, >= 0.
        truncated: Whether the ellipsis has been placed so far in this call.
    """

    markup: str
    leftover: int
    truncated: bool


# ---------------------------------------------------------------------------
# Node truncation (words, chars, sentences)
# ---------------------------------------------------------------------------


class NodeTruncator:
    """Recursive, budget-propagating truncation of an element tree."""

    def __init__(self, options: TruncateOptions) -> None:
        self.options = options
        self.counter = counter_for(options)
        self._root: Element | None = None

    def truncate(self, root: Element, budget: int) -> Cut:
        """Truncate ``root``, which is treated as ellipsable whatever its tag."""
        self._root = root
        return self._element(root, budget, truncated=False)

    def _ellipsable(self, element: Element) -> bool:
        return element is self._root or element.name in ELLIPSABLE_TAGS

    def _element(self, element: Element, budget: int, truncated: bool) -> Cut:
        if budget == 0 and not self._ellipsable(element):
            return Cut("", 0, truncated)

        inner = self._children(element, budget, truncated)
        leftover = max(inner.leftover, 0)
        if not inner.markup:
            markup = render(element) if element.name in SELF_CLOSING_TAGS else ""
            return Cut(markup, leftover, inner.truncated)
        return Cut(
            f"{open_tag(element)}{inner.markup}{close_tag(element)}",
            leftover,
            inner.truncated,
        )

    def _children(self, element: Element, budget: int, truncated: bool) -> Cut:
        parts: list[str] = []
        remaining = budget
        dropped = False
        for child in element.children:
            match child:
                case Element():
                    sub = self._element(child, remaining, truncated)
                    remaining = sub.leftover
                    truncated = sub.truncated
                    parts.append(sub.markup)
                case Text(data=data, verbatim=verbatim):
                    kept = self.counter.take(data, remaining)
                    remaining = kept.leftover
                    dropped = dropped or kept.cut
                    parts.append(render_text(kept.text, verbatim=verbatim))
                case Other():
                    pass

            if remaining <= 0:
                return self._stop(element, parts, truncated)

        # text was dropped and nothing after it spent the leftover
        if dropped:
            return self._stop(element, parts, truncated)
        return Cut("".join(parts), remaining, truncated)

    def _stop(self, element: Element, parts: list[str], truncated: bool) -> Cut:
        markup = "".join(parts)
        if self._ellipsable(element):
            markup = splice(markup, "" if truncated else self.options.ellipsis)
            truncated = True
        return Cut(markup, 0, truncated)


# ---------------------------------------------------------------------------
# Block truncation
# ---------------------------------------------------------------------------


def _carries_content(node: Node) -> bool:
    match node:
        case Element(name=name):
            return name in BLOCK_TAGS
        case Text(data=data):
            return bool(data.strip())
    return False


class BlockTruncator:
    """Keeps whole top-level block elements until the block budget is spent.

    Non-block elements are dropped without counting. Text between blocks is
    carried through while budget remains; comments are dropped. Blocks are
    never descended into.
    """

    def __init__(self, options: TruncateOptions) -> None:
        self.options = options

    def truncate(self, root: Element, budget: int) -> Cut:
        kept: list[Node] = []
        dropped: tuple[Node, ...] = ()
        remaining = budget

        for position, child in enumerate(root.children):
            if remaining <= 0:
                dropped = root.children[position:]
                break
            match child:
                case Element(name=name) if name in BLOCK_TAGS:
                    kept.append(child)
                    remaining -= 1
                case Text(data=data) if data:
                    kept.append(child)

        truncated = any(_carries_content(node) for node in dropped)
        if truncated:
            kept = self._append_ellipsis(kept)

        result = dataclasses.replace(root, children=tuple(kept))
        return Cut(render(result), max(remaining, 0), truncated)

    def _append_ellipsis(self, kept: list[Node]) -> list[Node]:
        marker = Other(self.options.ellipsis)
        for index in range(len(kept) - 1, -1, -1):
            node = kept[index]
            if isinstance(node, Element):
                kept[index] = dataclasses.replace(node, children=(*node.children, marker))
                return kept
        return [*kept, marker]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def _strip_wrapper(markup: str) -> str:
    if markup.startswith(WRAPPER_OPEN) and markup.endswith(WRAPPER_CLOSE):
        return markup[len(WRAPPER_OPEN) : -len(WRAPPER_CLOSE)]
    return markup


def truncate_html(
    html: str,
    length: int,
    options: TruncateOptions | Mapping[str, Any] | str | None = None,
) -> TruncationResult:
    """Truncate an HTML fragment and report whether anything was cut.

    Args:
        html: Markup fragment, possibly with several top-level nodes.
        length: Budget in the unit selected by ``options.truncate_by``.
        options: TruncateOptions, a mapping of option fields, an ellipsis
            string, or None for the configured defaults.

    Returns:
        TruncationResult with the truncated markup.

    Raises:
        MarkupError: If the markup cannot be parsed.
        TypeError: If ``html`` is not a string.
        ValueError: If ``length`` is negative.
    """
    if not isinstance(html, str):
        msg = f"html must be a string, got {type(html).__name__}"
        raise TypeError(msg)
    if length < 0:
        msg = f"length must be >= 0, got {length}"
        raise ValueError(msg)

    opts = TruncateOptions.coerce(options)
    root = parse(html)

    if opts.truncate_by is TruncateBy.BLOCKS:
        cut = BlockTruncator(opts).truncate(root, length)
    else:
        cut = NodeTruncator(opts).truncate(root, length)

    logger.debug(
        "Truncated to %d %s (truncated=%s, %d -> %d chars)",
        length,
        opts.truncate_by.value,
        cut.truncated,
        len(html),
        len(cut.markup),
    )
    return TruncationResult(
        content=_strip_wrapper(cut.markup),
        truncated=cut.truncated,
        length=length,
        unit=opts.truncate_by,
    )


def truncate(
    html: str,
    length: int,
    options: TruncateOptions | Mapping[str, Any] | str | None = None,
) -> str:
    """Truncate an HTML fragment to ``length`` units, keeping markup valid."""
    return truncate_html(html, length, options).content


def _iter_text(element: Element) -> Iterator[str]:
    for child in element.children:
        match child:
            case Element():
                yield from _iter_text(child)
            case Text(data=data):
                yield data


def measure(html: str) -> dict[TruncateBy, int]:
    """Count the units of ``html`` for every truncation strategy."""
    root = parse(html)
    texts = list(_iter_text(root))
    words, chars, sentences = WordCounter(), CharCounter(), SentenceCounter()
    return {
        TruncateBy.WORDS: sum(words.count(text) for text in texts),
        TruncateBy.CHARS: sum(chars.count(text) for text in texts),
        TruncateBy.SENTENCES: sum(sentences.count(text) for text in texts),
        TruncateBy.BLOCKS: sum(
            1
            for child in root.children
            if isinstance(child, Element) and child.name in BLOCK_TAGS
        ),
    }
