"""Budget counters: measure a text run and cut it to a remaining budget.

One counter per text unit (words, characters, sentences). Each counter's
``take`` returns the kept prefix of the run together with the budget left
over for the content that follows it. The leftover is never negative.
"""

from __future__ import annotations

import re
from typing import NamedTuple, Protocol

from htmlchop.models import TruncateBy, TruncateOptions

# A word keeps its leading whitespace so that kept words reassemble exactly.
# No-break spaces join words instead of separating them.
_WORD = re.compile(r"[^\S\xa0]*[\S\xa0]+")

# A sentence runs up to one or more terminal marks followed by whitespace or
# the end of the run; the single trailing whitespace character is included.
_SENTENCE = re.compile(r".*?[.!?]+(?:\s|\Z)", re.DOTALL)


class Slice(NamedTuple):
    """Kept part of a text run and the budget remaining after it.

    ``cut`` is set when anything other than whitespace was dropped from the
    end of the run.
    """

    text: str
    leftover: int
    cut: bool = False


class BudgetCounter(Protocol):
    """Protocol for per-unit counting strategies."""

    def count(self, text: str) -> int:
        """Return the number of units in ``text``."""
        ...

    def take(self, text: str, budget: int) -> Slice:
        """Keep as much of ``text`` as ``budget`` allows.

        Args:
            text: Decoded text run.
            budget: Units still available, >= 0.

        Returns:
            Slice with the kept prefix and the leftover budget.
        """
        ...


def split_words(text: str) -> list[str]:
    """Split into whitespace-delimited words, each with its leading whitespace."""
    return _WORD.findall(text)


def split_sentences(text: str) -> list[str]:
    return _SENTENCE.findall(text)


def _slice(text: str, kept: str, leftover: int) -> Slice:
    return Slice(kept, leftover, bool(text[len(kept) :].strip()))


class WordCounter:
    """Counts whitespace-delimited words."""

    def count(self, text: str) -> int:
        return len(split_words(text))

    def take(self, text: str, budget: int) -> Slice:
        words = split_words(text)
        if budget > len(words):
            return Slice(text, budget - len(words))
        return _slice(text, "".join(words[:budget]), 0)


class CharCounter:
    """Counts characters (code points).

    When the run does not fit, whole words are kept while they fit. The word
    that overflows is either cut to the remaining characters or, with
    ``preserve_words``, dropped. A run holding a single word is always cut at
    the character boundary.
    """

    def __init__(self, preserve_words: bool = False) -> None:
        self.preserve_words = preserve_words

    def count(self, text: str) -> int:
        return len(text)

    def take(self, text: str, budget: int) -> Slice:
        if budget >= len(text):
            return Slice(text, budget - len(text))

        words = split_words(text)
        if len(words) <= 1:
            kept = text[:budget]
            return _slice(text, kept, budget - len(kept))

        parts: list[str] = []
        used = 0
        for word in words:
            room = budget - used
            if len(word) > room:
                if not self.preserve_words:
                    parts.append(word[:room])
                    used = budget
                break
            parts.append(word)
            used += len(word)
        return _slice(text, "".join(parts), budget - used)


class SentenceCounter:
    """Counts sentences ending in ``.``, ``!`` or ``?``.

    Trailing text without terminal punctuation does not count as a sentence;
    it is kept only when the whole run fits.
    """

    def count(self, text: str) -> int:
        return len(split_sentences(text))

    def take(self, text: str, budget: int) -> Slice:
        sentences = split_sentences(text)
        if budget > 0 and budget >= len(sentences):
            return Slice(text, budget - len(sentences))
        return _slice(text, "".join(sentences[:budget]), 0)


def counter_for(options: TruncateOptions) -> BudgetCounter:
    """Return the counter for the options' truncation unit.

    Raises:
        ValueError: For block truncation, which counts elements, not text.
    """
    match options.truncate_by:
        case TruncateBy.WORDS:
            return WordCounter()
        case TruncateBy.CHARS:
            return CharCounter(preserve_words=options.preserve_words)
        case TruncateBy.SENTENCES:
            return SentenceCounter()
    msg = f"no text counter for truncate_by={options.truncate_by.value!r}"
    raise ValueError(msg)
