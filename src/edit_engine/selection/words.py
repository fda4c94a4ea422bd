"""Word-boundary policy for word-wise cursor movement.

Characters fall into three classes: whitespace, word characters (letters,
decimal digits and underscore, Unicode-aware) and everything else. A
punctuation "word" is a run of the *same* character, so ``===`` is one unit
while ``=-=`` is three.
"""

from __future__ import annotations

from enum import Enum


class CharClass(Enum):
    SPACE = "space"
    WORD = "word"
    PUNCT = "punct"


def classify(ch: str) -> CharClass:
    if ch.isspace():
        return CharClass.SPACE
    if ch.isalpha() or ch.isdecimal() or ch == "_":
        return CharClass.WORD
    return CharClass.PUNCT


def _is_word(ch: str) -> bool:
    return classify(ch) is CharClass.WORD


def next_boundary(line: str, col: int) -> int:
    """Column reached by one forward word step from ``col`` (``col < len(line)``)."""

    n = len(line)
    j = col
    kind = classify(line[j])
    if kind is CharClass.SPACE:
        while j < n and line[j].isspace():
            j += 1
        while j < n and _is_word(line[j]):
            j += 1
    elif kind is CharClass.WORD:
        while j < n and _is_word(line[j]):
            j += 1
    else:
        ch = line[j]
        while j < n and line[j] == ch:
            j += 1
    return j


def previous_boundary(line: str, col: int) -> int:
    """Column reached by one backward word step from ``col`` (``col > 0``)."""

    j = col
    kind = classify(line[j - 1])
    if kind is CharClass.SPACE:
        while j > 0 and line[j - 1].isspace():
            j -= 1
        while j > 0 and _is_word(line[j - 1]):
            j -= 1
    elif kind is CharClass.WORD:
        while j > 0 and _is_word(line[j - 1]):
            j -= 1
    else:
        ch = line[j - 1]
        while j > 0 and line[j - 1] == ch:
            j -= 1
    return j


__all__ = ["CharClass", "classify", "next_boundary", "previous_boundary"]
