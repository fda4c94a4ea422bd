"""Cursor/selection model with word, line and indentation policies."""

from .cursor import SelectionCursor
from .words import CharClass, classify, next_boundary, previous_boundary

__all__ = [
    "CharClass",
    "SelectionCursor",
    "classify",
    "next_boundary",
    "previous_boundary",
]
