"""Column arithmetic for indent/unindent.

Unindent follows IntelliJ rather than VSCode or Vim: every selected line loses
up to ``width`` leading spaces, never more than it has and never any
non-space character. For the selection edges, spaces to the right of the edge
are considered removed first, so the edge column only moves by what was taken
from its left.
"""

from __future__ import annotations


def leading_spaces(line: str) -> int:
    count = 0
    for ch in line:
        if ch != " ":
            break
        count += 1
    return count


def first_non_space(line: str) -> int:
    """Column of the first non-space character, ``0`` for blank lines."""

    count = leading_spaces(line)
    return 0 if count == len(line) else count


def unindent_width(line: str, width: int) -> int:
    return min(width, leading_spaces(line))


def edge_column_after_unindent(col: int, leading: int, removed: int) -> int:
    """New column of a selection edge on a line that lost ``removed`` leading spaces."""

    right_of_edge = max(0, leading - col)
    return col - max(0, removed - right_of_edge)


__all__ = [
    "edge_column_after_unindent",
    "first_non_space",
    "leading_spaces",
    "unindent_width",
]
