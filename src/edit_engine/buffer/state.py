"""Positions and the tagged cursor/selection state."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """Absolute ``(row, col)`` location; ordering is document order."""

    row: int
    col: int

    def shifted(self, *, rows: int = 0, cols: int = 0) -> "Position":
        return Position(self.row + rows, self.col + cols)

    def as_tuple(self) -> Tuple[int, int]:
        return (self.row, self.col)


ORIGIN = Position(0, 0)


@dataclass(frozen=True, slots=True)
class CursorState:
    """No selection: head and tail are the same position."""

    position: Position

    @property
    def head(self) -> Position:
        return self.position

    @property
    def tail(self) -> Position:
        return self.position


@dataclass(frozen=True, slots=True)
class RangeState:
    """Active selection from ``anchor`` (tail) to ``active`` (head).

    A range whose ends have equal values is still a selection; only
    ``CursorState`` means "bare cursor".
    """

    anchor: Position
    active: Position

    @property
    def head(self) -> Position:
        return self.active

    @property
    def tail(self) -> Position:
        return self.anchor

    @property
    def is_forward(self) -> bool:
        return self.anchor < self.active


SelectionState = Union[CursorState, RangeState]


def ordered(state: SelectionState) -> Tuple[Position, Position]:
    """Return ``(start, end)`` in document order."""

    if isinstance(state, CursorState):
        return (state.position, state.position)
    if state.is_forward:
        return (state.anchor, state.active)
    return (state.active, state.anchor)


__all__ = [
    "ORIGIN",
    "CursorState",
    "Position",
    "RangeState",
    "SelectionState",
    "ordered",
]
