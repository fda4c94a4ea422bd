"""Validation helpers shared across buffer services."""

from __future__ import annotations

from typing import Sequence

from .state import Position
from .sync import BufferValidationError


def ensure_row(lines: Sequence[str], row: int) -> int:
    if row < 0 or row >= len(lines):
        raise BufferValidationError(
            f"Row {row} out of range (0..{len(lines) - 1})", position=Position(row, 0)
        )
    return row


def ensure_position(lines: Sequence[str], position: Position) -> Position:
    ensure_row(lines, position.row)
    line = lines[position.row]
    if position.col < 0 or position.col > len(line):
        raise BufferValidationError(
            f"Column {position.col} out of range (0..{len(line)}) on row {position.row}",
            position=position,
        )
    return position
