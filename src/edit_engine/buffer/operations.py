"""Invertible edit descriptors and cursor snapshots consumed by the histories."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING, Optional, Protocol

from .state import CursorState, Position, RangeState, SelectionState

if TYPE_CHECKING:  # pragma: no cover
    from .document import TextBuffer


class EditKind(str, Enum):
    INSERT = "insert"
    DELETE = "delete"


@dataclass(frozen=True, slots=True)
class EditOperation:
    """A primitive mutation that already happened (or should happen) to a buffer.

    ``insert`` put ``text`` at ``(row, col)``; ``delete`` removed ``text``
    starting at ``(row, col)``. Either may span lines.
    """

    kind: EditKind
    row: int
    col: int
    text: str

    @property
    def multiline(self) -> bool:
        return "\n" in self.text

    @property
    def end(self) -> Position:
        """Position just past ``text`` when it sits in the buffer at ``(row, col)``."""

        parts = self.text.split("\n")
        if len(parts) == 1:
            return Position(self.row, self.col + len(self.text))
        return Position(self.row + len(parts) - 1, len(parts[-1]))

    def inverse(self) -> "EditOperation":
        kind = EditKind.DELETE if self.kind is EditKind.INSERT else EditKind.INSERT
        return replace(self, kind=kind)

    def apply(self, buffer: "TextBuffer") -> Optional["EditOperation"]:
        if self.kind is EditKind.INSERT:
            return buffer.insert_at(self.row, self.col, self.text)
        return buffer.delete_at(self.row, self.col, self.text)


def coalesce(previous: EditOperation, incoming: EditOperation) -> Optional[EditOperation]:
    """Merge ``incoming`` into ``previous`` when they read as one keystroke run.

    Only single-character, newline-free edits of the same kind merge. Inserts
    must continue right after the previous insert; deletes must land right
    before the previous delete (repeated backspace). Returns ``None`` when the
    two cannot merge.
    """

    if previous.kind is not incoming.kind:
        return None
    if len(incoming.text) != 1 or incoming.multiline or previous.multiline:
        return None
    if previous.row != incoming.row:
        return None
    if incoming.kind is EditKind.INSERT:
        if previous.col + len(previous.text) != incoming.col:
            return None
        return replace(previous, text=previous.text + incoming.text)
    if incoming.col + len(incoming.text) != previous.col:
        return None
    return replace(previous, col=incoming.col, text=incoming.text + previous.text)


@dataclass(frozen=True, slots=True)
class CursorSnapshot:
    """Head/tail captured around an edit so undo/redo can restore them exactly."""

    head: Position
    tail: Position
    selecting: bool = False

    @classmethod
    def capture(cls, state: SelectionState) -> "CursorSnapshot":
        return cls(
            head=state.head,
            tail=state.tail,
            selecting=isinstance(state, RangeState),
        )

    def to_state(self) -> SelectionState:
        if self.selecting:
            return RangeState(anchor=self.tail, active=self.head)
        return CursorState(self.head)


class CursorTarget(Protocol):
    """What a history needs from the selection it restores."""

    def snapshot(self) -> CursorSnapshot:
        ...

    def restore(self, snapshot: CursorSnapshot) -> None:
        ...


class EditRecorder(Protocol):
    """Consumer of the operations produced by buffer primitives."""

    def record(
        self,
        operation: EditOperation,
        cursor_before: CursorSnapshot,
        *,
        combined: bool = False,
    ) -> None:
        ...

    def attach(self, cursor: CursorTarget) -> None:
        ...

    def break_coalescing(self) -> None:
        ...


__all__ = [
    "CursorSnapshot",
    "CursorTarget",
    "EditKind",
    "EditOperation",
    "EditRecorder",
    "coalesce",
]
