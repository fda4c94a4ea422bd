"""Linear undo/redo with time-windowed coalescing."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from edit_engine.runtime import telemetry

from .document import TextBuffer
from .operations import (
    CursorSnapshot,
    CursorTarget,
    EditKind,
    EditOperation,
    coalesce,
)


@dataclass(slots=True)
class UndoEntry:
    operation: EditOperation
    cursor_before: CursorSnapshot
    combined: bool = False
    cursor_after: Optional[CursorSnapshot] = None
    mergeable: bool = False

    @property
    def kind(self) -> EditKind:
        return self.operation.kind

    @property
    def row(self) -> int:
        return self.operation.row

    @property
    def col(self) -> int:
        return self.operation.col

    @property
    def text(self) -> str:
        return self.operation.text


class CoalesceClock:
    """Remembers when the last edit happened and answers "is this one close enough"."""

    def __init__(self, timeout_ms: int, clock: Callable[[], float]) -> None:
        self.timeout_ms = timeout_ms
        self._clock = clock
        self._last: Optional[float] = None

    def tick(self) -> bool:
        """Stamp the current edit; return whether it falls inside the window."""

        now = self._clock()
        within = self._last is not None and (now - self._last) * 1000 <= self.timeout_ms
        self._last = now
        return within

    def reset(self) -> None:
        self._last = None


class History:
    """Undo and redo stacks of primitive operations.

    New edits clear the redo stack. Entries flagged ``combined`` are undone and
    redone together with the entry before them, so a selection replace (delete
    followed by insert) behaves as one step.
    """

    def __init__(
        self,
        buffer: TextBuffer,
        *,
        coalesce_timeout_ms: int = 500,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.buffer = buffer
        self._undo: List[UndoEntry] = []
        self._redo: List[UndoEntry] = []
        self._timer = CoalesceClock(coalesce_timeout_ms, clock)
        self._cursor: Optional[CursorTarget] = None

    @property
    def coalesce_timeout_ms(self) -> int:
        return self._timer.timeout_ms

    @property
    def undo_stack(self) -> Tuple[UndoEntry, ...]:
        return tuple(self._undo)

    @property
    def redo_stack(self) -> Tuple[UndoEntry, ...]:
        return tuple(self._redo)

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    def attach(self, cursor: CursorTarget) -> None:
        self._cursor = cursor

    def record(
        self,
        operation: EditOperation,
        cursor_before: CursorSnapshot,
        *,
        combined: bool = False,
    ) -> None:
        within_window = self._timer.tick()
        top = self._undo[-1] if self._undo else None
        merged = None
        if top is not None and top.mergeable and within_window and not combined:
            merged = coalesce(top.operation, operation)

        if merged is not None:
            assert top is not None
            top.operation = merged
        else:
            self._undo.append(
                UndoEntry(
                    operation=operation,
                    cursor_before=cursor_before,
                    combined=combined and bool(self._undo),
                    mergeable=len(operation.text) == 1 and not operation.multiline,
                )
            )
        self._redo.clear()

    def undo(self) -> bool:
        if not self._undo:
            return False
        with telemetry.span(
            "history::undo",
            logger_name="edit_engine.history",
            component="history",
            metadata={"depth": len(self._undo)},
        ) as handle:
            cursor_now = self._snapshot()
            entry = self._undo.pop()
            self._revert(entry, cursor_now)
            steps = 1
            while entry.combined and self._undo:
                entry = self._undo.pop()
                self._revert(entry, cursor_now)
                steps += 1
            self._restore(entry.cursor_before)
            self._timer.reset()
            handle.add_metadata("steps", steps)
        return True

    def redo(self) -> bool:
        if not self._redo:
            return False
        with telemetry.span(
            "history::redo",
            logger_name="edit_engine.history",
            component="history",
            metadata={"depth": len(self._redo)},
        ) as handle:
            entry = self._redo.pop()
            self._replay(entry)
            steps = 1
            while self._redo and self._redo[-1].combined:
                entry = self._redo.pop()
                self._replay(entry)
                steps += 1
            if entry.cursor_after is not None:
                self._restore(entry.cursor_after)
            self._timer.reset()
            handle.add_metadata("steps", steps)
        return True

    def clear(self) -> None:
        self._undo.clear()
        self._redo.clear()
        self._timer.reset()

    def break_coalescing(self) -> None:
        """Force the next edit into its own entry regardless of timing."""

        self._timer.reset()

    def _revert(self, entry: UndoEntry, cursor_now: Optional[CursorSnapshot]) -> None:
        entry.operation.inverse().apply(self.buffer)
        entry.cursor_after = cursor_now
        self._redo.append(entry)

    def _replay(self, entry: UndoEntry) -> None:
        entry.operation.apply(self.buffer)
        self._undo.append(entry)

    def _snapshot(self) -> Optional[CursorSnapshot]:
        return self._cursor.snapshot() if self._cursor is not None else None

    def _restore(self, snapshot: CursorSnapshot) -> None:
        if self._cursor is not None:
            self._cursor.restore(snapshot)


__all__ = ["CoalesceClock", "History", "UndoEntry"]
