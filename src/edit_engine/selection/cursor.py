"""Cursor and selection model plus the edits a user performs through it."""

from __future__ import annotations

from typing import List, Optional, Tuple

from edit_engine.buffer import (
    CursorSnapshot,
    CursorState,
    EditRecorder,
    Position,
    RangeState,
    SelectionState,
    TextBuffer,
    ensure_position,
    ordered,
)
from edit_engine.buffer.state import ORIGIN
from edit_engine.config import EngineConfig
from edit_engine.viewport import Viewport

from . import indent as indent_math
from .words import next_boundary, previous_boundary


class SelectionCursor:
    """Head/tail pair over a :class:`TextBuffer`.

    The selection is either a bare cursor (:class:`CursorState`) or a range
    (:class:`RangeState`); the state type, not position equality, decides
    ``is_selection``. Every buffer mutation goes through ``_insert_at`` /
    ``_delete_at`` so the attached history sees each primitive together with
    the cursor state captured right before it.

    ``goal_column`` is the sticky column: horizontal moves and edits set it,
    vertical moves only read it.
    """

    def __init__(
        self,
        buffer: TextBuffer,
        viewport: Viewport,
        *,
        config: Optional[EngineConfig] = None,
        history: Optional[EditRecorder] = None,
    ) -> None:
        self.buffer = buffer
        self.viewport = viewport
        self.config = config or EngineConfig()
        self.history = history
        self._state: SelectionState = CursorState(ORIGIN)
        self.goal_column = 0
        if history is not None:
            history.attach(self)

    # ------------------------------------------------------------------ state

    @property
    def state(self) -> SelectionState:
        return self._state

    @property
    def head(self) -> Position:
        return self._state.head

    @property
    def tail(self) -> Position:
        return self._state.tail

    @property
    def is_selection(self) -> bool:
        return isinstance(self._state, RangeState)

    @property
    def is_forward_selection(self) -> bool:
        return isinstance(self._state, RangeState) and self._state.is_forward

    def ordered(self) -> Tuple[Position, Position]:
        return ordered(self._state)

    def snapshot(self) -> CursorSnapshot:
        return CursorSnapshot.capture(self._state)

    def restore(self, snapshot: CursorSnapshot) -> None:
        self._state = snapshot.to_state()
        self.goal_column = self.head.col
        self.viewport.reveal(self.head.row)

    def set_cursor(self, position: Position) -> None:
        ensure_position(self.buffer.lines, position)
        self._state = CursorState(position)
        self.goal_column = position.col
        self.viewport.reveal(position.row)

    def make_cursor(self) -> None:
        """Collapse any selection onto the head."""

        self._state = CursorState(self.head)

    def make_selection(self) -> None:
        """Begin a range anchored at the current head."""

        if not self.is_selection:
            self._state = RangeState(anchor=self.head, active=self.head)

    def select_range(self, anchor: Position, active: Position) -> None:
        """Replace the selection with ``anchor``..``active`` (e.g. a mouse drag)."""

        ensure_position(self.buffer.lines, anchor)
        ensure_position(self.buffer.lines, active)
        self._state = RangeState(anchor=anchor, active=active)
        self.goal_column = active.col
        self.viewport.reveal(active.row)

    def reset(self) -> None:
        self._state = CursorState(ORIGIN)
        self.goal_column = 0

    @property
    def text(self) -> str:
        start, end = self.ordered()
        return self.buffer.slice_text(start, end)

    @property
    def lines(self) -> List[str]:
        """Selected text split into lines (``[""]`` for a bare cursor)."""

        return self.text.split("\n")

    # --------------------------------------------------------------- movement

    def move_col(self, delta: int) -> None:
        if delta not in (1, -1):
            raise ValueError(f"move_col supports steps of 1 or -1, got {delta}")
        head = self.head
        if delta == 1:
            if head.col < len(self.buffer.lines[head.row]):
                target = Position(head.row, head.col + 1)
            elif head.row < self.buffer.last_index:
                target = Position(head.row + 1, 0)
            else:
                return
        else:
            if head.col > 0:
                target = Position(head.row, head.col - 1)
            elif head.row > 0:
                target = Position(head.row - 1, len(self.buffer.lines[head.row - 1]))
            else:
                return
        self._move_head(target, goal=True)

    def move_row(self, delta: int) -> None:
        if delta not in (1, -1):
            raise ValueError(f"move_row supports steps of 1 or -1, got {delta}")
        row = self.head.row + delta
        if row < 0 or row > self.buffer.last_index:
            return
        col = min(self.goal_column, len(self.buffer.lines[row]))
        self._move_head(Position(row, col), goal=False)

    def move_word(self) -> None:
        head = self.head
        line = self.buffer.lines[head.row]
        if head.col == len(line):
            if head.row >= self.buffer.last_index:
                return
            target = Position(head.row + 1, 0)
        else:
            target = Position(head.row, next_boundary(line, head.col))
        self._move_head(target, goal=True)

    def move_back_word(self) -> None:
        head = self.head
        if head.col == 0:
            if head.row == 0:
                return
            target = Position(head.row - 1, len(self.buffer.lines[head.row - 1]))
        else:
            line = self.buffer.lines[head.row]
            target = Position(head.row, previous_boundary(line, head.col))
        self._move_head(target, goal=True)

    def move_cursor_start_of_line(self) -> None:
        """Alternate between the first non-space column and column 0."""

        head = self.head
        first = indent_math.first_non_space(self.buffer.lines[head.row])
        col = 0 if head.col == first else first
        self._move_head(Position(head.row, col), goal=True)

    def move_cursor_end_of_line(self) -> None:
        head = self.head
        self._move_head(Position(head.row, len(self.buffer.lines[head.row])), goal=True)

    def collapse_to_start(self) -> None:
        self.set_cursor(self.ordered()[0])

    def collapse_to_end(self) -> None:
        self.set_cursor(self.ordered()[1])

    def collapse_vertical(self, direction: int) -> None:
        """Drop the selection and step one row away from its leading/trailing edge."""

        start, end = self.ordered()
        edge = end if direction > 0 else start
        row = max(0, min(edge.row + (1 if direction > 0 else -1), self.buffer.last_index))
        col = min(edge.col, len(self.buffer.lines[row]))
        self.set_cursor(Position(row, col))

    # ---------------------------------------------------------------- editing

    def insert(self, text: str) -> None:
        """Insert at the cursor, replacing the selection as one undo step."""

        text = self.config.expand_tabs(text)
        if self.is_selection:
            at, end = self.ordered()
            combined = at != end
            self._delete_selection()
            self._state = CursorState(at)
            self._insert_at(at.row, at.col, text, combined=combined)
        else:
            at = self.head
            self._insert_at(at.row, at.col, text)
        self._place_after(at, text)

    def delete(self) -> None:
        """Backspace: remove the selection, the previous character, or the line break."""

        if self.is_selection:
            self.insert("")
            return
        head = self.head
        if head.col > 0:
            ch = self.buffer.lines[head.row][head.col - 1]
            self._delete_at(head.row, head.col - 1, ch)
            target = Position(head.row, head.col - 1)
        elif head.row > 0:
            prev_len = len(self.buffer.lines[head.row - 1])
            self._delete_at(head.row - 1, prev_len, "\n")
            target = Position(head.row - 1, prev_len)
        else:
            return
        self._state = CursorState(target)
        self.goal_column = target.col
        self.viewport.reveal(target.row)

    def new_line(self) -> None:
        combined = False
        if self.is_selection:
            start, end = self.ordered()
            combined = start != end
            self._delete_selection()
            self._state = CursorState(start)
        at = self.head
        self._insert_at(at.row, at.col, "\n", combined=combined)
        self._place_after(at, "\n")

    def indent(self) -> None:
        """Prefix every selected line with ``indentation`` spaces."""

        width = self.config.indentation
        if not self.is_selection or width == 0:
            return
        start, end = self.ordered()
        pad = " " * width
        self._seal()
        for offset, row in enumerate(range(start.row, end.row + 1)):
            self._insert_at(row, 0, pad, combined=offset > 0)
        state = self._state
        assert isinstance(state, RangeState)
        self._state = RangeState(
            anchor=state.anchor.shifted(cols=width),
            active=state.active.shifted(cols=width),
        )
        self.goal_column = self.head.col
        self._seal()

    def unindent(self) -> None:
        """Remove up to ``indentation`` leading spaces from every touched line."""

        width = self.config.indentation
        start, end = self.ordered()
        removed: dict[int, Tuple[int, int]] = {}
        self._seal()
        for row in range(start.row, end.row + 1):
            line = self.buffer.lines[row]
            count = indent_math.unindent_width(line, width)
            if count:
                self._delete_at(row, 0, " " * count, combined=bool(removed))
                removed[row] = (indent_math.leading_spaces(line), count)
        if not removed:
            return

        def adjust(position: Position) -> Position:
            if position.row not in removed:
                return position
            leading, count = removed[position.row]
            col = indent_math.edge_column_after_unindent(position.col, leading, count)
            return Position(position.row, col)

        state = self._state
        if isinstance(state, RangeState):
            self._state = RangeState(anchor=adjust(state.anchor), active=adjust(state.active))
        else:
            self._state = CursorState(adjust(state.position))
        self.goal_column = self.head.col
        self._seal()

    # -------------------------------------------------------------- internals

    def _move_head(self, target: Position, *, goal: bool) -> None:
        state = self._state
        if isinstance(state, RangeState):
            self._state = RangeState(anchor=state.anchor, active=target)
        else:
            self._state = CursorState(target)
        if goal:
            self.goal_column = target.col
        self.viewport.reveal(target.row)

    def _place_after(self, at: Position, text: str) -> None:
        segments = text.split("\n")
        if len(segments) == 1:
            target = Position(at.row, at.col + len(text))
        else:
            target = Position(at.row + len(segments) - 1, len(segments[-1]))
        self._state = CursorState(target)
        self.goal_column = target.col
        self.viewport.reveal(target.row)

    def _delete_selection(self) -> None:
        # A replace always opens its own undo step.
        self._seal()
        start, end = self.ordered()
        self._delete_at(start.row, start.col, self.buffer.slice_text(start, end))

    def _insert_at(self, row: int, col: int, text: str, *, combined: bool = False) -> None:
        before = self.snapshot()
        operation = self.buffer.insert_at(row, col, text)
        if operation is not None and self.history is not None:
            self.history.record(operation, before, combined=combined)

    def _delete_at(self, row: int, col: int, text: str, *, combined: bool = False) -> None:
        before = self.snapshot()
        operation = self.buffer.delete_at(row, col, text)
        if operation is not None and self.history is not None:
            self.history.record(operation, before, combined=combined)

    def _seal(self) -> None:
        if self.history is not None:
            self.history.break_coalescing()

    def check_invariants(self) -> None:
        """Raise :class:`BufferValidationError` if the head or tail sits outside the buffer."""

        for position in (self.head, self.tail):
            ensure_position(self.buffer.lines, position)


__all__ = ["SelectionCursor"]
