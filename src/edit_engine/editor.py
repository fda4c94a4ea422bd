"""High-level editor façade combining buffer, viewport, selection, and history."""

from __future__ import annotations

import time
from contextlib import AbstractContextManager
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, ContextManager, Iterable, Optional, Union

from edit_engine.buffer import History, TextBuffer, UndoTree, ViewSnapshot
from edit_engine.config import EngineConfig, UndoMode
from edit_engine.runtime import telemetry
from edit_engine.selection import SelectionCursor
from edit_engine.viewport import Viewport

AnyHistory = Union[History, UndoTree]


class Interaction(IntEnum):
    """How much the input layer may do: edit, only navigate, or nothing."""

    READ_ONLY = -1
    NAVIGATE = 0
    EDIT = 1


@dataclass(frozen=True, slots=True)
class EditorStatus:
    row: int
    col: int
    line_count: int
    original_line_count: int
    byte_count: int
    indentation: int

    @property
    def coordinate(self) -> str:
        return f"Ln {self.row + 1}, Col {self.col + 1}"

    @property
    def line_summary(self) -> str:
        return (
            f"{self.line_count:,}L, originally: {self.original_line_count}L "
            f"{self.byte_count} bytes"
        )

    @property
    def spaces(self) -> str:
        return f"Spaces: {self.indentation}"


class Editor:
    """One editor instance: owns every piece of editing state exclusively.

    Mutating verbs run inside a :class:`Transaction` so each one shows up as a
    profiled ``editor::<label>`` span. Callers re-paint from :meth:`view`
    after every call; the editor never paints.
    """

    def __init__(
        self,
        text: str = "",
        *,
        config: Optional[EngineConfig] = None,
        name: str = "default",
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.name = name
        self.config = config or EngineConfig()
        self.buffer = TextBuffer(text, expand_tabs=self.config.expand_tabs)
        self.viewport = Viewport(self.buffer, size=self.config.viewport_rows)
        self.history: AnyHistory = self._make_history(clock)
        self.selection = SelectionCursor(
            self.buffer, self.viewport, config=self.config, history=self.history
        )
        self.interactive = Interaction.EDIT

    def _make_history(self, clock: Callable[[], float]) -> AnyHistory:
        timeout = self.config.coalesce_timeout_ms
        if self.config.undo_mode is UndoMode.TREE:
            return UndoTree(self.buffer, coalesce_timeout_ms=timeout, clock=clock)
        return History(self.buffer, coalesce_timeout_ms=timeout, clock=clock)

    # --------------------------------------------------------------- document

    @property
    def text(self) -> str:
        return self.buffer.text

    @text.setter
    def text(self, value: str) -> None:
        self.load(value)

    def load(self, text: str) -> None:
        """Replace the document; history and cursor start over."""

        with self.transaction("load"):
            self.buffer.set_text(text)
            self.history.clear()
            self.selection.reset()
            self.viewport.start = 0

    def append_lines(self, lines: Iterable[str]) -> None:
        with self.transaction("append_lines"):
            self.buffer.append_lines(lines)

    # ---------------------------------------------------------------- editing

    def insert(self, text: str) -> None:
        with self.transaction("insert"):
            self.selection.insert(text)

    def paste(self, text: str) -> None:
        if text:
            with self.transaction("paste"):
                self.selection.insert(text)

    def copy(self) -> str:
        return self.selection.text

    def delete(self) -> None:
        with self.transaction("delete"):
            self.selection.delete()

    def new_line(self) -> None:
        with self.transaction("new_line"):
            self.selection.new_line()

    def indent(self) -> None:
        with self.transaction("indent"):
            self.selection.indent()

    def unindent(self) -> None:
        with self.transaction("unindent"):
            self.selection.unindent()

    def undo(self) -> bool:
        with self.transaction("undo"):
            return self.history.undo()

    def redo(self) -> bool:
        with self.transaction("redo"):
            return self.history.redo()

    # ---------------------------------------------------------------- reading

    def status(self) -> EditorStatus:
        head = self.selection.head
        return EditorStatus(
            row=head.row,
            col=head.col,
            line_count=self.buffer.line_count,
            original_line_count=self.buffer.original_line_count,
            byte_count=self.buffer.byte_count,
            indentation=self.config.indentation,
        )

    def view(self) -> ViewSnapshot:
        selection = self.selection.ordered() if self.selection.is_selection else None
        return ViewSnapshot(
            start=self.viewport.start,
            lines=tuple(self.viewport.lines),
            head=self.selection.head,
            selection=selection,
            line_count=self.buffer.line_count,
            attributes={"interactive": self.interactive.name.lower()},
        )

    def transaction(self, label: str) -> "Transaction":
        return Transaction(self, label)


class Transaction(AbstractContextManager["Transaction"]):
    """Profiles one editor verb and keeps the viewport inside the buffer afterwards."""

    def __init__(self, editor: Editor, label: str) -> None:
        self.editor = editor
        self.label = label
        self._span_cm: Optional[ContextManager[telemetry.SpanHandle]] = None
        self._handle: Optional[telemetry.SpanHandle] = None
        self._version_before = 0

    def __enter__(self) -> "Transaction":
        self._version_before = self.editor.buffer.version
        self._span_cm = telemetry.span(
            name=f"editor::{self.label}",
            logger_name="edit_engine.editor",
            component="editor",
            metadata={"editor": self.editor.name},
        )
        self._handle = self._span_cm.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is None:
            self.editor.viewport.clamp()
            if self._handle is not None:
                self._handle.add_metadata(
                    "changed", self.editor.buffer.version != self._version_before
                )
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False


__all__ = ["Editor", "EditorStatus", "Interaction", "Transaction"]
