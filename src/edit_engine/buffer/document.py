"""Line-based document storage for the editing engine."""

from __future__ import annotations

from typing import Callable, Iterable, List, Optional, Sequence

from edit_engine.runtime import telemetry

from .operations import EditKind, EditOperation
from .state import Position
from .sync import BufferValidationError
from .validation import ensure_position, ensure_row


def _identity(text: str) -> str:
    return text


class TextBuffer:
    """Ordered, mutable list of lines; the single source of truth for content.

    The buffer always holds at least one line: an empty document is ``[""]``.
    ``insert_at`` and ``delete_at`` are exact inverses of each other and return
    the :class:`EditOperation` they performed so a history can record it.
    """

    def __init__(
        self,
        text: str = "",
        *,
        expand_tabs: Callable[[str], str] = _identity,
    ) -> None:
        self._expand_tabs = expand_tabs
        self._lines: List[str] = [""]
        self.byte_count = 0
        self.original_line_count = 1
        self.version = 0
        if text:
            self.text = text

    @property
    def lines(self) -> Sequence[str]:
        """Live, read-only view of the document lines.

        The same list backs every edit, so it reflects later changes. Never
        mutate it; go through ``insert_at``/``delete_at``/``splice`` or use
        :meth:`snapshot` for a stable copy.
        """

        return self._lines

    def snapshot(self) -> tuple[str, ...]:
        return tuple(self._lines)

    @property
    def last_index(self) -> int:
        return len(self._lines) - 1

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def get_line(self, index: int) -> str:
        return self._lines[ensure_row(self._lines, index)]

    @property
    def text(self) -> str:
        return "\n".join(self._lines)

    @text.setter
    def text(self, value: str) -> None:
        self.set_text(value)

    def set_text(self, text: str) -> None:
        """Replace the whole document and reset the load counters."""

        text = self._expand_tabs(text)
        self._lines = text.split("\n")
        self.byte_count = len(text.encode("utf-8"))
        self.original_line_count = len(self._lines)
        self.version += 1
        telemetry.record_event(
            "buffer.load",
            level="debug",
            data={"lines": len(self._lines), "bytes": self.byte_count},
            logger_name="edit_engine.buffer",
        )

    def append_lines(self, lines: Iterable[str]) -> None:
        """Bulk-append whole lines, as a streaming loader would."""

        self._lines.extend(self._expand_tabs(line) for line in lines)
        self.version += 1

    def splice(self, index: int, new_lines: Iterable[str], remove_count: int = 0) -> None:
        if index < 0 or index > len(self._lines):
            raise BufferValidationError(
                f"Splice index {index} out of range", position=Position(index, 0)
            )
        self._lines[index : index + remove_count] = list(new_lines)
        if not self._lines:
            self._lines.append("")
        self.version += 1

    def delete_line(self, index: int) -> None:
        ensure_row(self._lines, index)
        del self._lines[index]
        if not self._lines:
            self._lines.append("")
        self.version += 1

    def slice_text(self, start: Position, end: Position) -> str:
        """Return the text between two positions (``end`` exclusive)."""

        ensure_position(self._lines, start)
        ensure_position(self._lines, end)
        if end < start:
            start, end = end, start
        if start.row == end.row:
            return self._lines[start.row][start.col : end.col]
        parts = [self._lines[start.row][start.col :]]
        parts.extend(self._lines[start.row + 1 : end.row])
        parts.append(self._lines[end.row][: end.col])
        return "\n".join(parts)

    def insert_at(self, row: int, col: int, text: str) -> Optional[EditOperation]:
        """Insert ``text`` (which may contain newlines) at ``(row, col)``."""

        if not text:
            return None
        ensure_position(self._lines, Position(row, col))
        line = self._lines[row]
        before, after = line[:col], line[col:]
        segments = text.split("\n")
        if len(segments) == 1:
            self._lines[row] = before + text + after
        else:
            self._lines[row] = before + segments[0]
            tail = segments[1:]
            tail[-1] = tail[-1] + after
            self._lines[row + 1 : row + 1] = tail
        self.version += 1
        return EditOperation(EditKind.INSERT, row, col, text)

    def delete_at(self, row: int, col: int, text: str) -> Optional[EditOperation]:
        """Remove ``text`` starting at ``(row, col)``; it must match the buffer."""

        if not text:
            return None
        start = ensure_position(self._lines, Position(row, col))
        segments = text.split("\n")
        end_row = row + len(segments) - 1
        if end_row > self.last_index:
            raise BufferValidationError(
                f"Delete of {len(segments)} line(s) runs past the document end",
                position=start,
            )
        end_col = len(segments[-1]) if len(segments) > 1 else col + len(text)
        if end_col > len(self._lines[end_row]):
            raise BufferValidationError(
                "Delete runs past the end of the line", position=Position(end_row, end_col)
            )
        actual = self.slice_text(start, Position(end_row, end_col))
        if actual != text:
            raise BufferValidationError(
                f"Delete text mismatch: expected {text!r}, found {actual!r}",
                position=start,
            )
        self._lines[row] = self._lines[row][:col] + self._lines[end_row][end_col:]
        del self._lines[row + 1 : end_row + 1]
        self.version += 1
        return EditOperation(EditKind.DELETE, row, col, text)


__all__ = ["TextBuffer"]
