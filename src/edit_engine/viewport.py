"""Sliding window over the buffer's line indices."""

from __future__ import annotations

import time
from typing import List

from edit_engine.buffer import TextBuffer
from edit_engine.runtime import telemetry


class Viewport:
    """Visible range ``[start, end]`` of absolute rows.

    The viewport never owns text; ``lines`` is a slice computed on demand.
    ``start`` stays within ``[0, last_index]`` and ``size`` is never negative.
    """

    def __init__(self, buffer: TextBuffer, *, size: int = 20, start: int = 0) -> None:
        if size < 0:
            raise ValueError("viewport size cannot be negative")
        self.buffer = buffer
        self.size = size
        self._start = 0
        self.logger = telemetry.get_logger("edit_engine.viewport")
        self.start = start

    @property
    def start(self) -> int:
        return self._start

    @start.setter
    def start(self, value: int) -> None:
        self._start = self._clamp(value)

    @property
    def end(self) -> int:
        return min(self._start + self.size - 1, self.buffer.last_index)

    @property
    def lines(self) -> List[str]:
        return list(self.buffer.lines[self._start : self.end + 1])

    def contains(self, row: int) -> bool:
        return self._start <= row <= self._start + self.size - 1

    def scroll(self, delta: int) -> int:
        """Shift the window by ``delta`` rows and return the new start."""

        started = time.perf_counter()
        self.start = self._start + delta
        elapsed_ms = (time.perf_counter() - started) * 1000
        self.logger.debug(
            f"scrolled by {delta} to {self._start} over {self.buffer.line_count} lines "
            f"in {elapsed_ms:.2f} ms"
        )
        return self._start

    def set_window(self, start: int, size: int) -> None:
        """Absolute repositioning (0-based ``start``)."""

        if size < 0:
            raise ValueError("viewport size cannot be negative")
        self.size = size
        self.start = start

    def go_to_line(self, line_number: int) -> None:
        """Put 1-based ``line_number`` at the top of the window."""

        self.start = line_number - 1

    def resize(self, size: int) -> None:
        self.set_window(self._start, size)

    def reveal(self, row: int) -> bool:
        """Scroll just enough for ``row`` to become the first or last visible row."""

        if self.contains(row):
            return False
        if row < self._start or self.size <= 0:
            self.start = row
        else:
            self.start = row - self.size + 1
        return True

    def clamp(self) -> None:
        """Re-apply the bounds after the buffer shrank."""

        self._start = self._clamp(self._start)

    def _clamp(self, value: int) -> int:
        upper = self.buffer.last_index
        if value < 0 or value > upper:
            clamped = max(0, min(value, upper))
            self.logger.debug(f"viewport start {value} out of bounds, clamped to {clamped}")
            return clamped
        return value


__all__ = ["Viewport"]
