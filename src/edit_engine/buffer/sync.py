"""Boundary types shared with host adapters."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from .state import Position


@dataclass(frozen=True, slots=True)
class ViewSnapshot:
    """Everything a renderer needs to paint the visible window."""

    start: int
    lines: Tuple[str, ...]
    head: Position
    selection: Optional[Tuple[Position, Position]]
    line_count: int
    attributes: dict[str, str] = field(default_factory=dict)

    @property
    def end(self) -> int:
        return self.start + len(self.lines) - 1


class BufferValidationError(RuntimeError):
    """Raised when a primitive receives a position or text that does not fit the buffer."""

    def __init__(self, message: str, *, position: Position | None = None) -> None:
        super().__init__(message)
        self.position = position


__all__ = ["BufferValidationError", "ViewSnapshot"]
