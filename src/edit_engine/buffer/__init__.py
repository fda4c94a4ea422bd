"""Document storage, positions, operation descriptors and undo histories."""

from .document import TextBuffer
from .operations import CursorSnapshot, EditKind, EditOperation, EditRecorder, coalesce
from .state import CursorState, Position, RangeState, SelectionState, ordered
from .sync import BufferValidationError, ViewSnapshot
from .undo import CoalesceClock, History, UndoEntry
from .undo_tree import BranchInfo, UndoNode, UndoTree
from .validation import ensure_position

__all__ = [
    "BranchInfo",
    "BufferValidationError",
    "CoalesceClock",
    "CursorSnapshot",
    "CursorState",
    "EditKind",
    "EditOperation",
    "EditRecorder",
    "History",
    "Position",
    "RangeState",
    "SelectionState",
    "TextBuffer",
    "UndoEntry",
    "UndoNode",
    "UndoTree",
    "ViewSnapshot",
    "coalesce",
    "ensure_position",
    "ordered",
]
