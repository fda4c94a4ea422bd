"""UI-agnostic text editing engine: buffer, selection, viewport and undo."""

from .config import EngineConfig, UndoMode
from .editor import Editor, EditorStatus, Interaction

__all__ = [
    "Editor",
    "EditorStatus",
    "EngineConfig",
    "Interaction",
    "UndoMode",
    "adapters",
    "buffer",
    "input",
    "runtime",
    "selection",
    "viewport",
]

__version__ = "0.1.0"
