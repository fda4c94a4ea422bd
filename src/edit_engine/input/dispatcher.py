"""Translate key presses into editor operations."""

from __future__ import annotations

from typing import Callable, Dict

from edit_engine.editor import Editor, Interaction
from edit_engine.runtime import telemetry

from .models import MODIFIER_KEYS, DispatchResult, KeyInput

_IGNORED = DispatchResult(consumed=False, status="ignored")


class KeyDispatcher:
    """Maps :class:`KeyInput` events onto an :class:`Editor`.

    Arrow keys move the head; shift extends (starting a selection if needed),
    alt moves by word, meta jumps to line start/end. A plain arrow on an
    active selection collapses it instead of moving. Edits are refused unless
    the editor is in :attr:`Interaction.EDIT`; read-only editors also refuse
    navigation.
    """

    def __init__(self, editor: Editor) -> None:
        self.editor = editor
        self.logger = telemetry.get_logger("edit_engine.input")
        self._edit_keys: Dict[str, Callable[[KeyInput], str]] = {
            "Backspace": self._backspace,
            "Enter": self._enter,
            "Tab": self._tab,
            "Escape": lambda key: "escape",
        }

    def handle(self, key: KeyInput) -> DispatchResult:
        with telemetry.span(
            "input::dispatch",
            logger_name="edit_engine.input",
            component="input",
            metadata={"key": key.token},
        ) as handle:
            result = self._dispatch(key)
            handle.add_metadata("action", result.action or result.status)
        return result

    def _dispatch(self, key: KeyInput) -> DispatchResult:
        editor = self.editor
        if key.command and key.key.lower() == "z":
            if editor.interactive is not Interaction.EDIT:
                return _IGNORED
            if key.shift:
                return DispatchResult(consumed=True, action="redo", status=_did(editor.redo()))
            return DispatchResult(consumed=True, action="undo", status=_did(editor.undo()))

        if key.command and key.key.lower() in {"c", "v", "x"}:
            # Clipboard traffic belongs to the host; it calls copy()/paste().
            return DispatchResult(consumed=False, action="clipboard", status="host")

        if key.is_arrow:
            if editor.interactive is Interaction.READ_ONLY:
                return _IGNORED
            return DispatchResult(consumed=True, action=self._arrow(key))

        if editor.interactive is not Interaction.EDIT:
            return _IGNORED

        handler = self._edit_keys.get(key.key)
        if handler is not None:
            return DispatchResult(consumed=True, action=handler(key))

        if key.key in MODIFIER_KEYS:
            return _IGNORED
        if len(key.key) > 1:
            self.logger.warning(f"Ignoring unknown key: {key.token}")
            return DispatchResult(consumed=False, status="unknown_key")

        editor.insert(key.text or key.key)
        return DispatchResult(consumed=True, action="insert")

    def _arrow(self, key: KeyInput) -> str:
        selection = self.editor.selection
        direction = key.key[len("Arrow") :].lower()

        if key.meta or key.alt:
            if not key.shift and selection.is_selection:
                selection.make_cursor()
            if key.shift and not selection.is_selection:
                selection.make_selection()
            if direction == "left":
                if key.meta:
                    selection.move_cursor_start_of_line()
                    return "line_start"
                selection.move_back_word()
                return "back_word"
            if direction == "right":
                if key.meta:
                    selection.move_cursor_end_of_line()
                    return "line_end"
                selection.move_word()
                return "word"
            return "noop"

        if not key.shift and selection.is_selection:
            if direction == "left":
                selection.collapse_to_start()
            elif direction == "right":
                selection.collapse_to_end()
            else:
                selection.collapse_vertical(1 if direction == "down" else -1)
            return f"collapse_{direction}"

        if key.shift and not selection.is_selection:
            selection.make_selection()
        if direction == "down":
            selection.move_row(1)
        elif direction == "up":
            selection.move_row(-1)
        elif direction == "left":
            selection.move_col(-1)
        else:
            selection.move_col(1)
        return f"move_{direction}"

    def _backspace(self, key: KeyInput) -> str:
        self.editor.delete()
        return "delete"

    def _enter(self, key: KeyInput) -> str:
        self.editor.new_line()
        return "new_line"

    def _tab(self, key: KeyInput) -> str:
        editor = self.editor
        if key.shift:
            editor.unindent()
            return "unindent"
        if editor.selection.is_selection:
            editor.indent()
            return "indent"
        width = editor.config.expandtab
        editor.insert(" " * width if width else "\t")
        return "insert_tab"


def _did(changed: bool) -> str:
    return "ok" if changed else "noop"


__all__ = ["KeyDispatcher"]
