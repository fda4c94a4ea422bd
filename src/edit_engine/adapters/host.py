"""Minimal host adapter that feeds key events in and pushes view snapshots out."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from edit_engine.buffer import ViewSnapshot
from edit_engine.editor import Editor
from edit_engine.input import DispatchResult, KeyDispatcher, KeyInput


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class HostHooks:
    """Callbacks a rendering host provides to repaint after each engine call."""

    update_view: Callable[[ViewSnapshot], None]
    update_status: Callable[[str], None] = _noop
    # Optional debug line sink (a log panel, a socket, a file)
    log: Callable[[str], None] = _noop


class HostAdapter:
    """Bridges a host UI to an :class:`Editor` through a :class:`KeyDispatcher`."""

    def __init__(
        self,
        editor: Editor,
        hooks: HostHooks,
        *,
        dispatcher: Optional[KeyDispatcher] = None,
    ) -> None:
        self.editor = editor
        self.hooks = hooks
        self.dispatcher = dispatcher or KeyDispatcher(editor)
        self.refresh()

    def handle_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> DispatchResult:
        event = KeyInput(key=key, text=text, modifiers=tuple(modifiers))
        self._log("key ->", key=event.token, text=text)
        result = self.dispatcher.handle(event)
        self.refresh()
        self._log(
            "result <-",
            consumed=result.consumed,
            action=result.action,
            status=result.status,
        )
        return result

    def paste(self, text: str) -> None:
        self.editor.paste(text)
        self.refresh()

    def copy(self) -> str:
        return self.editor.copy()

    def scroll(self, delta: int) -> None:
        self.editor.viewport.scroll(delta)
        self.refresh()

    def resize(self, rows: int) -> None:
        self.editor.viewport.resize(rows)
        self.refresh()

    def refresh(self) -> None:
        self.hooks.update_view(self.editor.view())
        status = self.editor.status()
        self.hooks.update_status(
            f"{status.coordinate} | {status.line_summary} | {status.spaces}"
        )

    def _log(self, prefix: str, **fields: object) -> None:
        head = self.editor.selection.head
        snapshot: dict[str, object] = {
            "editor": self.editor.name,
            "head": head.as_tuple(),
            "selecting": self.editor.selection.is_selection,
            "version": self.editor.buffer.version,
        }
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix] + [f"{key}={value!r}" for key, value in snapshot.items()]
        self.hooks.log(" ".join(parts))


__all__ = ["HostAdapter", "HostHooks"]
