"""Normalized key events and dispatch results."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

KEY_ALIASES = {
    "left": "ArrowLeft",
    "right": "ArrowRight",
    "up": "ArrowUp",
    "down": "ArrowDown",
    "backspace": "Backspace",
    "enter": "Enter",
    "return": "Enter",
    "tab": "Tab",
    "esc": "Escape",
    "escape": "Escape",
    "space": " ",
}

MODIFIER_ALIASES = {
    "control": "ctrl",
    "cmd": "meta",
    "command": "meta",
    "super": "meta",
    "option": "alt",
}

MODIFIER_KEYS = frozenset({"Shift", "Control", "Alt", "Meta", "CapsLock"})


def _normalize_modifiers(modifiers: Iterable[str]) -> tuple[str, ...]:
    values = []
    for raw in modifiers:
        name = raw.strip().lower()
        if name:
            values.append(MODIFIER_ALIASES.get(name, name))
    return tuple(sorted(dict.fromkeys(values)))


def _normalize_key(key: str) -> str:
    if len(key) == 1:
        return key
    return KEY_ALIASES.get(key.lower(), key)


@dataclass(frozen=True, slots=True)
class KeyInput:
    """Single key press as the engine understands it.

    ``key`` follows DOM ``KeyboardEvent.key`` naming (``"ArrowLeft"``,
    ``"Backspace"``, ``"a"``); common terminal names such as ``"left"`` or
    ``"enter"`` are accepted and normalized.
    """

    key: str
    modifiers: tuple[str, ...] = ()
    text: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        object.__setattr__(self, "key", _normalize_key(self.key))
        object.__setattr__(self, "modifiers", _normalize_modifiers(self.modifiers))

    @property
    def shift(self) -> bool:
        return "shift" in self.modifiers

    @property
    def alt(self) -> bool:
        return "alt" in self.modifiers

    @property
    def meta(self) -> bool:
        return "meta" in self.modifiers

    @property
    def command(self) -> bool:
        """Ctrl on Windows/Linux, Meta on macOS: either counts."""

        return "ctrl" in self.modifiers or self.meta

    @property
    def is_arrow(self) -> bool:
        return self.key.startswith("Arrow")

    @property
    def token(self) -> str:
        if self.modifiers:
            return f"{'+'.join(self.modifiers)}+{self.key}"
        return self.key


@dataclass(frozen=True, slots=True)
class DispatchResult:
    """What the dispatcher did with a key."""

    consumed: bool
    action: Optional[str] = None
    status: str = "ok"


__all__ = ["DispatchResult", "KeyInput", "MODIFIER_KEYS"]
