"""Per-instance engine configuration."""

from __future__ import annotations

import dataclasses
import os
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional

ENV_PREFIX = "EDIT_ENGINE_"


class UndoMode(str, Enum):
    """Which history implementation an editor records edits into."""

    LINEAR = "linear"
    TREE = "tree"


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Settings owned by one editor instance.

    ``indentation`` is the width used by indent/unindent, ``expandtab`` the
    number of spaces a tab expands to (``0`` keeps literal tabs) and
    ``coalesce_timeout_ms`` the window in which single-character edits merge
    into one undo step.
    """

    indentation: int = 4
    expandtab: int = 4
    coalesce_timeout_ms: int = 500
    viewport_rows: int = 20
    undo_mode: UndoMode = UndoMode.LINEAR

    def __post_init__(self) -> None:
        if self.indentation < 0:
            raise ValueError("indentation cannot be negative")
        if self.expandtab < 0:
            raise ValueError("expandtab cannot be negative")
        if self.coalesce_timeout_ms < 0:
            raise ValueError("coalesce_timeout_ms cannot be negative")
        if self.viewport_rows < 0:
            raise ValueError("viewport_rows cannot be negative")
        object.__setattr__(self, "undo_mode", UndoMode(self.undo_mode))

    def expand_tabs(self, text: str) -> str:
        if not self.expandtab:
            return text
        return text.replace("\t", " " * self.expandtab)

    def replace(self, **changes: object) -> "EngineConfig":
        return dataclasses.replace(self, **changes)  # type: ignore[arg-type]

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EngineConfig":
        """Build a config from ``EDIT_ENGINE_*`` variables, falling back to defaults."""

        env = os.environ if environ is None else environ
        values: dict[str, object] = {}
        for name in ("indentation", "expandtab", "coalesce_timeout_ms", "viewport_rows"):
            raw = env.get(f"{ENV_PREFIX}{name.upper()}")
            if raw is not None:
                try:
                    values[name] = int(raw)
                except ValueError as exc:
                    raise ValueError(
                        f"{ENV_PREFIX}{name.upper()} must be an integer, got {raw!r}"
                    ) from exc
        mode = env.get(f"{ENV_PREFIX}UNDO_MODE")
        if mode:
            values["undo_mode"] = UndoMode(mode.lower())
        return cls(**values)  # type: ignore[arg-type]


__all__ = ["EngineConfig", "UndoMode", "ENV_PREFIX"]
