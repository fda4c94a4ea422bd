from __future__ import annotations

from typing import Callable

import pytest

from edit_engine import Editor, EngineConfig


class FakeClock:
    """Monotonic clock the tests advance by hand."""

    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms / 1000


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_editor(clock: FakeClock) -> Callable[..., Editor]:
    def factory(text: str = "", **config: object) -> Editor:
        return Editor(text, config=EngineConfig(**config), clock=clock)  # type: ignore[arg-type]

    return factory
