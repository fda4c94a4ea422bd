from __future__ import annotations

import pytest

from edit_engine import Editor, EngineConfig, UndoMode
from edit_engine.buffer import History, UndoTree
from edit_engine.runtime import telemetry


def test_defaults() -> None:
    config = EngineConfig()

    assert config.indentation == 4
    assert config.expandtab == 4
    assert config.coalesce_timeout_ms == 500
    assert config.undo_mode is UndoMode.LINEAR


@pytest.mark.parametrize(
    "field", ["indentation", "expandtab", "coalesce_timeout_ms", "viewport_rows"]
)
def test_negative_values_rejected(field: str) -> None:
    with pytest.raises(ValueError):
        EngineConfig(**{field: -1})  # type: ignore[arg-type]


def test_undo_mode_accepts_plain_strings() -> None:
    config = EngineConfig(undo_mode="tree")  # type: ignore[arg-type]

    assert config.undo_mode is UndoMode.TREE
    with pytest.raises(ValueError):
        EngineConfig(undo_mode="circular")  # type: ignore[arg-type]


def test_expand_tabs() -> None:
    assert EngineConfig(expandtab=2).expand_tabs("\ta\t") == "  a  "
    assert EngineConfig(expandtab=0).expand_tabs("\ta") == "\ta"


def test_replace_returns_new_config() -> None:
    config = EngineConfig()

    wider = config.replace(indentation=8)

    assert wider.indentation == 8
    assert config.indentation == 4


def test_from_env_reads_prefixed_variables() -> None:
    config = EngineConfig.from_env(
        {
            "EDIT_ENGINE_INDENTATION": "2",
            "EDIT_ENGINE_COALESCE_TIMEOUT_MS": "250",
            "EDIT_ENGINE_UNDO_MODE": "TREE",
            "UNRELATED": "1",
        }
    )

    assert config.indentation == 2
    assert config.coalesce_timeout_ms == 250
    assert config.undo_mode is UndoMode.TREE
    assert config.expandtab == 4


def test_from_env_uses_process_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EDIT_ENGINE_VIEWPORT_ROWS", "7")

    assert EngineConfig.from_env().viewport_rows == 7


def test_from_env_rejects_non_integers() -> None:
    with pytest.raises(ValueError, match="EDIT_ENGINE_EXPANDTAB"):
        EngineConfig.from_env({"EDIT_ENGINE_EXPANDTAB": "wide"})


def test_editor_picks_history_from_config() -> None:
    assert isinstance(Editor().history, History)
    assert isinstance(Editor(config=EngineConfig(undo_mode=UndoMode.TREE)).history, UndoTree)


def test_editor_viewport_size_from_config() -> None:
    editor = Editor("a\nb\nc", config=EngineConfig(viewport_rows=2))

    assert editor.viewport.size == 2
    assert editor.view().lines == ("a", "b")


def test_status_strings() -> None:
    editor = Editor("x" * 3 + "\n" * 1200, config=EngineConfig(indentation=2))
    editor.selection.move_cursor_end_of_line()

    status = editor.status()

    assert status.coordinate == "Ln 1, Col 4"
    assert status.line_summary == "1,201L, originally: 1201L 1203 bytes"
    assert status.spaces == "Spaces: 2"


def test_telemetry_rejects_unknown_preset() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(preset="bogus")


def test_telemetry_span_reports_failure_and_reraises() -> None:
    with pytest.raises(KeyError):
        with telemetry.span("tests::failing", component=True) as handle:
            handle.add_metadata("step", 1)
            raise KeyError("boom")
    assert handle.metadata["step"] == "1"
