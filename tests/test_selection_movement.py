from __future__ import annotations

from typing import Callable, List

import pytest

from edit_engine import Editor
from edit_engine.buffer import BufferValidationError, Position

MakeEditor = Callable[..., Editor]


def test_new_editor_starts_with_bare_cursor(make_editor: MakeEditor) -> None:
    editor = make_editor("abc")
    selection = editor.selection

    assert selection.head == Position(0, 0)
    assert selection.is_selection is False
    assert selection.ordered() == (selection.head, selection.head)


def test_make_selection_and_make_cursor(make_editor: MakeEditor) -> None:
    editor = make_editor("hello")
    selection = editor.selection

    selection.make_selection()
    assert selection.is_selection is True
    selection.move_col(1)
    selection.move_col(1)
    assert selection.tail == Position(0, 0)
    assert selection.head == Position(0, 2)
    assert selection.is_forward_selection is True
    assert selection.text == "he"

    selection.make_cursor()
    assert selection.is_selection is False
    assert selection.tail == selection.head == Position(0, 2)


def test_backward_selection_orders_edges(make_editor: MakeEditor) -> None:
    editor = make_editor("hello\nworld")
    selection = editor.selection
    selection.set_cursor(Position(1, 2))

    selection.make_selection()
    selection.move_row(-1)

    assert selection.is_forward_selection is False
    assert selection.ordered() == (Position(0, 2), Position(1, 2))
    assert selection.lines == ["llo", "wo"]


def test_move_col_wraps_across_lines(make_editor: MakeEditor) -> None:
    editor = make_editor("ab\ncd")
    selection = editor.selection
    selection.set_cursor(Position(0, 2))

    selection.move_col(1)
    assert selection.head == Position(1, 0)

    selection.move_col(-1)
    assert selection.head == Position(0, 2)


def test_move_col_noop_at_document_edges(make_editor: MakeEditor) -> None:
    editor = make_editor("ab\ncd")
    selection = editor.selection

    selection.move_col(-1)
    assert selection.head == Position(0, 0)

    selection.set_cursor(Position(1, 2))
    selection.move_col(1)
    assert selection.head == Position(1, 2)


def test_move_col_rejects_multi_steps(make_editor: MakeEditor) -> None:
    editor = make_editor("abc")

    with pytest.raises(ValueError):
        editor.selection.move_col(2)


def test_goal_column_survives_short_lines(make_editor: MakeEditor) -> None:
    editor = make_editor("long line here\nab\n\nanother long line")
    selection = editor.selection
    selection.set_cursor(Position(0, 10))

    selection.move_row(1)
    assert selection.head == Position(1, 2)
    selection.move_row(1)
    assert selection.head == Position(2, 0)
    selection.move_row(1)
    assert selection.head == Position(3, 10)
    selection.move_row(-1)
    selection.move_row(-1)
    selection.move_row(-1)
    assert selection.head == Position(0, 10)


def test_horizontal_move_resets_goal_column(make_editor: MakeEditor) -> None:
    editor = make_editor("long line here\nab\nanother long line")
    selection = editor.selection
    selection.set_cursor(Position(0, 10))

    selection.move_row(1)
    selection.move_col(-1)
    selection.move_row(1)

    assert selection.head == Position(2, 1)


def test_move_row_noop_at_edges(make_editor: MakeEditor) -> None:
    editor = make_editor("one\ntwo")
    selection = editor.selection

    selection.move_row(-1)
    assert selection.head == Position(0, 0)

    selection.move_row(1)
    selection.move_row(1)
    assert selection.head == Position(1, 0)


def collect_word_stops(editor: Editor, steps: int) -> List[int]:
    stops = []
    for _ in range(steps):
        editor.selection.move_word()
        stops.append(editor.selection.head.col)
    return stops


def test_word_movement_boundaries(make_editor: MakeEditor) -> None:
    editor = make_editor("foo_bar ==baz")

    assert collect_word_stops(editor, 4) == [7, 8, 10, 13]


def test_word_movement_treats_mixed_punctuation_separately(make_editor: MakeEditor) -> None:
    editor = make_editor("=-=")

    assert collect_word_stops(editor, 3) == [1, 2, 3]


def test_word_movement_is_unicode_aware(make_editor: MakeEditor) -> None:
    editor = make_editor("żółw2_x, abc")

    assert collect_word_stops(editor, 2) == [7, 8]


def test_back_word_mirrors_forward(make_editor: MakeEditor) -> None:
    editor = make_editor("foo_bar ==baz")
    selection = editor.selection
    selection.set_cursor(Position(0, 13))

    stops = []
    for _ in range(4):
        selection.move_back_word()
        stops.append(selection.head.col)

    assert stops == [10, 8, 0, 0]


def test_word_movement_crosses_lines(make_editor: MakeEditor) -> None:
    editor = make_editor("ab\ncd")
    selection = editor.selection
    selection.set_cursor(Position(0, 2))

    selection.move_word()
    assert selection.head == Position(1, 0)

    selection.move_back_word()
    assert selection.head == Position(0, 2)

    selection.set_cursor(Position(1, 2))
    selection.move_word()
    assert selection.head == Position(1, 2)


def test_start_of_line_toggles(make_editor: MakeEditor) -> None:
    editor = make_editor("    indented")
    selection = editor.selection
    selection.set_cursor(Position(0, 8))

    selection.move_cursor_start_of_line()
    assert selection.head.col == 4
    selection.move_cursor_start_of_line()
    assert selection.head.col == 0
    selection.move_cursor_start_of_line()
    assert selection.head.col == 4


def test_end_of_line_is_phantom_column(make_editor: MakeEditor) -> None:
    editor = make_editor("abc\nxy")
    selection = editor.selection

    selection.move_cursor_end_of_line()

    assert selection.head == Position(0, 3)
    selection.move_row(1)
    assert selection.head == Position(1, 2)


def test_collapse_helpers(make_editor: MakeEditor) -> None:
    editor = make_editor("hello\nworld\nagain")
    selection = editor.selection
    selection.set_cursor(Position(0, 1))
    selection.make_selection()
    selection.move_row(1)

    selection.collapse_vertical(1)
    assert selection.is_selection is False
    assert selection.head == Position(2, 1)

    selection.make_selection()
    selection.move_col(1)
    selection.collapse_to_start()
    assert selection.head == Position(2, 1)


def test_viewport_follows_every_movement(make_editor: MakeEditor) -> None:
    text = "\n".join("x" * (i % 7) for i in range(60))
    editor = make_editor(text, viewport_rows=5)
    selection = editor.selection
    viewport = editor.viewport

    moves = (
        [lambda: selection.move_row(1)] * 20
        + [lambda: selection.move_col(1)] * 30
        + [selection.move_word] * 25
        + [lambda: selection.move_row(-1)] * 40
        + [selection.move_back_word] * 30
        + [lambda: selection.move_col(-1)] * 10
    )
    for move in moves:
        move()
        row = selection.head.row
        assert viewport.start <= row <= viewport.start + viewport.size - 1
        selection.check_invariants()


def test_check_invariants_reports_escaped_cursor(make_editor: MakeEditor) -> None:
    editor = make_editor("abcdef")
    editor.selection.set_cursor(Position(0, 6))

    editor.buffer.set_text("ab")

    with pytest.raises(BufferValidationError):
        editor.selection.check_invariants()
