from __future__ import annotations

import pytest

from edit_engine.buffer import BufferValidationError, EditKind, Position, TextBuffer


def test_empty_document_has_one_line() -> None:
    buffer = TextBuffer()

    assert list(buffer.lines) == [""]
    assert buffer.last_index == 0


def test_set_text_resets_counters() -> None:
    buffer = TextBuffer("one\ntwo")
    buffer.insert_at(1, 3, "\nthree")

    buffer.set_text("héllo\nworld\n")

    assert list(buffer.lines) == ["héllo", "world", ""]
    assert buffer.original_line_count == 3
    assert buffer.byte_count == len("héllo\nworld\n".encode("utf-8"))
    assert buffer.text == "héllo\nworld\n"


def test_set_text_expands_tabs() -> None:
    buffer = TextBuffer("\tx", expand_tabs=lambda s: s.replace("\t", "  "))

    assert list(buffer.lines) == ["  x"]


def test_single_line_insert_returns_descriptor() -> None:
    buffer = TextBuffer("hello")

    op = buffer.insert_at(0, 5, " world")

    assert buffer.text == "hello world"
    assert op is not None
    assert op.kind is EditKind.INSERT
    assert (op.row, op.col, op.text) == (0, 5, " world")


def test_multiline_insert_splits_and_rejoins() -> None:
    buffer = TextBuffer("abcd\nzz")

    buffer.insert_at(0, 2, "X\nmiddle\nY")

    assert list(buffer.lines) == ["abX", "middle", "Ycd", "zz"]


def test_insert_newline_only() -> None:
    buffer = TextBuffer("abcd")

    buffer.insert_at(0, 2, "\n")

    assert list(buffer.lines) == ["ab", "cd"]


@pytest.mark.parametrize(
    "text, row, col, inserted",
    [
        ("hello", 0, 0, "x"),
        ("hello", 0, 5, "\n"),
        ("ab\ncd\nef", 1, 1, "1\n2\n3"),
        ("", 0, 0, "\n\n"),
        ("line", 0, 2, "éé\n"),
    ],
)
def test_delete_is_inverse_of_insert(text: str, row: int, col: int, inserted: str) -> None:
    buffer = TextBuffer(text)
    before = list(buffer.lines)

    op = buffer.insert_at(row, col, inserted)
    assert op is not None
    op.inverse().apply(buffer)

    assert list(buffer.lines) == before


def test_delete_rejects_mismatched_text() -> None:
    buffer = TextBuffer("hello")

    with pytest.raises(BufferValidationError):
        buffer.delete_at(0, 0, "help")
    assert buffer.text == "hello"


def test_primitives_reject_out_of_range_positions() -> None:
    buffer = TextBuffer("abc")

    with pytest.raises(BufferValidationError):
        buffer.insert_at(1, 0, "x")
    with pytest.raises(BufferValidationError):
        buffer.insert_at(0, 4, "x")
    with pytest.raises(BufferValidationError) as info:
        buffer.delete_at(0, 2, "c\nd")
    assert info.value.position is not None


def test_empty_text_is_noop() -> None:
    buffer = TextBuffer("abc")

    assert buffer.insert_at(0, 1, "") is None
    assert buffer.delete_at(0, 1, "") is None
    assert buffer.version == 1


def test_splice_and_delete_line_keep_one_line() -> None:
    buffer = TextBuffer("a\nb\nc")

    buffer.splice(1, ["x", "y"], 1)
    assert list(buffer.lines) == ["a", "x", "y", "c"]

    buffer.splice(0, [], 4)
    assert list(buffer.lines) == [""]

    buffer.set_text("only")
    buffer.delete_line(0)
    assert list(buffer.lines) == [""]


def test_append_lines_expands_tabs() -> None:
    buffer = TextBuffer("head", expand_tabs=lambda s: s.replace("\t", " "))

    buffer.append_lines(["\tone", "two"])

    assert list(buffer.lines) == ["head", " one", "two"]


def test_slice_text_across_lines() -> None:
    buffer = TextBuffer("hello\nbig\nworld")

    assert buffer.slice_text(Position(0, 3), Position(2, 2)) == "lo\nbig\nwo"
    assert buffer.slice_text(Position(2, 2), Position(0, 3)) == "lo\nbig\nwo"


def test_snapshot_is_stable_while_lines_stay_live() -> None:
    buffer = TextBuffer("one\ntwo")
    live = buffer.lines
    frozen = buffer.snapshot()

    buffer.insert_at(1, 3, "\nthree")

    assert frozen == ("one", "two")
    assert list(live) == ["one", "two", "three"]
    assert buffer.snapshot() == ("one", "two", "three")
