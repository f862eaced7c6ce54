"""Tests for pi.line.text_buffer.TextBuffer -- byte-addressed line buffer."""

from __future__ import annotations

import pytest

from pi.line.text_buffer import TextBuffer

# a, e + combining acute, Japanese flag (two regional indicators), b
MIXED = "ae\u0301\U0001F1EF\U0001F1F5b"
MIXED_BOUNDARIES = [0, 1, 4, 12, 13]


def _buffer(text: str, cursor: int | None = None) -> TextBuffer:
    buf = TextBuffer()
    buf.set_buffer(text)
    if cursor is not None:
        buf.set_cursor(cursor)
    return buf


class TestInitialState:
    def test_empty(self) -> None:
        buf = TextBuffer()
        assert buf.content == ""
        assert buf.cursor == 0
        assert buf.length == 0
        assert buf.is_empty

    def test_length_is_in_bytes(self) -> None:
        buf = _buffer("日本")
        assert buf.length == 6
        assert buf.cursor == 6


class TestStepRightLeft:
    """Cursor stepping visits exactly the grapheme cluster boundaries."""

    def test_step_right_visits_cluster_boundaries(self) -> None:
        buf = _buffer(MIXED, 0)
        visited = []
        for _ in range(len(MIXED_BOUNDARIES) - 1):
            buf.step_right()
            visited.append(buf.cursor)
        assert visited == MIXED_BOUNDARIES[1:]

    def test_step_right_is_idempotent_at_end(self) -> None:
        buf = _buffer(MIXED)
        buf.step_right()
        buf.step_right()
        assert buf.cursor == buf.length

    def test_step_left_reverses_step_right(self) -> None:
        buf = _buffer(MIXED)
        visited = []
        for _ in range(len(MIXED_BOUNDARIES) - 1):
            buf.step_left()
            visited.append(buf.cursor)
        assert visited == list(reversed(MIXED_BOUNDARIES[:-1]))

    def test_step_left_is_idempotent_at_start(self) -> None:
        buf = _buffer("abc", 0)
        buf.step_left()
        assert buf.cursor == 0

    def test_steps_on_empty_buffer(self) -> None:
        buf = TextBuffer()
        buf.step_right()
        assert buf.cursor == 0
        buf.step_left()
        assert buf.cursor == 0

    def test_step_right_from_inside_cluster_goes_to_next_boundary(self) -> None:
        # Offset 2 splits the e + combining acute cluster
        buf = _buffer(MIXED, 2)
        buf.step_right()
        assert buf.cursor == 4

    def test_move_to_start_and_end(self) -> None:
        buf = _buffer("hello", 2)
        buf.move_to_start()
        assert buf.cursor == 0
        buf.move_to_end()
        assert buf.cursor == 5


class TestWordMotion:
    def test_word_left_walks_back_through_words(self) -> None:
        buf = _buffer("foo bar baz")
        buf.word_left()
        assert buf.cursor == 8
        buf.word_left()
        assert buf.cursor == 4
        buf.word_left()
        assert buf.cursor == 0

    def test_word_left_at_start_is_noop(self) -> None:
        buf = _buffer("foo bar", 0)
        buf.word_left()
        assert buf.cursor == 0

    def test_word_right_walks_forward_through_words(self) -> None:
        buf = _buffer("foo bar baz", 0)
        buf.word_right()
        assert buf.cursor == 4
        buf.word_right()
        assert buf.cursor == 8
        buf.word_right()
        assert buf.cursor == 11

    def test_tab_separates_words(self) -> None:
        buf = _buffer("foo\tbar", 0)
        buf.word_right()
        assert buf.cursor == 4

    def test_punctuation_is_not_a_separator(self) -> None:
        buf = _buffer("foo.bar", 0)
        buf.word_right()
        assert buf.cursor == 7

    def test_word_motion_uses_byte_offsets(self) -> None:
        buf = _buffer("日本 語", 0)
        buf.word_right()
        assert buf.cursor == 7
        buf.move_to_end()
        buf.word_left()
        assert buf.cursor == 7

    def test_word_motion_stays_on_cluster_boundary(self) -> None:
        # The space and the combining mark after it form one cluster
        buf = _buffer("a \u0301b", 0)
        buf.word_right()
        assert buf.cursor == 1


class TestInsert:
    def test_insert_char_does_not_move_cursor(self) -> None:
        buf = _buffer("ac", 1)
        buf.insert_char(1, "b")
        assert buf.content == "abc"
        assert buf.cursor == 1

    def test_insert_text_at_byte_offset(self) -> None:
        buf = _buffer("\u00e9z")
        buf.insert_text(2, "xy")
        assert buf.content == "\u00e9xyz"

    def test_insert_char_rejects_multiple_chars(self) -> None:
        buf = TextBuffer()
        with pytest.raises(ValueError):
            buf.insert_char(0, "ab")

    def test_insert_inside_scalar_fails(self) -> None:
        buf = _buffer("\u00e9")
        with pytest.raises(ValueError):
            buf.insert_text(1, "x")

    def test_insert_out_of_range_fails(self) -> None:
        buf = _buffer("abc")
        with pytest.raises(IndexError):
            buf.insert_char(4, "x")


class TestRemove:
    def test_remove_char_removes_one_scalar(self) -> None:
        buf = _buffer("e\u0301x")
        assert buf.remove_char(0) == "e"
        assert buf.content == "\u0301x"

    def test_remove_char_at_end_fails(self) -> None:
        buf = _buffer("abc")
        with pytest.raises(IndexError):
            buf.remove_char(3)

    def test_remove_grapheme_removes_whole_cluster(self) -> None:
        buf = _buffer(MIXED)
        assert buf.remove_grapheme(4) == "\U0001F1EF\U0001F1F5"
        assert buf.content == "ae\u0301b"

    def test_pop_last_moves_cursor_to_new_end(self) -> None:
        buf = _buffer("abc", 0)
        assert buf.pop_last() == "c"
        assert buf.content == "ab"
        assert buf.cursor == 2

    def test_pop_last_on_empty(self) -> None:
        buf = TextBuffer()
        assert buf.pop_last() is None
        assert buf.cursor == 0

    def test_truncate_at(self) -> None:
        buf = _buffer("hello world", 5)
        buf.truncate_at(5)
        assert buf.content == "hello"

    def test_truncate_at_end_is_noop(self) -> None:
        buf = _buffer("abc")
        buf.truncate_at(3)
        assert buf.content == "abc"

    def test_truncate_past_end_fails(self) -> None:
        buf = _buffer("abc")
        with pytest.raises(IndexError):
            buf.truncate_at(10)

    def test_truncate_inside_scalar_fails(self) -> None:
        buf = _buffer("\u00e9")
        with pytest.raises(ValueError):
            buf.truncate_at(1)

    def test_clear_keeps_cursor(self) -> None:
        buf = _buffer("abc")
        buf.clear()
        assert buf.content == ""
        assert buf.cursor == 3


class TestQueries:
    def test_suffix(self) -> None:
        buf = _buffer("\u00e9abc")
        assert buf.suffix(2) == "abc"
        assert buf.suffix(buf.length) == ""

    def test_grapheme_at_and_before(self) -> None:
        buf = _buffer(MIXED)
        assert buf.grapheme_at(1) == "e\u0301"
        assert buf.grapheme_before(4) == "e\u0301"
        assert buf.grapheme_at(buf.length) == ""
        assert buf.grapheme_before(0) == ""

    def test_display_width_up_to_cursor(self) -> None:
        buf = _buffer("a日b", 4)
        assert buf.display_width() == 3
        assert buf.display_width(buf.length) == 4
