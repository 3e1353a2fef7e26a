from __future__ import annotations

import pytest

from cellpad.buffer import (
    HighlightKind,
    HighlightSpan,
    OutOfRangeError,
    Row,
    RowEncodingError,
    SearchDirection,
    clip_to_width,
)


def make_row(text: str = "a中b") -> Row:
    return Row.from_text(text)


def test_wide_characters_take_two_columns() -> None:
    row = make_row("中国")

    assert row.word_width_index == (2, 2)
    assert row.display_width() == 4
    assert row.grapheme_count() == 2


def test_column_offsets_track_every_stop() -> None:
    row = make_row()

    assert row.column_offsets == (0, 1, 3, 4)

    assert row.column_at(2) == 3
    with pytest.raises(OutOfRangeError):
        row.column_at(4)


def test_clip_to_width_never_splits_wide_graphemes() -> None:
    assert clip_to_width("a中b", 2) == "a"
    assert clip_to_width("a中b", 3) == "a中"
    assert clip_to_width("e\u0301x", 1) == "e\u0301"
    assert clip_to_width("abc", 0) == ""


def test_combining_sequence_is_one_stop() -> None:
    row = make_row("e\u0301x")

    assert len(row) == 2
    assert row.graphemes == ("e\u0301", "x")
    assert row.display_widths == (1, 1)


def test_stop_at_column_rounds_right_and_clamps() -> None:
    row = make_row("中国")

    assert row.stop_at_column(0) == 0
    assert row.stop_at_column(1) == 1
    assert row.stop_at_column(3) == 2
    assert row.stop_at_column(99) == 2


def test_render_drops_straddling_wide_characters() -> None:
    row = make_row()

    assert row.render(0, 4) == "a中b"
    assert row.render(0, 2) == "a"
    assert row.render(2, 4) == "b"
    assert row.render(1, 4) == "中b"
    assert row.render(3, 3) == ""


def test_render_shows_tab_as_single_space() -> None:
    assert make_row("a\tb").render(0, 10) == "a b"


def test_insert_at_recomputes_tables() -> None:
    row = make_row("ab")

    row.insert_at(1, "中")

    assert row.content == "a中b"
    assert row.word_width_index == (1, 2, 1)
    assert row.display_width() == 4


def test_insert_at_past_end_raises() -> None:
    row = make_row("ab")

    with pytest.raises(OutOfRangeError) as info:
        row.insert_at(3, "x")

    assert isinstance(info.value, IndexError)
    assert (info.value.index, info.value.limit) == (3, 2)
    assert row.content == "ab"


def test_delete_at_end_is_noop() -> None:
    row = make_row("ab")

    row.delete_at(2)
    assert row.content == "ab"

    row.delete_at(0)
    assert row.content == "b"

    with pytest.raises(OutOfRangeError):
        row.delete_at(5)


def test_split_then_append_restores_row() -> None:
    row = make_row("hello 中国")

    left, right = row.split_at(6)
    assert (left.content, right.content) == ("hello ", "中国")

    left.append(right)
    assert left == row
    assert left.word_width_index == row.word_width_index


def test_from_text_rejects_malformed_input() -> None:
    with pytest.raises(RowEncodingError):
        Row.from_text(b"\xff\xfe")
    with pytest.raises(RowEncodingError):
        Row.from_text("bad \ud800")
    with pytest.raises(ValueError):
        Row.from_text("two\nlines")

    assert Row.from_text("中".encode("utf-8")).content == "中"


def test_find_excludes_start_unless_inclusive() -> None:
    row = make_row("abcabc")

    assert row.find("abc", 0, SearchDirection.FORWARD) == 3
    assert row.find("abc", 0, SearchDirection.FORWARD, inclusive=True) == 0
    assert row.find("abc", 6, SearchDirection.BACKWARD) == 3
    assert row.find("abc", 3, SearchDirection.BACKWARD) == 0
    assert row.find("abc", 3, SearchDirection.FORWARD) is None
    assert row.find("", 0, SearchDirection.FORWARD) is None


def test_find_matches_whole_graphemes() -> None:
    row = make_row("e\u0301e")

    assert row.find("e", 0, SearchDirection.FORWARD, inclusive=True) == 1


def test_highlight_marks_numbers_then_matches() -> None:
    row = make_row("x 12 ab")

    row.highlight("ab")

    assert row.highlighted_ranges == [
        HighlightSpan(2, 4, HighlightKind.NUMBER),
        HighlightSpan(5, 7, HighlightKind.MATCH),
    ]
    assert row.render_spans(0, 10) == [
        ("x ", HighlightKind.NONE),
        ("12", HighlightKind.NUMBER),
        (" ", HighlightKind.NONE),
        ("ab", HighlightKind.MATCH),
    ]


def test_edit_clears_highlight() -> None:
    row = make_row("123")
    row.highlight()

    row.insert_at(0, "x")

    assert row.highlighted_ranges == []
