from __future__ import annotations

import pytest

from cellpad.buffer import Document, Position, Row
from cellpad.cursor import (
    Motion,
    column_to_word_index,
    move,
    position_at,
    word_index_to_column,
)


def make_document(*lines: str) -> Document:
    return Document(Row.from_text(line) for line in lines)


def test_word_index_to_column_saturates() -> None:
    row = Row.from_text("a中b")

    assert word_index_to_column(row, 0) == 0
    assert word_index_to_column(row, 2) == 3
    assert word_index_to_column(row, 10) == 4
    assert word_index_to_column(None, 3) == 0


def test_column_to_word_index_rounds_to_next_stop() -> None:
    row = Row.from_text("中国")

    assert column_to_word_index(row, 1) == 1
    assert column_to_word_index(row, 2) == 1
    assert column_to_word_index(row, 3) == 2
    assert column_to_word_index(None, 5) == 0


def test_position_at_clamps_both_coordinates() -> None:
    document = make_document("ab", "中国")

    assert position_at(document, 9, 9) == Position(1, 2, 4)
    assert position_at(document, -1, -1) == Position(0, 0, 0)


def test_right_at_end_of_single_row_stays() -> None:
    document = make_document("ab")
    end = Position(0, 2, 2)

    assert move(document, end, Motion.RIGHT) == end


def test_right_at_row_end_wraps_to_next_row() -> None:
    document = make_document("ab", "cd")

    assert move(document, Position(0, 2, 2), Motion.RIGHT) == Position(1, 0, 0)


def test_left_at_row_start_goes_to_previous_row_end() -> None:
    document = make_document("中国", "cd")

    assert move(document, Position(1, 0, 0), Motion.LEFT) == Position(0, 2, 4)
    assert move(document, Position(0, 0, 0), Motion.LEFT) == Position(0, 0, 0)


def test_home_and_end() -> None:
    document = make_document("a中b")
    middle = Position(0, 1, 1)

    assert move(document, middle, Motion.HOME) == Position(0, 0, 0)
    assert move(document, middle, Motion.END) == Position(0, 3, 4)


@pytest.mark.parametrize(
    ("start", "motion", "expected"),
    [
        (Position(0, 1, 2), Motion.DOWN, Position(1, 2, 2)),
        (Position(1, 3, 3), Motion.UP, Position(0, 2, 4)),
        (Position(1, 1, 1), Motion.UP, Position(0, 1, 2)),
    ],
)
def test_vertical_motion_keeps_display_column(
    start: Position, motion: Motion, expected: Position
) -> None:
    document = make_document("中国", "abcd")

    assert move(document, start, motion) == expected


def test_vertical_motion_clamps_to_shorter_row_and_document() -> None:
    document = make_document("abcdef", "ab")

    assert move(document, Position(0, 5, 5), Motion.DOWN) == Position(1, 2, 2)
    assert move(document, Position(1, 1, 1), Motion.DOWN) == Position(1, 1, 1)
    assert move(document, Position(0, 3, 3), Motion.UP) == Position(0, 3, 3)


def test_page_motion_saturates_at_document_edges() -> None:
    document = make_document("a", "b", "c")

    assert move(document, Position(), Motion.PAGE_DOWN, page_size=10) == Position(
        2, 0, 0
    )
    assert move(
        document, Position(2, 1, 1), Motion.PAGE_UP, page_size=10
    ) == Position(0, 1, 1)
    assert move(document, Position(), Motion.PAGE_DOWN, page_size=1) == Position(
        1, 0, 0
    )


def test_motion_repairs_stale_position() -> None:
    document = make_document("ab")

    assert move(document, Position(4, 9, 9), Motion.HOME) == Position(0, 0, 0)
