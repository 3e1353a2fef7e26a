"""Conversions between cursor stops and display columns."""

from __future__ import annotations

from typing import Optional

from cellpad.buffer import Document, Position, Row


def word_index_to_column(row: Optional[Row], word_index: int) -> int:
    """Display column of ``word_index``: the widths of every grapheme before it."""

    if row is None:
        return 0
    return row.column_at(max(0, min(word_index, len(row))))


def column_to_word_index(row: Optional[Row], column: int) -> int:
    """First stop at or right of ``column``, clamped to the row end."""

    if row is None:
        return 0
    return row.stop_at_column(column)


def position_at(document: Document, y: int, x_word_index: int) -> Position:
    """Build a Position with its cached column, saturating both coordinates."""

    y = max(0, min(y, len(document) - 1))
    row = document.row(y)
    stop = max(0, min(x_word_index, len(row) if row is not None else 0))
    return Position(y=y, x_word_index=stop, x=word_index_to_column(row, stop))


__all__ = ["word_index_to_column", "column_to_word_index", "position_at"]
