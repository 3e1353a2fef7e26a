"""Cursor motion over a document; every motion saturates instead of failing."""

from __future__ import annotations

from enum import Enum

from cellpad.buffer import Document, Position

from .translator import column_to_word_index, position_at, word_index_to_column


class Motion(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    HOME = "home"
    END = "end"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"


_VERTICAL_STEP = {
    Motion.UP: -1,
    Motion.DOWN: 1,
    Motion.PAGE_UP: -1,
    Motion.PAGE_DOWN: 1,
}


def move(
    document: Document,
    position: Position,
    motion: Motion,
    *,
    page_size: int = 1,
) -> Position:
    last_row = max(len(document) - 1, 0)
    y = min(position.y, last_row)
    row = document.row(y)
    width = len(row) if row is not None else 0
    x = min(position.x_word_index, width)

    if motion is Motion.LEFT:
        if x > 0:
            x -= 1
        elif y > 0:
            y -= 1
            previous = document.row(y)
            x = len(previous) if previous is not None else 0
    elif motion is Motion.RIGHT:
        if x < width:
            x += 1
        elif y < last_row:
            y += 1
            x = 0
    elif motion is Motion.HOME:
        x = 0
    elif motion is Motion.END:
        x = width
    else:
        # Vertical motion keeps the display column, not the stop.
        step = _VERTICAL_STEP[motion]
        if motion in (Motion.PAGE_UP, Motion.PAGE_DOWN):
            step *= max(page_size, 1)
        column = word_index_to_column(row, x)
        y = max(0, min(y + step, last_row))
        x = column_to_word_index(document.row(y), column)

    return position_at(document, y, x)


__all__ = ["Motion", "move"]
