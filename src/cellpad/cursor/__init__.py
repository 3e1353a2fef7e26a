"""Cursor coordinate translation and motion."""

from .motion import Motion, move
from .translator import column_to_word_index, position_at, word_index_to_column

__all__ = [
    "Motion",
    "move",
    "word_index_to_column",
    "column_to_word_index",
    "position_at",
]
