"""Cursor coordinates and search direction."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum


class SearchDirection(str, Enum):
    FORWARD = "forward"
    BACKWARD = "backward"


@dataclass(frozen=True, slots=True)
class Position:
    """Logical cursor: row index, cursor stop within the row, cached display column."""

    y: int = 0
    x_word_index: int = 0
    x: int = 0

    def __post_init__(self) -> None:
        if self.y < 0 or self.x_word_index < 0 or self.x < 0:
            raise ValueError(f"Position components cannot be negative: {self!r}")

    def with_stop(self, x_word_index: int, x: int) -> "Position":
        return replace(self, x_word_index=x_word_index, x=x)


__all__ = ["Position", "SearchDirection"]
