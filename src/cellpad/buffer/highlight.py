"""Highlight classes for row spans and file-type detection."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional


class HighlightKind(str, Enum):
    NONE = "none"
    NUMBER = "number"
    MATCH = "match"


@dataclass(frozen=True, slots=True)
class HighlightSpan:
    """Half-open grapheme range ``[start, end)`` tagged with a highlight class."""

    start: int
    end: int
    kind: HighlightKind

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"Invalid highlight span [{self.start}, {self.end})")


@dataclass(frozen=True, slots=True)
class FileType:
    name: str
    highlight_numbers: bool = False


PLAIN = FileType("No filetype")

_BY_EXTENSION: Mapping[str, FileType] = {
    ".py": FileType("Python", highlight_numbers=True),
    ".rs": FileType("Rust", highlight_numbers=True),
    ".c": FileType("C", highlight_numbers=True),
    ".h": FileType("C", highlight_numbers=True),
    ".js": FileType("JavaScript", highlight_numbers=True),
    ".ts": FileType("TypeScript", highlight_numbers=True),
    ".go": FileType("Go", highlight_numbers=True),
    ".json": FileType("JSON", highlight_numbers=True),
    ".toml": FileType("TOML", highlight_numbers=True),
    ".md": FileType("Markdown"),
    ".txt": FileType("Text"),
}


def detect_file_type(file_name: Optional[str]) -> FileType:
    if not file_name:
        return PLAIN
    _, extension = os.path.splitext(file_name)
    return _BY_EXTENSION.get(extension.lower(), PLAIN)


__all__ = ["HighlightKind", "HighlightSpan", "FileType", "PLAIN", "detect_file_type"]
