"""Exceptions raised by the buffer layer."""

from __future__ import annotations

from typing import Optional


class OutOfRangeError(IndexError):
    """Raised when a caller addresses a row or cursor stop that does not exist."""

    def __init__(self, message: str, *, index: int, limit: int) -> None:
        super().__init__(f"{message} (index={index}, limit={limit})")
        self.index = index
        self.limit = limit


class RowEncodingError(ValueError):
    """Raised when row text is not well-formed Unicode."""


class DocumentIOError(RuntimeError):
    """Raised when the file collaborator cannot read or write a document."""

    def __init__(self, message: str, *, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.path = path


__all__ = ["OutOfRangeError", "RowEncodingError", "DocumentIOError"]
