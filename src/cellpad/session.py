"""Editing session state owned by the key-dispatch loop."""

from __future__ import annotations

import time
from bisect import bisect_left
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from cellpad import __version__
from cellpad.buffer import (
    Document,
    DocumentIOError,
    HighlightKind,
    Position,
    clip_to_width,
    text_width,
)
from cellpad.config import EditorSettings
from cellpad.cursor import Motion, move, position_at
from cellpad.runtime import telemetry

HELP_MESSAGE = "HELP: Ctrl-F = find | Ctrl-S = save | Ctrl-Q = quit"

Spans = List[Tuple[str, HighlightKind]]


@dataclass(slots=True)
class Size:
    width: int = 80
    height: int = 24


@dataclass(slots=True)
class Offset:
    """Scroll offset: first visible display column and first visible row."""

    x: int = 0
    y: int = 0


@dataclass(slots=True)
class StatusMessage:
    text: str = ""
    time: float = field(default_factory=time.monotonic)


class EditorSession:
    """Document, cursor, scroll offset and status for one editing session."""

    def __init__(
        self,
        document: Optional[Document] = None,
        *,
        settings: Optional[EditorSettings] = None,
        viewport: Optional[Size] = None,
        status: str = HELP_MESSAGE,
    ) -> None:
        self.document = document or Document()
        self.settings = settings or EditorSettings()
        self.viewport = viewport or Size()
        self.cursor = Position()
        self.offset = Offset()
        self.status = StatusMessage(status)
        self.quit_remaining = self.settings.quit_times
        self.should_quit = False
        self.highlighted_word: Optional[str] = None

    @classmethod
    def open(
        cls,
        path: Optional[str],
        *,
        settings: Optional[EditorSettings] = None,
        viewport: Optional[Size] = None,
    ) -> "EditorSession":
        """Open ``path``, falling back to an empty document with an error status.

        A missing file keeps ``path`` as the save target. Any other failure
        leaves the fallback unnamed so the unreadable file is never overwritten.
        """

        if not path:
            return cls(settings=settings, viewport=viewport)
        try:
            document = Document.open(path)
        except DocumentIOError as exc:
            telemetry.record_event(
                "session.open_failed",
                level="warning",
                data={"path": path, "error": str(exc)},
            )
            missing = isinstance(exc.__cause__, FileNotFoundError)
            return cls(
                Document(file_name=path if missing else None),
                settings=settings,
                viewport=viewport,
                status=f"ERR: Could not open file: {path}",
            )
        return cls(document, settings=settings, viewport=viewport)

    # -- status --------------------------------------------------------

    def set_status(self, text: str) -> None:
        self.status = StatusMessage(text)

    def message_line(self, now: Optional[float] = None) -> str:
        current = time.monotonic() if now is None else now
        if current - self.status.time < self.settings.status_timeout:
            return clip_to_width(self.status.text, self.viewport.width)
        return ""

    def status_line(self, width: Optional[int] = None) -> str:
        width = self.viewport.width if width is None else width
        document = self.document
        name = clip_to_width(document.file_name or "[No Name]", 20)
        modified = " (modified)" if document.is_dirty() else ""
        left = f"{name} - {len(document)} lines{modified}"
        right = f"{document.file_type().name} | {self.cursor.y + 1}/{len(document)}"
        padding = " " * max(width - text_width(left) - text_width(right), 0)
        return clip_to_width(f"{left}{padding}{right}", width)

    # -- viewport ------------------------------------------------------

    def resize(self, width: int, height: int) -> None:
        self.viewport = Size(width=max(width, 1), height=max(height, 1))
        self.scroll()

    def page_size(self) -> int:
        return self.settings.page_size or self.viewport.height

    def scroll(self) -> None:
        """Shift the offset so the cursor stays inside the viewport."""

        width, height = self.viewport.width, self.viewport.height
        x, y = self.cursor.x, self.cursor.y
        if y < self.offset.y:
            self.offset.y = y
        elif y >= self.offset.y + height:
            self.offset.y = y - height + 1
        if x < self.offset.x:
            self.offset.x = x
        elif x >= self.offset.x + width:
            self.offset.x = x - width + 1

    def visible_rows(self) -> List[Optional[Spans]]:
        """Spans for each screen line; ``None`` marks a line past the document end.

        A wide grapheme cut by the left edge leaves a blank cell, so every
        visible grapheme stays at its own screen column.
        """

        start = self.offset.x
        end = start + self.viewport.width
        until = self.offset.y + self.viewport.height
        self.document.highlight(self.highlighted_word, until=until)
        lines: List[Optional[Spans]] = []
        for screen_row in range(self.viewport.height):
            row = self.document.row(self.offset.y + screen_row)
            if row is None:
                lines.append(None)
                continue
            spans = row.render_spans(start, end)
            lead = _leading_gap(row.column_offsets, start, end)
            if lead:
                spans.insert(0, (" " * lead, HighlightKind.NONE))
            lines.append(spans)
        return lines

    def welcome_line(self) -> Optional[int]:
        """Screen line that carries the banner, when the document is empty."""

        if not self.document.is_empty():
            return None
        return self.viewport.height // 3

    def welcome_message(self) -> str:
        width = self.viewport.width
        message = f"Cellpad editor -- version {__version__}"
        padding = max(width - len(message), 0) // 2
        return clip_to_width(f"~{' ' * max(padding - 1, 0)}{message}", width)

    # -- editing -------------------------------------------------------

    def move(self, motion: Motion) -> Position:
        self.cursor = move(
            self.document, self.cursor, motion, page_size=self.page_size()
        )
        self.scroll()
        return self.cursor

    def insert_text(self, text: str) -> None:
        if text == "\n":
            self.insert_newline()
            return
        row = self.document.row(self.cursor.y)
        before = len(row) if row is not None else 0
        self.document.insert(self.cursor, text)
        after = len(self.document.rows[self.cursor.y])
        self.cursor = position_at(
            self.document,
            self.cursor.y,
            self.cursor.x_word_index + max(after - before, 0),
        )
        self.scroll()

    def insert_newline(self) -> None:
        self.document.insert_newline(self.cursor)
        self.cursor = position_at(self.document, self.cursor.y + 1, 0)
        self.scroll()

    def delete_forward(self) -> None:
        self.document.delete(self.cursor)
        self.cursor = position_at(
            self.document, self.cursor.y, self.cursor.x_word_index
        )
        self.scroll()

    def delete_backward(self) -> None:
        """Delete left of the cursor; at a row start, join onto the previous row.

        The cursor lands on the previous row's pre-join end.
        """

        if self.cursor.y == 0 and self.cursor.x_word_index == 0:
            return
        self.cursor = move(self.document, self.cursor, Motion.LEFT)
        self.delete_forward()

    # -- file & lifecycle ----------------------------------------------

    def save(self, path: Optional[str] = None) -> bool:
        if not (path or self.document.file_name):
            self.set_status("Save aborted.")
            return False
        try:
            self.document.save(path)
        except DocumentIOError as exc:
            telemetry.record_event(
                "session.save_failed", level="error", data={"error": str(exc)}
            )
            self.set_status("Error writing file!")
            return False
        self.set_status("File saved successfully.")
        return True

    def request_quit(self) -> bool:
        """Quit unless unsaved changes still need confirming; returns ``should_quit``."""

        if self.document.is_dirty() and self.quit_remaining > 0:
            self.set_status(
                "WARNING! File has unsaved changes. "
                f"Press Ctrl-Q {self.quit_remaining} more times to quit."
            )
            self.quit_remaining -= 1
            return False
        self.should_quit = True
        return True

    def reset_quit_guard(self) -> None:
        if self.quit_remaining < self.settings.quit_times:
            self.quit_remaining = self.settings.quit_times
            self.set_status("")



def _leading_gap(offsets: Tuple[int, ...], start: int, end: int) -> int:
    if start <= 0:
        return 0
    first = min(bisect_left(offsets, start), len(offsets) - 1)
    return max(min(offsets[first], end) - start, 0)

__all__ = ["EditorSession", "StatusMessage", "Size", "Offset", "HELP_MESSAGE"]
