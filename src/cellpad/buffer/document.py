"""Ordered rows of a single file plus structural edits and search."""

from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, Sequence

from cellpad.runtime import telemetry

from .errors import OutOfRangeError
from .highlight import FileType, detect_file_type
from .position import Position, SearchDirection
from .row import Row
from .storage import FileLineStore, LineStore, split_lines
from .widths import segment


class Document:
    """List-of-rows text model for one editing session.

    A document always holds at least one row; an empty document is a single
    empty row. ``dirty`` is raised by every mutating call and cleared only by
    a successful ``save``.
    """

    def __init__(
        self,
        rows: Optional[Iterable[Row]] = None,
        *,
        file_name: Optional[str] = None,
        store: Optional[LineStore] = None,
    ) -> None:
        self.rows: List[Row] = list(rows) if rows is not None else []
        if not self.rows:
            self.rows.append(Row())
        self.file_name = file_name
        self.dirty = False
        self._store: LineStore = store or FileLineStore()

    @classmethod
    def from_text(cls, text: str, *, file_name: Optional[str] = None) -> "Document":
        rows = (Row.from_text(line) for line in split_lines(text))
        return cls(rows, file_name=file_name)

    @classmethod
    def open(cls, path: str, *, store: Optional[LineStore] = None) -> "Document":
        """Load ``path`` through ``store``; raises ``DocumentIOError`` on failure."""

        backend = store or FileLineStore()
        with telemetry.span(
            "document::open", component="document", metadata={"path": path}
        ) as handle:
            lines = backend.read_lines(path)
            handle.add_metadata("rows", len(lines))
            document = cls(
                (Row.from_text(line) for line in lines),
                file_name=path,
                store=backend,
            )
        telemetry.record_event(
            "document.open", data={"path": path, "rows": len(document)}
        )
        return document

    def save(self, path: Optional[str] = None) -> None:
        """Write every row through the store and clear ``dirty``.

        Raises ``DocumentIOError`` on failure, leaving ``dirty`` untouched.
        """

        target = path or self.file_name
        if not target:
            raise ValueError("Document has no file name to save to")
        with telemetry.span(
            "document::save",
            component="document",
            metadata={"path": target, "rows": len(self.rows)},
        ):
            self._store.write_lines(target, self.lines())
        self.file_name = target
        self.dirty = False
        telemetry.record_event(
            "document.save", data={"path": target, "rows": len(self.rows)}
        )

    # -- accessors -----------------------------------------------------

    def is_dirty(self) -> bool:
        return self.dirty

    def row(self, y: int) -> Optional[Row]:
        if 0 <= y < len(self.rows):
            return self.rows[y]
        return None

    def is_empty(self) -> bool:
        return len(self.rows) == 1 and not self.rows[0].content

    def lines(self) -> List[str]:
        return [row.content for row in self.rows]

    def file_type(self) -> FileType:
        return detect_file_type(self.file_name)

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(self.rows)

    # -- mutation ------------------------------------------------------

    def insert(self, pos: Position, ch: str) -> Position:
        if ch == "\n":
            self.insert_newline(pos)
            return pos
        self._check_row(pos.y, allow_end=True)
        with telemetry.span("document::insert", component="document"):
            if pos.y == len(self.rows):
                row = Row()
                row.insert_at(0, ch)
                self.rows.append(row)
            else:
                self.rows[pos.y].insert_at(pos.x_word_index, ch)
        self.dirty = True
        return pos

    def insert_newline(self, pos: Position) -> None:
        self._check_row(pos.y, allow_end=True)
        with telemetry.span("document::insert_newline", component="document"):
            if pos.y == len(self.rows):
                self.rows.append(Row())
            else:
                left, right = self.rows[pos.y].split_at(pos.x_word_index)
                self.rows[pos.y : pos.y + 1] = [left, right]
        self.dirty = True

    def delete(self, pos: Position) -> None:
        if pos.y >= len(self.rows):
            return
        row = self.rows[pos.y]
        with telemetry.span("document::delete", component="document"):
            if pos.x_word_index == len(row) and pos.y + 1 < len(self.rows):
                row.append(self.rows.pop(pos.y + 1))
            else:
                row.delete_at(pos.x_word_index)
        self.dirty = True

    def _check_row(self, y: int, *, allow_end: bool = False) -> None:
        limit = len(self.rows) if allow_end else len(self.rows) - 1
        if not 0 <= y <= limit:
            raise OutOfRangeError("Row index outside document", index=y, limit=limit)

    # -- search & highlight --------------------------------------------

    def find(
        self,
        query: str,
        at: Position,
        direction: SearchDirection,
        *,
        inclusive: bool = False,
    ) -> Optional[Position]:
        """Locate ``query`` scanning from ``at`` towards one end of the document.

        The scan stops at the document boundary; it never wraps around.
        """

        if at.y >= len(self.rows):
            return None
        needle: Sequence[str] = segment(query)
        if not needle:
            return None

        forward = direction is SearchDirection.FORWARD
        y = at.y
        x = at.x_word_index
        first_row = True
        while 0 <= y < len(self.rows):
            row = self.rows[y]
            if first_row:
                match = row.find(needle, x, direction, inclusive=inclusive)
            elif forward:
                match = row.find(needle, 0, direction, inclusive=True)
            else:
                match = row.find(needle, len(row), direction, inclusive=True)
            if match is not None:
                return Position(y=y, x_word_index=match, x=row.column_at(match))
            first_row = False
            y = y + 1 if forward else y - 1
        return None

    def highlight(self, word: Optional[str], until: Optional[int] = None) -> None:
        numbers = self.file_type().highlight_numbers
        end = len(self.rows) if until is None else min(until, len(self.rows))
        for row in self.rows[:end]:
            row.highlight(word, numbers=numbers)


__all__ = ["Document"]
