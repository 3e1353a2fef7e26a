"""Incremental search as an explicit state machine.

The session starts ``ACTIVE`` with the cursor it was opened from as its
anchor. Query edits and arrow events move ``position`` between matches;
``cancel`` restores the anchor and ``accept`` keeps the current match.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from cellpad.buffer import Document, Position, SearchDirection
from cellpad.buffer.widths import segment
from cellpad.runtime import telemetry


class SearchState(str, Enum):
    ACTIVE = "active"
    ACCEPTED = "accepted"
    CANCELLED = "cancelled"


class SearchSession:
    def __init__(self, document: Document, anchor: Position) -> None:
        self.document = document
        self.anchor = anchor
        self.position = anchor
        self.direction = SearchDirection.FORWARD
        self.state = SearchState.ACTIVE
        self._query: List[str] = []
        self.last_matched = False

    @property
    def query(self) -> str:
        return "".join(self._query)

    @property
    def active(self) -> bool:
        return self.state is SearchState.ACTIVE

    # -- events --------------------------------------------------------

    def type_text(self, text: str) -> Optional[Position]:
        self._require_active()
        printable = "".join(ch for ch in text if ch.isprintable())
        if printable:
            self._query.extend(segment(printable))
        return self._refine()

    def erase(self) -> Optional[Position]:
        self._require_active()
        if self._query:
            self._query.pop()
        return self._refine()

    def next(self) -> Optional[Position]:
        self._require_active()
        self.direction = SearchDirection.FORWARD
        return self._seek(inclusive=False)

    def previous(self) -> Optional[Position]:
        self._require_active()
        self.direction = SearchDirection.BACKWARD
        return self._seek(inclusive=False)

    def cancel(self) -> Position:
        self._require_active()
        self.state = SearchState.CANCELLED
        self.position = self.anchor
        telemetry.record_event("search.cancel", data={"query": self.query})
        return self.position

    def accept(self) -> Position:
        self._require_active()
        if not self._query:
            return self.cancel()
        self.state = SearchState.ACCEPTED
        telemetry.record_event(
            "search.accept",
            data={"query": self.query, "y": self.position.y, "x": self.position.x},
        )
        return self.position

    # -- internals -----------------------------------------------------

    def _refine(self) -> Optional[Position]:
        # A longer or shorter query may still match where the cursor sits.
        self.direction = SearchDirection.FORWARD
        return self._seek(inclusive=True)

    def _seek(self, *, inclusive: bool) -> Optional[Position]:
        found = self.document.find(
            self.query, self.position, self.direction, inclusive=inclusive
        )
        self.last_matched = found is not None
        if found is not None:
            self.position = found
        return found

    def _require_active(self) -> None:
        if self.state is not SearchState.ACTIVE:
            raise RuntimeError(f"Search session already {self.state.value}")


__all__ = ["SearchSession", "SearchState"]
