"""Single line of text with cached grapheme and display-width tables."""

from __future__ import annotations

from bisect import bisect_left
from itertools import accumulate
from typing import Iterator, List, Optional, Sequence, Tuple

from .errors import OutOfRangeError, RowEncodingError
from .highlight import HighlightKind, HighlightSpan
from .position import SearchDirection
from .widths import cluster_width, segment


def _validated(text: str | bytes | bytearray) -> str:
    if isinstance(text, (bytes, bytearray)):
        try:
            return bytes(text).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise RowEncodingError(f"Row bytes are not valid UTF-8: {exc}") from exc
    if not isinstance(text, str):
        raise TypeError(f"Row text must be str or bytes, not {type(text).__name__}")
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise RowEncodingError(f"Row text is not well-formed Unicode: {exc}") from exc
    if "\n" in text:
        raise ValueError("Row text cannot contain a line terminator")
    return text


class Row:
    """One line of a document, addressed by grapheme cursor stops.

    ``display_widths`` / ``word_width_index`` hold the cell width of each
    grapheme and ``column_offsets`` the display column at each stop (one more
    entry than there are graphemes). All three are rebuilt whenever the
    content changes.
    """

    __slots__ = ("_content", "_graphemes", "_widths", "_offsets", "highlighted_ranges")

    def __init__(self, content: str = "") -> None:
        self._content = ""
        self._graphemes: List[str] = []
        self._widths: List[int] = []
        self._offsets: List[int] = [0]
        self.highlighted_ranges: List[HighlightSpan] = []
        self._set_content(_validated(content))

    @classmethod
    def from_text(cls, text: str | bytes) -> "Row":
        return cls(_validated(text))

    # -- accessors -----------------------------------------------------

    @property
    def content(self) -> str:
        return self._content

    @property
    def graphemes(self) -> Tuple[str, ...]:
        return tuple(self._graphemes)

    @property
    def display_widths(self) -> Tuple[int, ...]:
        return tuple(self._widths)

    @property
    def word_width_index(self) -> Tuple[int, ...]:
        """Cell width contributed by the grapheme at each cursor stop."""

        return tuple(self._widths)

    @property
    def column_offsets(self) -> Tuple[int, ...]:
        return tuple(self._offsets)

    def grapheme_count(self) -> int:
        return len(self._graphemes)

    def display_width(self) -> int:
        return self._offsets[-1]

    def column_at(self, word_index: int) -> int:
        self._check_stop(word_index)
        return self._offsets[word_index]

    def stop_at_column(self, column: int) -> int:
        """Smallest stop whose display column is ``>= column``, clamped to the row end."""

        if column <= 0:
            return 0
        return min(bisect_left(self._offsets, column), len(self._graphemes))

    def __len__(self) -> int:
        return len(self._graphemes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Row):
            return NotImplemented
        return self._content == other._content

    def __hash__(self) -> int:
        return hash(self._content)

    def __repr__(self) -> str:
        return f"Row({self._content!r})"

    # -- rendering -----------------------------------------------------

    def render(self, start_col: int, end_col: int) -> str:
        return "".join(cluster for _, cluster in self._visible(start_col, end_col))

    def render_spans(
        self, start_col: int, end_col: int
    ) -> List[Tuple[str, HighlightKind]]:
        kinds = self._kinds()
        runs: List[Tuple[str, HighlightKind]] = []
        for index, cluster in self._visible(start_col, end_col):
            kind = kinds[index]
            if runs and runs[-1][1] is kind:
                runs[-1] = (runs[-1][0] + cluster, kind)
            else:
                runs.append((cluster, kind))
        return runs

    def _visible(self, start_col: int, end_col: int) -> Iterator[Tuple[int, str]]:
        # Graphemes straddling either edge are dropped, never split.
        if end_col <= start_col:
            return
        first = bisect_left(self._offsets, max(start_col, 0))
        for index in range(first, len(self._graphemes)):
            if self._offsets[index] + self._widths[index] > end_col:
                break
            cluster = self._graphemes[index]
            yield index, " " if cluster == "\t" else cluster

    # -- mutation ------------------------------------------------------

    def insert_at(self, word_index: int, ch: str) -> None:
        self._check_stop(word_index)
        if not ch:
            return
        head = "".join(self._graphemes[:word_index])
        tail = "".join(self._graphemes[word_index:])
        self._set_content(head + _validated(ch) + tail)

    def delete_at(self, word_index: int) -> None:
        self._check_stop(word_index)
        if word_index == len(self._graphemes):
            return
        graphemes = list(self._graphemes)
        del graphemes[word_index]
        self._set_content("".join(graphemes))

    def split_at(self, word_index: int) -> Tuple["Row", "Row"]:
        self._check_stop(word_index)
        left = Row("".join(self._graphemes[:word_index]))
        right = Row("".join(self._graphemes[word_index:]))
        return left, right

    def append(self, other: "Row") -> None:
        self._set_content(self._content + other._content)

    def _set_content(self, content: str) -> None:
        self._content = content
        self._graphemes = segment(content)
        self._widths = [cluster_width(cluster) for cluster in self._graphemes]
        self._offsets = list(accumulate(self._widths, initial=0))
        self.highlighted_ranges = []

    def _check_stop(self, word_index: int) -> None:
        if not 0 <= word_index <= len(self._graphemes):
            raise OutOfRangeError(
                "Cursor stop outside row",
                index=word_index,
                limit=len(self._graphemes),
            )

    # -- search & highlight --------------------------------------------

    def find(
        self,
        query: str | Sequence[str],
        at: int,
        direction: SearchDirection,
        *,
        inclusive: bool = False,
    ) -> Optional[int]:
        """Return the stop where ``query`` starts, scanning from ``at``.

        Forward considers starts after ``at``, Backward starts before it;
        ``inclusive`` also admits ``at`` itself.
        """

        self._check_stop(at)
        needle = segment(query) if isinstance(query, str) else list(query)
        if not needle:
            return None
        last_start = len(self._graphemes) - len(needle)
        if last_start < 0:
            return None

        if direction is SearchDirection.FORWARD:
            first = at if inclusive else at + 1
            candidates = range(first, last_start + 1)
        else:
            first = at if inclusive else at - 1
            candidates = range(min(first, last_start), -1, -1)

        size = len(needle)
        for start in candidates:
            if self._graphemes[start : start + size] == needle:
                return start
        return None

    def highlight(self, word: Optional[str] = None, *, numbers: bool = True) -> None:
        spans: List[HighlightSpan] = []
        if numbers:
            start: Optional[int] = None
            for index, cluster in enumerate(self._graphemes + [""]):
                if cluster.isdigit():
                    if start is None:
                        start = index
                elif start is not None:
                    spans.append(HighlightSpan(start, index, HighlightKind.NUMBER))
                    start = None

        needle = segment(word) if word else []
        if needle:
            match = self.find(needle, 0, SearchDirection.FORWARD, inclusive=True)
            while match is not None:
                end = match + len(needle)
                spans.append(HighlightSpan(match, end, HighlightKind.MATCH))
                match = self.find(needle, end, SearchDirection.FORWARD, inclusive=True)

        self.highlighted_ranges = spans

    def _kinds(self) -> List[HighlightKind]:
        kinds = [HighlightKind.NONE] * len(self._graphemes)
        # Later spans win, so matches paint over numbers.
        for span in self.highlighted_ranges:
            for index in range(span.start, min(span.end, len(kinds))):
                kinds[index] = span.kind
        return kinds


__all__ = ["Row"]
