"""Render an editing session's viewport as rich ``Text``."""

from __future__ import annotations

from typing import Dict, Optional

from rich.text import Text

from cellpad.buffer import HighlightKind
from cellpad.buffer.widths import cluster_width, segment
from cellpad.session import EditorSession

HIGHLIGHT_STYLES: Dict[HighlightKind, str] = {
    HighlightKind.NONE: "",
    HighlightKind.NUMBER: "red",
    HighlightKind.MATCH: "bold #268bd2",
}
CURSOR_STYLE = "reverse"


def render_view(session: EditorSession, *, show_cursor: bool = True) -> Text:
    """One ``Text`` line per viewport row, joined by newlines."""

    lines = session.visible_rows()
    welcome = session.welcome_line()
    cursor_line = session.cursor.y - session.offset.y
    cursor_col = session.cursor.x - session.offset.x
    result = Text(no_wrap=True, overflow="crop")
    for screen_row, spans in enumerate(lines):
        if screen_row:
            result.append("\n")
        if spans is None:
            if screen_row == welcome:
                result.append(session.welcome_message(), style="dim")
            else:
                result.append("~", style="dim")
            continue
        line = Text(no_wrap=True)
        for text, kind in spans:
            line.append(text, style=HIGHLIGHT_STYLES.get(kind, ""))
        if show_cursor and screen_row == cursor_line:
            _mark_cursor(line, cursor_col)
        result.append_text(line)
    return result


def _mark_cursor(line: Text, column: int) -> None:
    index = _char_index_at_column(line.plain, column)
    if index is None:
        line.append(" ", style=CURSOR_STYLE)
        return
    end = index + len(next(iter(segment(line.plain[index:])), " "))
    line.stylize(CURSOR_STYLE, index, end)


def _char_index_at_column(plain: str, column: int) -> Optional[int]:
    col = 0
    index = 0
    for cluster in segment(plain):
        if col >= column:
            return index
        col += cluster_width(cluster)
        index += len(cluster)
    return None


__all__ = ["render_view", "HIGHLIGHT_STYLES", "CURSOR_STYLE"]
