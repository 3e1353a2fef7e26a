"""Incremental search actions bridging ``SearchSession`` and the editor session."""

from __future__ import annotations

from cellpad.keymaps import ResolutionMatch
from cellpad.modes.base_mode import ModeContext, ModeResult
from cellpad.modes.keymap_helpers import show_prompt
from cellpad.search import SearchSession

SEARCH_PROMPT = "Search (ESC to cancel, Arrows to navigate): "


def require_search(context: ModeContext) -> SearchSession:
    search = context.extras.get("search")
    if not isinstance(search, SearchSession):
        raise RuntimeError("ModeContext.extras missing 'search'")
    return search


def sync(context: ModeContext, search: SearchSession) -> None:
    """Mirror the search position, query and prompt onto the session."""

    session = context.session
    session.cursor = search.position
    session.scroll()
    session.highlighted_word = search.query if search.active and search.query else None
    show_prompt(context, SEARCH_PROMPT + search.query if search.active else "")


def start(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return ModeResult(consumed=True, switch_to="search", message="search_start")


def type_text(context: ModeContext, text: str) -> ModeResult:
    search = require_search(context)
    search.type_text(text)
    sync(context, search)
    return ModeResult(consumed=True, message="search_input")


def erase(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    search = require_search(context)
    search.erase()
    sync(context, search)
    return ModeResult(consumed=True, message="search_erase")


def next_match(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    search = require_search(context)
    found = search.next()
    sync(context, search)
    return ModeResult(
        consumed=True, status="ok" if found else "miss", message="search_next"
    )


def previous_match(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    search = require_search(context)
    found = search.previous()
    sync(context, search)
    return ModeResult(
        consumed=True, status="ok" if found else "miss", message="search_previous"
    )


def cancel(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    search = require_search(context)
    search.cancel()
    sync(context, search)
    return ModeResult(consumed=True, switch_to="edit", message="search_cancel")


def accept(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    search = require_search(context)
    search.accept()
    sync(context, search)
    return ModeResult(consumed=True, switch_to="edit", message="search_accept")


__all__ = [
    "SEARCH_PROMPT",
    "require_search",
    "sync",
    "start",
    "type_text",
    "erase",
    "next_match",
    "previous_match",
    "cancel",
    "accept",
]
