"""Incremental search mode driving a ``SearchSession``."""

from __future__ import annotations

from typing import Optional

from cellpad.actions import search as search_actions
from cellpad.search import SearchSession

from .base_mode import KeyInput, ModeResult, text_input
from .keymap_helpers import show_prompt
from .keymap_mode import KeymapMode


class SearchMode(KeymapMode):
    name = "search"

    def on_enter(self, previous: Optional[str]) -> None:
        del previous
        search = SearchSession(self.session.document, self.session.cursor)
        self.context.extras["search"] = search
        search_actions.sync(self.context, search)

    def on_exit(self, next_mode: Optional[str]) -> None:
        super().on_exit(next_mode)
        search = self.context.extras.pop("search", None)
        self.session.highlighted_word = None
        if isinstance(search, SearchSession) and search.active:
            # Leaving without accept or cancel keeps the anchor.
            search.cancel()
            self.session.cursor = search.position
            self.session.scroll()
        show_prompt(self.context, "")

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        text = text_input(key)
        if text is None:
            return ModeResult(consumed=True, status="miss", message="ignored")
        return search_actions.type_text(self.context, text)


__all__ = ["SearchMode"]
