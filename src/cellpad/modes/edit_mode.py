"""Default mode: arrows move, printable keys insert."""

from __future__ import annotations

from .base_mode import KeyInput, ModeResult, text_input
from .keymap_mode import KeymapMode


class EditMode(KeymapMode):
    name = "edit"

    def handle_key(self, key: KeyInput) -> ModeResult:
        result = super().handle_key(key)
        # Any key other than a guarded quit disarms the quit countdown.
        if result.status not in ("quit_pending", "pending"):
            self.session.reset_quit_guard()
        return result

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        text = text_input(key)
        if text is None:
            return ModeResult(consumed=False, status="miss", message="unhandled")
        self.session.insert_text(text)
        return ModeResult(consumed=True, message="insert_text")


__all__ = ["EditMode"]
