"""Single-line prompt used for save-as."""

from __future__ import annotations

from typing import Optional

from cellpad.actions import file as file_actions

from .base_mode import KeyInput, ModeResult, text_input
from .keymap_helpers import prompt_state, show_prompt
from .keymap_mode import KeymapMode


class PromptMode(KeymapMode):
    name = "prompt"

    def on_enter(self, previous: Optional[str]) -> None:
        del previous
        request = self.context.extras.pop("prompt_request", None)
        if not isinstance(request, file_actions.PromptRequest):
            raise RuntimeError("prompt mode entered without a prompt request")
        state = prompt_state(self.context)
        state["request"] = request
        state["input"] = ""
        show_prompt(self.context, request.label)

    def on_exit(self, next_mode: Optional[str]) -> None:
        super().on_exit(next_mode)
        state = prompt_state(self.context)
        state.pop("request", None)
        state.pop("input", None)
        show_prompt(self.context, "")

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        text = text_input(key)
        if text is None:
            return ModeResult(consumed=True, status="miss", message="ignored")
        return file_actions.prompt_type(self.context, text)


__all__ = ["PromptMode"]
