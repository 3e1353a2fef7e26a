"""Textual-facing adapter that wires ModeManager results into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from cellpad.modes import KeyInput, ModeResult
from cellpad.modes.keymap_helpers import prompt_state
from cellpad.modes.mode_manager import ModeManager
from cellpad.runtime import telemetry
from cellpad.session import EditorSession


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_view: Callable[[EditorSession], None]
    update_status: Callable[[str], None] = _noop
    show_message: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    log: Callable[[str], None] = _noop


class TextualEditorAdapter:
    """Bridges ModeManager and bus events to a Textual-friendly surface."""

    def __init__(self, manager: ModeManager, hooks: TextualUIHooks) -> None:
        self.manager = manager
        self.hooks = hooks
        self.logger = telemetry.get_logger("cellpad.adapters.textual")
        bus = manager.context.bus
        for event in ("editor.quit", "prompt.update"):
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )
        self.refresh()

    @property
    def session(self) -> EditorSession:
        return self.manager.context.session

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> ModeResult:
        """Translate a decoded key into a KeyInput and dispatch it."""

        mods = tuple(str(mod).lower() for mod in modifiers)
        self._log_state("key ->", key=key, text=text, mods=mods)
        result = self.manager.handle_key(KeyInput(key=key, text=text, modifiers=mods))
        self.refresh()
        self._log_state(
            "result <-",
            consumed=result.consumed,
            status=result.status,
            message=result.message,
            switch_to=result.switch_to,
        )
        return result

    def resize(self, width: int, height: int) -> None:
        self.session.resize(width, height)
        self.refresh()

    def tick(self, now: Optional[float] = None) -> Dict[str, ModeResult]:
        """Expire pending sequences and age the status message."""

        results = self.manager.process_timeouts(now)
        if results:
            self.refresh(now)
        else:
            self.hooks.show_message(self.message_line(now))
        return results

    def message_line(self, now: Optional[float] = None) -> str:
        prompt = str(prompt_state(self.manager.context).get("text", ""))
        if prompt:
            return prompt[: self.session.viewport.width]
        return self.session.message_line(now)

    def refresh(self, now: Optional[float] = None) -> None:
        self.session.scroll()
        self.hooks.update_view(self.session)
        self.hooks.update_status(self.session.status_line())
        self.hooks.show_message(self.message_line(now))

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name)
        self.hooks.handle_event(name, payload)
        if name == "prompt.update":
            self.hooks.show_message(self.message_line())

    def _log_state(self, prefix: str, **fields: object) -> None:
        active = self.manager.active_mode
        snapshot: Dict[str, object] = {
            "mode": active.name if active else "?",
            "cursor": (self.session.cursor.y, self.session.cursor.x_word_index),
            "dirty": self.session.document.is_dirty(),
            "pending_timeout": self.manager.has_pending(),
        }
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        line = " ".join([prefix, *(f"{k}={v!r}" for k, v in snapshot.items())])
        self.logger.debug(line)
        self.hooks.log(line)


__all__ = ["TextualEditorAdapter", "TextualUIHooks"]
