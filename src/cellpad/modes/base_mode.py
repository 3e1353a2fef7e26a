"""Base classes and shared plumbing for editor modes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Tuple

from cellpad.session import EditorSession


@dataclass(slots=True)
class KeyInput:
    """Decoded key event: ``key`` is a name ("LEFT", "s") and ``text`` its printable form."""

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None


@dataclass(slots=True)
class ModeResult:
    consumed: bool
    switch_to: Optional[str] = None
    status: str = "ok"
    message: Optional[str] = None
    timeout_ms: Optional[int] = None


@dataclass(slots=True)
class ModeContext:
    """Services every mode reaches through: the session, the bus, and extras."""

    session: EditorSession
    bus: "ModeBus"
    extras: Dict[str, object] = field(default_factory=dict)


class ModeBus:
    """Minimal event bus letting modes and adapters exchange signals."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


class Mode:
    name: str = "mode"

    def __init__(self, context: ModeContext) -> None:
        self.context = context

    @property
    def session(self) -> EditorSession:
        return self.context.session

    def on_enter(self, previous: Optional[str]) -> None:  # pragma: no cover - no-op
        del previous

    def on_exit(self, next_mode: Optional[str]) -> None:  # pragma: no cover - no-op
        del next_mode

    def handle_key(self, key: KeyInput) -> ModeResult:  # pragma: no cover - abstract
        raise NotImplementedError

    def handle_timeout(self) -> ModeResult:
        """Invoked by the manager when a pending key sequence expires."""

        return ModeResult(consumed=False, status="timeout")


def text_input(key: KeyInput) -> Optional[str]:
    """Printable text typed without ctrl/alt held, or ``None``."""

    modifiers = {modifier.lower() for modifier in key.modifiers}
    if not key.text or modifiers & {"ctrl", "alt", "meta"}:
        return None
    return key.text if key.text.isprintable() else None


__all__ = [
    "KeyInput",
    "ModeResult",
    "ModeContext",
    "ModeBus",
    "Mode",
    "text_input",
]
