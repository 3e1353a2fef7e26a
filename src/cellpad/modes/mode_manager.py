"""Mode manager owning the active mode and pending-sequence timers."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Dict, Optional, Type

from cellpad.config import EditorSettings
from cellpad.keymaps import KeymapRegistry, KeymapResolver
from cellpad.keymaps.defaults import load_default_keymaps
from cellpad.runtime import telemetry
from cellpad.session import EditorSession

from .base_mode import KeyInput, Mode, ModeBus, ModeContext, ModeResult
from .edit_mode import EditMode
from .prompt_mode import PromptMode
from .search_mode import SearchMode


@dataclass
class PendingTimeout:
    deadline: float
    timeout_ms: int
    generation: int


class ModeManager:
    """Dispatches keys to the active mode and applies its transitions."""

    def __init__(
        self,
        context: ModeContext,
        *,
        keymap_registry: KeymapRegistry | None = None,
        keymap_resolver: KeymapResolver | None = None,
        load_defaults: bool = True,
    ) -> None:
        self.context = context
        self._modes: Dict[str, Mode] = {}
        self._active: Optional[str] = None
        self.logger = telemetry.get_logger("cellpad.modes")
        self.keymap_registry = keymap_registry or KeymapRegistry(
            logger_name="cellpad.keymaps"
        )
        if load_defaults and keymap_registry is None:
            load_default_keymaps(self.keymap_registry)
        self.keymap_resolver = keymap_resolver or KeymapResolver(
            self.keymap_registry, logger_name="cellpad.keymaps"
        )
        extras = self.context.extras
        extras.setdefault("keymap_registry", self.keymap_registry)
        extras.setdefault("keymap_resolver", self.keymap_resolver)
        extras.setdefault("keymap_flags", {})
        extras.setdefault("mode_manager", self)
        self._pending_timeouts: Dict[str, PendingTimeout] = {}
        self._timer_counter = 0

    @property
    def active_mode(self) -> Optional[Mode]:
        if self._active is None:
            return None
        return self._modes.get(self._active)

    def register_mode(
        self, mode_cls: Type[Mode], /, *mode_args: object, **mode_kwargs: object
    ) -> Mode:
        mode = mode_cls(self.context, *mode_args, **mode_kwargs)
        if mode.name in self._modes:
            raise ValueError(f"Mode '{mode.name}' already registered")
        self._modes[mode.name] = mode
        if self._active is None:
            self._active = mode.name
            mode.on_enter(None)
        return mode

    def switch_mode(self, name: str) -> None:
        if name not in self._modes:
            raise KeyError(f"Unknown mode '{name}'")
        previous = self.active_mode
        if previous is not None and previous.name == name:
            return
        if previous is not None:
            self.cancel_timeout(previous.name)
            previous.on_exit(name)
        self._active = name
        self._modes[name].on_enter(previous.name if previous else None)
        telemetry.record_event("mode.switch", data={"mode": name})

    def handle_key(self, key: KeyInput) -> ModeResult:
        mode = self.active_mode
        if mode is None:
            raise RuntimeError("No active mode registered")
        with telemetry.span(
            f"mode::{mode.name}",
            component="modes",
            metadata={"key": key.key, "mode": mode.name},
        ):
            result = mode.handle_key(key)
        return self._after_mode_result(mode, result)

    def arm_timeout(self, mode_name: str, timeout_ms: int) -> None:
        self._timer_counter += 1
        self._pending_timeouts[mode_name] = PendingTimeout(
            deadline=time.monotonic() + timeout_ms / 1000.0,
            timeout_ms=timeout_ms,
            generation=self._timer_counter,
        )

    def cancel_timeout(self, mode_name: str) -> None:
        self._pending_timeouts.pop(mode_name, None)

    def has_pending(self) -> bool:
        return bool(self._pending_timeouts)

    def process_timeouts(self, now: Optional[float] = None) -> Dict[str, ModeResult]:
        current = time.monotonic() if now is None else now
        expired = [
            (name, timer.generation)
            for name, timer in self._pending_timeouts.items()
            if timer.deadline <= current
        ]
        return {name: self._trigger_timeout(name, gen) for name, gen in expired}

    def force_timeout(self, mode_name: Optional[str] = None) -> Dict[str, ModeResult]:
        timers = list(self._pending_timeouts.items())
        if mode_name is not None:
            timers = [(name, t) for name, t in timers if name == mode_name]
        return {
            name: self._trigger_timeout(name, timer.generation)
            for name, timer in timers
        }

    def _after_mode_result(self, mode: Mode, result: ModeResult) -> ModeResult:
        if result.timeout_ms:
            self.arm_timeout(mode.name, result.timeout_ms)
        else:
            self.cancel_timeout(mode.name)
        if result.switch_to:
            self.switch_mode(result.switch_to)
        return result

    def _trigger_timeout(self, mode_name: str, generation: int) -> ModeResult:
        timer = self._pending_timeouts.get(mode_name)
        mode = self._modes.get(mode_name)
        if timer is None or timer.generation != generation or mode is None:
            return ModeResult(consumed=False, status="timeout")
        self._pending_timeouts.pop(mode_name, None)
        with telemetry.span(
            f"mode_timeout::{mode_name}",
            component="modes",
            metadata={"mode": mode_name},
        ):
            result = mode.handle_timeout()
        return self._after_mode_result(mode, result)


def create_manager(
    session: EditorSession,
    *,
    bus: Optional[ModeBus] = None,
    settings: Optional[EditorSettings] = None,
) -> ModeManager:
    """Build a manager with the default keymaps and the edit/search/prompt modes."""

    settings = settings or session.settings
    context = ModeContext(session=session, bus=bus or ModeBus())
    manager = ModeManager(context)
    for mode_cls in (EditMode, SearchMode, PromptMode):
        manager.register_mode(
            mode_cls, default_pending_timeout_ms=settings.pending_timeout_ms
        )
    return manager


__all__ = ["ModeManager", "PendingTimeout", "create_manager"]
