"""Helper utilities for keymap-driven modes."""

from __future__ import annotations

from typing import Mapping, MutableMapping, cast

from cellpad.keymaps import KeymapResolver, make_token

from .base_mode import KeyInput, ModeContext


def key_to_token(key: KeyInput) -> str:
    return make_token(key.key, key.modifiers)


def require_keymap_resolver(context: ModeContext) -> KeymapResolver:
    resolver = context.extras.get("keymap_resolver")
    if not isinstance(resolver, KeymapResolver):
        raise RuntimeError("ModeContext.extras missing 'keymap_resolver'")
    return resolver


def keymap_flag_context(context: ModeContext) -> Mapping[str, bool]:
    flags = context.extras.setdefault("keymap_flags", {})
    return cast(Mapping[str, bool], flags)


def update_flag(context: ModeContext, key: str, value: bool) -> None:
    flags = cast(
        MutableMapping[str, bool], context.extras.setdefault("keymap_flags", {})
    )
    flags[key] = value


def prompt_state(context: ModeContext) -> MutableMapping[str, object]:
    state = cast(
        MutableMapping[str, object], context.extras.setdefault("prompt_state", {})
    )
    state.setdefault("text", "")
    return state


def show_prompt(context: ModeContext, text: str) -> None:
    prompt_state(context)["text"] = text
    context.bus.emit("prompt.update", text)


__all__ = [
    "key_to_token",
    "require_keymap_resolver",
    "keymap_flag_context",
    "update_flag",
    "prompt_state",
    "show_prompt",
]
