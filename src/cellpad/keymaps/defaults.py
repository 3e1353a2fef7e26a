"""Built-in actions and the bindings that reach them in each mode."""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Sequence

from cellpad.actions import editing, file, search
from cellpad.actions.motion import MOTION_HANDLERS
from cellpad.cursor import Motion

from .models import ActionRef, Binding, KeySequence, WhenClause
from .registry import KeymapRegistry

_MOTION_KEYS = {
    Motion.LEFT: "LEFT",
    Motion.RIGHT: "RIGHT",
    Motion.UP: "UP",
    Motion.DOWN: "DOWN",
    Motion.HOME: "HOME",
    Motion.END: "END",
    Motion.PAGE_UP: "PAGEUP",
    Motion.PAGE_DOWN: "PAGEDOWN",
}

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    *(
        ActionRef(
            id=f"motion.{motion.value}",
            handler=MOTION_HANDLERS[motion],
            description=f"Move cursor {motion.value.replace('_', ' ')}",
        )
        for motion in Motion
    ),
    ActionRef("edit.newline", editing.insert_newline, "Split the row at the cursor"),
    ActionRef("edit.insert_tab", editing.insert_tab, "Insert a tab"),
    ActionRef(
        "edit.delete_forward", editing.delete_forward, "Delete under the cursor"
    ),
    ActionRef(
        "edit.delete_backward", editing.delete_backward, "Delete left of the cursor"
    ),
    ActionRef("file.save", file.save, "Save, prompting for a name if needed"),
    ActionRef("file.quit", file.quit_editor, "Quit"),
    ActionRef("file.quit_guarded", file.quit_guarded, "Quit after confirmation"),
    ActionRef("prompt.submit", file.prompt_submit, "Submit the prompt"),
    ActionRef("prompt.cancel", file.prompt_cancel, "Abort the prompt"),
    ActionRef("prompt.erase", file.prompt_erase, "Erase the last prompt character"),
    ActionRef("search.start", search.start, "Start incremental search"),
    ActionRef("search.next", search.next_match, "Jump to the next match"),
    ActionRef("search.previous", search.previous_match, "Jump to the previous match"),
    ActionRef("search.erase", search.erase, "Erase the last query character"),
    ActionRef("search.cancel", search.cancel, "Cancel search, restoring the cursor"),
    ActionRef("search.accept", search.accept, "Keep the current match"),
)


def _bind(
    mode: str,
    key: str,
    action_id: str,
    *,
    name: str | None = None,
    when: Sequence[str] = (),
) -> Binding:
    return Binding(
        id=f"{mode}.{name or action_id.split('.', 1)[1]}",
        mode=mode,
        sequence=KeySequence.of(key),
        action_id=action_id,
        when=tuple(WhenClause.parse(expr) for expr in when),
    )


DEFAULT_BINDINGS: tuple[Binding, ...] = (
    *(
        _bind("edit", key, f"motion.{motion.value}")
        for motion, key in _MOTION_KEYS.items()
    ),
    _bind("edit", "ENTER", "edit.newline"),
    _bind("edit", "TAB", "edit.insert_tab"),
    _bind("edit", "DELETE", "edit.delete_forward"),
    _bind("edit", "BACKSPACE", "edit.delete_backward"),
    _bind("edit", "ctrl+s", "file.save"),
    _bind("edit", "ctrl+f", "search.start", name="search"),
    _bind("edit", "ctrl+q", "file.quit", when=("!dirty",)),
    _bind("edit", "ctrl+q", "file.quit_guarded", when=("dirty",)),
    _bind("search", "RIGHT", "search.next"),
    _bind("search", "DOWN", "search.next", name="next_down"),
    _bind("search", "LEFT", "search.previous"),
    _bind("search", "UP", "search.previous", name="previous_up"),
    _bind("search", "BACKSPACE", "search.erase"),
    _bind("search", "ESC", "search.cancel"),
    _bind("search", "ENTER", "search.accept"),
    _bind("prompt", "BACKSPACE", "prompt.erase"),
    _bind("prompt", "ESC", "prompt.cancel"),
    _bind("prompt", "ENTER", "prompt.submit"),
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    default_sequence_timeout_ms: int | None = None,
    exclude_bindings: Sequence[str] | None = None,
) -> None:
    """Register built-in actions and bindings for every mode."""

    excluded = set(exclude_bindings or ())
    for action in DEFAULT_ACTIONS:
        registry.register_action(action, replace=replace)

    for binding in DEFAULT_BINDINGS:
        if binding.id in excluded:
            continue
        registry.register_binding(
            _with_timeout(binding, default_sequence_timeout_ms), replace=replace
        )

    for binding in extra_bindings or ():
        registry.register_binding(binding, replace=replace)


def _with_timeout(binding: Binding, timeout_ms: int | None) -> Binding:
    if timeout_ms is None:
        return binding
    return replace(
        binding, sequence=KeySequence(binding.sequence.strokes, timeout_ms=timeout_ms)
    )


__all__ = ["load_default_keymaps", "DEFAULT_ACTIONS", "DEFAULT_BINDINGS"]
