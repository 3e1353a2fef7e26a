"""Save, quit and the small prompt used by save-as."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, MutableMapping, cast

from cellpad.keymaps import ResolutionMatch
from cellpad.modes.base_mode import ModeContext, ModeResult
from cellpad.modes.keymap_helpers import prompt_state, show_prompt
from cellpad.runtime import telemetry
from cellpad.session import EditorSession


@dataclass(frozen=True, slots=True)
class PromptRequest:
    """A one-line question asked in prompt mode."""

    label: str
    on_submit: Callable[[EditorSession, str], None]
    on_cancel: Callable[[EditorSession], None]


def _save_as(session: EditorSession, value: str) -> None:
    session.save(value)


def _save_aborted(session: EditorSession) -> None:
    session.set_status("Save aborted.")


SAVE_AS = PromptRequest(label="Save as: ", on_submit=_save_as, on_cancel=_save_aborted)


def save(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    session = context.session
    if session.document.file_name is None:
        context.extras["prompt_request"] = SAVE_AS
        return ModeResult(consumed=True, switch_to="prompt", message="save_as")
    saved = session.save()
    return ModeResult(
        consumed=True,
        status="ok" if saved else "error",
        message="saved" if saved else "save_failed",
    )


def quit_editor(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.session.request_quit()
    context.bus.emit("editor.quit", context.session)
    return ModeResult(consumed=True, message="quit")


def quit_guarded(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """Quit once the unsaved-changes warning has been acknowledged enough times."""

    del match
    session = context.session
    if session.request_quit():
        context.bus.emit("editor.quit", session)
        return ModeResult(consumed=True, message="quit")
    telemetry.record_event(
        "session.quit_guarded", data={"remaining": session.quit_remaining}
    )
    return ModeResult(consumed=True, status="quit_pending", message="unsaved_changes")


def _input(context: ModeContext) -> MutableMapping[str, object]:
    state = prompt_state(context)
    state.setdefault("input", "")
    return state


def _request(context: ModeContext) -> PromptRequest:
    request = prompt_state(context).get("request")
    if not isinstance(request, PromptRequest):
        raise RuntimeError("prompt state missing 'request'")
    return request


def prompt_type(context: ModeContext, text: str) -> ModeResult:
    state = _input(context)
    state["input"] = cast(str, state["input"]) + text
    show_prompt(context, _request(context).label + cast(str, state["input"]))
    return ModeResult(consumed=True, message="prompt_input")


def prompt_erase(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    state = _input(context)
    value = cast(str, state["input"])
    state["input"] = value[:-1]
    show_prompt(context, _request(context).label + cast(str, state["input"]))
    return ModeResult(consumed=True, message="prompt_erase")


def prompt_submit(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    value = cast(str, _input(context)["input"])
    if not value:
        return prompt_cancel(context, match)
    _request(context).on_submit(context.session, value)
    return ModeResult(consumed=True, switch_to="edit", message="prompt_submit")


def prompt_cancel(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    _request(context).on_cancel(context.session)
    return ModeResult(consumed=True, switch_to="edit", message="prompt_cancel")


__all__ = [
    "PromptRequest",
    "SAVE_AS",
    "save",
    "quit_editor",
    "quit_guarded",
    "prompt_type",
    "prompt_erase",
    "prompt_submit",
    "prompt_cancel",
]
