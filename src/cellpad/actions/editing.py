"""Edit-mode actions that change the document."""

from __future__ import annotations

from cellpad.keymaps import ResolutionMatch
from cellpad.modes.base_mode import ModeContext, ModeResult


def insert_newline(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.session.insert_newline()
    return ModeResult(consumed=True, message="newline")


def insert_tab(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.session.insert_text("\t")
    return ModeResult(consumed=True, message="insert_tab")


def delete_forward(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.session.delete_forward()
    return ModeResult(consumed=True, message="delete_forward")


def delete_backward(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.session.delete_backward()
    return ModeResult(consumed=True, message="delete_backward")


__all__ = ["insert_newline", "insert_tab", "delete_forward", "delete_backward"]
