"""Cursor motion actions, one handler per ``Motion``."""

from __future__ import annotations

from functools import partial
from typing import Callable, Dict

from cellpad.cursor import Motion
from cellpad.keymaps import ResolutionMatch
from cellpad.modes.base_mode import ModeContext, ModeResult


def move_cursor(
    motion: Motion, context: ModeContext, match: ResolutionMatch
) -> ModeResult:
    del match
    context.session.move(motion)
    return ModeResult(consumed=True, message=f"move_{motion.value}")


MOTION_HANDLERS: Dict[Motion, Callable[[ModeContext, ResolutionMatch], ModeResult]] = {
    motion: partial(move_cursor, motion) for motion in Motion
}


__all__ = ["move_cursor", "MOTION_HANDLERS"]
