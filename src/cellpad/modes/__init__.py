"""Editing modes and the plumbing they share.

``ModeManager`` lives in ``cellpad.modes.mode_manager``; it loads the
default keymaps, which in turn import the actions.
"""

from .base_mode import KeyInput, Mode, ModeBus, ModeContext, ModeResult
from .keymap_mode import KeymapMode
from .edit_mode import EditMode
from .prompt_mode import PromptMode
from .search_mode import SearchMode

__all__ = [
    "KeyInput",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
    "KeymapMode",
    "EditMode",
    "PromptMode",
    "SearchMode",
]
