"""Action handlers referenced by the default keymaps."""

from . import editing, file, motion, search

__all__ = ["editing", "file", "motion", "search"]
