"""Declarative key bindings and their trie resolver.

Default bindings live in ``cellpad.keymaps.defaults``; they import the
actions, so they are not re-exported here.
"""

from .models import ActionRef, Binding, KeySequence, KeyStroke, WhenClause, make_token
from .registry import KeymapConflictError, KeymapRegistry, RegistryStats
from .resolver import KeymapResolver, ResolutionMatch, ResolutionResult

__all__ = [
    "ActionRef",
    "Binding",
    "KeySequence",
    "KeyStroke",
    "WhenClause",
    "make_token",
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
    "KeymapResolver",
    "ResolutionResult",
    "ResolutionMatch",
]
