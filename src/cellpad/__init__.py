"""Terminal line editor core with Unicode-width-aware cursor addressing."""

__all__ = [
    "adapters",
    "actions",
    "buffer",
    "config",
    "cursor",
    "keymaps",
    "modes",
    "runtime",
    "search",
    "session",
]

__version__ = "0.1.0"
