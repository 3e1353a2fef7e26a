"""Interactive search over a document."""

from .session import SearchSession, SearchState

__all__ = ["SearchSession", "SearchState"]
