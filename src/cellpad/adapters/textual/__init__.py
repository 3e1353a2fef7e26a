"""Textual front-end: controller, view rendering and the executable app.

``app`` imports textual itself; the controller and view only need rich.
"""

from .controller import TextualEditorAdapter, TextualUIHooks
from .view import render_view

__all__ = ["TextualEditorAdapter", "TextualUIHooks", "render_view"]
