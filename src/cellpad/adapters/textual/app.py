"""Executable Textual app hosting a cellpad editing session."""

from __future__ import annotations

import argparse
from typing import Any, Optional, Sequence, Tuple

try:  # pragma: no cover - imported only when the app is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.binding import Binding
    from textual.widgets import Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use cellpad.adapters.textual.app"
    ) from exc

from cellpad import __version__
from cellpad.config import EditorSettings
from cellpad.modes.mode_manager import ModeManager, create_manager
from cellpad.runtime import telemetry
from cellpad.session import EditorSession, Size

from .controller import TextualEditorAdapter, TextualUIHooks
from .view import render_view

NAMED_KEYS = {
    "left": "LEFT",
    "right": "RIGHT",
    "up": "UP",
    "down": "DOWN",
    "home": "HOME",
    "end": "END",
    "pageup": "PAGEUP",
    "pagedown": "PAGEDOWN",
    "enter": "ENTER",
    "escape": "ESC",
    "backspace": "BACKSPACE",
    "ctrl+h": "BACKSPACE",
    "delete": "DELETE",
    "tab": "TAB",
}

KeyTuple = Tuple[str, Optional[str], Tuple[str, ...]]


def normalize_key(key: str, character: Optional[str]) -> Optional[KeyTuple]:
    """Map a Textual key name onto the keymap vocabulary.

    ``"ctrl+s"`` becomes ``("s", None, ("ctrl",))``; printable keys keep their
    character as text.
    """

    if key in NAMED_KEYS:
        return (NAMED_KEYS[key], None, ())
    parts = key.split("+")
    if len(parts) > 1 and parts[-1]:
        modifiers = tuple(parts[:-1])
        base = NAMED_KEYS.get(parts[-1], parts[-1])
        if modifiers == ("shift",) and character and character.isprintable():
            return (character, character, ())
        return (base, None, modifiers)
    if character and character.isprintable():
        return (character, character, ())
    return None


class CellpadApp(App[None]):
    """Full-screen editor: document view, status bar and message bar."""

    CSS = """
    Screen {
        layout: vertical;
    }

    #document-view {
        height: 1fr;
        overflow: hidden;
    }

    #status-bar {
        height: 1;
        background: $foreground;
        color: $background;
    }

    #message-bar {
        height: 1;
    }
    """

    ENABLE_COMMAND_PALETTE = False
    BINDINGS = [
        Binding("ctrl+q", "editor_quit", "Quit", show=False, priority=True),
    ]

    def __init__(
        self,
        file_name: Optional[str] = None,
        *,
        settings: Optional[EditorSettings] = None,
    ) -> None:
        super().__init__()
        self.title = f"cellpad {__version__}"
        self._file_name = file_name
        self._settings = settings or EditorSettings.from_env()
        self.manager: ModeManager | None = None
        self.adapter: TextualEditorAdapter | None = None
        self._view: Static | None = None
        self._status: Static | None = None
        self._message: Static | None = None

    def compose(self) -> ComposeResult:
        self._view = Static("", id="document-view")
        self._status = Static("", id="status-bar")
        self._message = Static("", id="message-bar")
        yield self._view
        yield self._status
        yield self._message

    def on_mount(self) -> None:
        size = self._view.size if self._view else self.size
        session = EditorSession.open(
            self._file_name,
            settings=self._settings,
            viewport=Size(width=max(size.width, 1), height=max(size.height, 1)),
        )
        self.manager = create_manager(session, settings=self._settings)
        hooks = TextualUIHooks(
            update_view=self._update_view,
            update_status=self._update_status,
            show_message=self._show_message,
            handle_event=self._handle_event,
        )
        self.adapter = TextualEditorAdapter(self.manager, hooks)
        self.set_interval(0.1, self._tick)
        self.call_after_refresh(self._sync_size)

    def on_resize(self, event: events.Resize) -> None:
        del event
        # Widget sizes settle only after the next layout pass.
        self.call_after_refresh(self._sync_size)

    def _sync_size(self) -> None:
        if self.adapter and self._view:
            size = self._view.size
            self.adapter.resize(size.width, size.height)

    async def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        normalized = normalize_key(event.key, event.character)
        if normalized is None:
            return
        key, text, modifiers = normalized
        self.adapter.handle_textual_key(key, text=text, modifiers=modifiers)
        event.stop()
        self._exit_if_done()

    def action_editor_quit(self) -> None:
        if self.adapter:
            self.adapter.handle_textual_key("q", modifiers=("ctrl",))
            self._exit_if_done()
        else:
            self.exit()

    def _tick(self) -> None:
        if self.adapter:
            self.adapter.tick()

    def _exit_if_done(self) -> None:
        if self.adapter and self.adapter.session.should_quit:
            self.exit()

    def _update_view(self, session: EditorSession) -> None:
        if self._view:
            self._view.update(render_view(session))

    def _update_status(self, text: str) -> None:
        if self._status:
            self._status.update(text)

    def _show_message(self, text: str) -> None:
        if self._message:
            self._message.update(text)

    def _handle_event(self, name: str, payload: Any | None) -> None:
        del payload
        if name == "editor.quit":
            self._exit_if_done()


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="cellpad", description="Edit a text file in the terminal."
    )
    parser.add_argument("file", nargs="?", help="File to open")
    parser.add_argument(
        "--log-file",
        default=None,
        help="Write logs here (default: $CELLPAD_LOG_FILE or ./cellpad.log)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Minimum log level (default: $CELLPAD_LOG_LEVEL or INFO)",
    )
    parser.add_argument("--version", action="version", version=__version__)
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    # The terminal belongs to the UI; logs only go to a file.
    telemetry.configure(
        config=telemetry.file_config(args.log_file, args.log_level)
    )
    app = CellpadApp(args.file)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual run
    main()
