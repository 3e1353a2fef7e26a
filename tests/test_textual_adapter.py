from __future__ import annotations

from typing import List, Tuple

import pytest

from cellpad.adapters.textual import TextualEditorAdapter, TextualUIHooks, render_view
from cellpad.adapters.textual.app import normalize_key
from cellpad.buffer import Document, Position, text_width
from cellpad.cursor import Motion
from cellpad.modes.mode_manager import ModeManager, create_manager
from cellpad.session import EditorSession, Size


def make_manager(text: str = "", *, file_name: str | None = None) -> ModeManager:
    session = EditorSession(
        Document.from_text(text, file_name=file_name), viewport=Size(40, 5)
    )
    return create_manager(session)


def make_adapter(
    manager: ModeManager,
) -> Tuple[TextualEditorAdapter, List[str], List[str], List[str]]:
    views: List[str] = []
    statuses: List[str] = []
    messages: List[str] = []
    hooks = TextualUIHooks(
        update_view=lambda session: views.append(render_view(session).plain),
        update_status=statuses.append,
        show_message=messages.append,
    )
    return TextualEditorAdapter(manager, hooks), views, statuses, messages


def test_adapter_refreshes_on_construction() -> None:
    _, views, statuses, messages = make_adapter(make_manager())

    assert views and statuses
    assert statuses[-1].startswith("[No Name] - 1 lines")
    assert messages[-1].startswith("HELP: Ctrl-F = find")


def test_adapter_dispatches_text_and_updates_status() -> None:
    adapter, views, statuses, _ = make_adapter(make_manager())

    result = adapter.handle_textual_key("a", text="a")

    assert result.consumed is True
    assert views[-1].splitlines()[0] == "a "
    assert "(modified)" in statuses[-1]


def test_adapter_lowercases_modifiers() -> None:
    manager = make_manager("hello\n")
    adapter, _, _, messages = make_adapter(manager)

    adapter.handle_textual_key("f", modifiers=("CTRL",))

    assert manager.active_mode is not None
    assert manager.active_mode.name == "search"
    assert messages[-1].startswith("Search (ESC to cancel")


def test_adapter_tick_expires_status_message() -> None:
    manager = make_manager()
    adapter, _, _, messages = make_adapter(manager)
    sent = manager.context.session.status.time

    adapter.tick(now=sent + 10)

    assert messages[-1] == ""


def test_adapter_resize_updates_viewport() -> None:
    manager = make_manager()
    adapter, views, _, _ = make_adapter(manager)

    adapter.resize(20, 2)

    assert manager.context.session.viewport == Size(20, 2)
    assert len(views[-1].splitlines()) == 2


def test_render_view_marks_past_end_and_welcome() -> None:
    session = EditorSession(Document(), viewport=Size(40, 3))

    lines = render_view(session).plain.split("\n")

    assert lines[0] == " "
    assert "Cellpad editor -- version" in lines[1]
    assert lines[2] == "~"


def test_render_view_highlights_cursor_cluster() -> None:
    session = EditorSession(Document.from_text("中国\n"), viewport=Size(10, 1))
    session.cursor = Position(0, 1, 2)

    text = render_view(session)

    cursor_spans = [span for span in text.spans if span.style == "reverse"]
    assert [text.plain[s.start : s.end] for s in cursor_spans] == ["国"]


def test_render_view_keeps_columns_after_clipped_wide_cluster() -> None:
    session = EditorSession(Document.from_text("中国中国\n"), viewport=Size(4, 1))
    session.move(Motion.END)

    text = render_view(session)

    assert text.plain == " 国 "
    assert text_width(text.plain) == session.viewport.width
    cursor_spans = [span for span in text.spans if span.style == "reverse"]
    assert [(s.start, s.end) for s in cursor_spans] == [(2, 3)]


def test_render_view_styles_numbers() -> None:
    session = EditorSession(
        Document.from_text("x 12\n", file_name="a.py"), viewport=Size(10, 1)
    )

    text = render_view(session, show_cursor=False)

    red = [text.plain[s.start : s.end] for s in text.spans if s.style == "red"]
    assert red == ["12"]


@pytest.mark.parametrize(
    ("key", "character", "expected"),
    [
        ("left", None, ("LEFT", None, ())),
        ("escape", "\x1b", ("ESC", None, ())),
        ("ctrl+s", "\x13", ("s", None, ("ctrl",))),
        ("a", "a", ("a", "a", ())),
        ("space", " ", (" ", " ", ())),
        ("shift+home", None, ("HOME", None, ("shift",))),
        ("f1", None, None),
    ],
)
def test_normalize_key(key: str, character: str | None, expected: object) -> None:
    assert normalize_key(key, character) == expected
