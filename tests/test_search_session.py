from __future__ import annotations

import pytest

from cellpad.buffer import Document, Position
from cellpad.search import SearchSession, SearchState


def make_search(text: str = "hello world\nsecond line\n") -> SearchSession:
    return SearchSession(Document.from_text(text), Position())


def test_typing_refines_from_current_match() -> None:
    search = make_search()

    assert search.type_text("l") == Position(0, 2, 2)
    assert search.type_text("i") == Position(1, 7, 7)
    assert search.query == "li"


def test_erase_keeps_match_under_cursor() -> None:
    search = make_search()
    search.type_text("li")

    assert search.erase() == Position(1, 7, 7)
    assert search.query == "l"


def test_next_and_previous_move_between_matches() -> None:
    search = make_search()
    search.type_text("l")

    assert search.next() == Position(0, 3, 3)
    assert search.next() == Position(0, 9, 9)
    assert search.previous() == Position(0, 3, 3)


def test_no_match_keeps_position() -> None:
    search = make_search()
    search.type_text("li")

    assert search.next() is None
    assert not search.last_matched
    assert search.position == Position(1, 7, 7)


def test_cancel_restores_anchor() -> None:
    anchor = Position(1, 2, 2)
    search = SearchSession(Document.from_text("abc\nabc\n"), anchor)
    search.type_text("a")

    assert search.cancel() == anchor
    assert search.state is SearchState.CANCELLED
    with pytest.raises(RuntimeError):
        search.next()


def test_accept_keeps_match() -> None:
    search = make_search()
    search.type_text("world")

    assert search.accept() == Position(0, 6, 6)
    assert search.state is SearchState.ACCEPTED
    assert not search.active


def test_accept_with_empty_query_cancels() -> None:
    search = make_search()

    assert search.accept() == Position()
    assert search.state is SearchState.CANCELLED


def test_query_ignores_control_characters() -> None:
    search = make_search()

    search.type_text("\x1bwo")

    assert search.query == "wo"
