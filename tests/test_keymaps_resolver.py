from __future__ import annotations

from cellpad.keymaps import (
    ActionRef,
    Binding,
    KeySequence,
    KeymapRegistry,
    KeymapResolver,
    WhenClause,
)


def make_action(action_id: str) -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_binding(
    binding_id: str,
    *,
    mode: str = "edit",
    keys: tuple[str, ...] = ("ctrl+k", "ctrl+s"),
    action_id: str = "file.test",
    when: tuple[WhenClause, ...] = (),
    priority: int = 0,
    timeout_ms: int = 1000,
) -> Binding:
    return Binding(
        id=binding_id,
        mode=mode,
        sequence=KeySequence.of(*keys, timeout_ms=timeout_ms),
        action_id=action_id,
        when=when,
        priority=priority,
    )


def build_registry(bindings: list[Binding]) -> KeymapRegistry:
    registry = KeymapRegistry()
    for action_id in {binding.action_id for binding in bindings}:
        registry.register_action(make_action(action_id))
    for binding in bindings:
        registry.register_binding(binding)
    return registry


def test_resolver_matches_exact_sequence() -> None:
    binding = make_binding("edit.save_all")
    resolver = KeymapResolver(build_registry([binding]))

    result = resolver.resolve("edit", ("ctrl+k", "ctrl+s"))

    assert result.status == "match"
    assert result.match is not None
    assert result.match.binding.id == binding.id
    assert result.consumed == 2


def test_resolver_reports_pending_for_prefix() -> None:
    resolver = KeymapResolver(build_registry([make_binding("edit.save_all")]))

    result = resolver.resolve("edit", ("ctrl+k",))

    assert result.status == "pending"
    assert result.next_expected == ("ctrl+s",)


def test_resolver_misses_other_modes() -> None:
    resolver = KeymapResolver(build_registry([make_binding("edit.save_all")]))

    assert resolver.resolve("search", ("ctrl+k", "ctrl+s")).status == "miss"
    assert resolver.resolve("edit", ("x",)).status == "miss"


def test_resolver_honors_when_clauses() -> None:
    gated = make_binding(
        "edit.quit_guarded", keys=("ctrl+q",), when=(WhenClause("dirty"),)
    )
    resolver = KeymapResolver(build_registry([gated]))

    miss = resolver.resolve("edit", ("ctrl+q",), context={})
    assert miss.status == "miss"

    hit = resolver.resolve("edit", ("ctrl+q",), context={"dirty": True})
    assert hit.status == "match"
    assert hit.match is not None
    assert hit.match.binding.id == gated.id


def test_resolver_prefers_gated_binding_when_both_apply() -> None:
    plain = make_binding("edit.quit", keys=("ctrl+q",), action_id="file.quit")
    gated = make_binding(
        "edit.quit_guarded",
        keys=("ctrl+q",),
        action_id="file.quit_guarded",
        when=(WhenClause("dirty"),),
    )
    resolver = KeymapResolver(build_registry([plain, gated]))

    dirty = resolver.resolve("edit", ("ctrl+q",), context={"dirty": True})
    clean = resolver.resolve("edit", ("ctrl+q",), context={"dirty": False})

    assert dirty.match is not None and dirty.match.action.id == "file.quit_guarded"
    assert clean.match is not None and clean.match.action.id == "file.quit"


def test_resolver_pending_returns_timeout_hint() -> None:
    binding = make_binding("edit.save_all", timeout_ms=1500)
    resolver = KeymapResolver(build_registry([binding]))

    result = resolver.resolve("edit", ("ctrl+k",))

    assert result.status == "pending"
    assert result.timeout_ms == 1500


def test_resolver_cache_refreshes_on_revision() -> None:
    registry = build_registry([])
    resolver = KeymapResolver(registry)

    assert resolver.resolve("edit", ("F2",)).status == "miss"

    registry.register_action(make_action("file.f2"))
    registry.register_binding(
        make_binding("edit.f2", keys=("F2",), action_id="file.f2")
    )

    match = resolver.resolve("edit", ("F2",))
    assert match.status == "match"
    assert match.match is not None
    assert match.match.binding.id == "edit.f2"
