import pytest

from cellpad.keymaps import (
    ActionRef,
    Binding,
    KeySequence,
    KeyStroke,
    KeymapConflictError,
    KeymapRegistry,
    WhenClause,
)
from cellpad.keymaps.defaults import DEFAULT_BINDINGS, load_default_keymaps


def make_action(action_id: str = "file.test") -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_binding(
    *,
    binding_id: str,
    mode: str = "edit",
    sequence: KeySequence | None = None,
    action_id: str = "file.test",
    when: tuple[WhenClause, ...] = (),
) -> Binding:
    return Binding(
        id=binding_id,
        mode=mode,
        sequence=sequence or KeySequence.of("ctrl+k", "ctrl+s"),
        action_id=action_id,
        when=when,
    )


def test_keystroke_parse_normalizes_modifiers() -> None:
    stroke = KeyStroke.parse("Shift+CTRL+s")

    assert stroke.key == "s"
    assert stroke.modifiers == ("ctrl", "shift")
    assert stroke.token == "ctrl+shift+s"
    assert KeyStroke.parse("+").token == "+"
    assert KeyStroke.parse("ctrl++").token == "ctrl++"


def test_when_clause_parse_and_evaluate() -> None:
    clean = WhenClause.parse("!dirty")

    assert clean == WhenClause("dirty", False)
    assert clean.evaluate({}) is True
    assert clean.evaluate({"dirty": True}) is False
    with pytest.raises(ValueError):
        WhenClause.parse("!")


def test_register_binding_success() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    binding = make_binding(binding_id="edit.save_all")

    registry.register_binding(binding)

    assert registry.stats().binding_count == 1
    assert list(registry.iter_bindings(mode="edit")) == [binding]


def test_register_binding_unknown_action() -> None:
    registry = KeymapRegistry()

    with pytest.raises(KeyError):
        registry.register_binding(make_binding(binding_id="edit.save_all"))


def test_register_binding_conflict_detection() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="edit.save_all"))

    with pytest.raises(KeymapConflictError) as info:
        registry.register_binding(make_binding(binding_id="edit.save_all.copy"))

    assert [b.id for b in info.value.conflicts] == ["edit.save_all"]


def test_register_binding_non_overlapping_when() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    registry.register_binding(make_binding(binding_id="default"))
    registry.register_binding(
        make_binding(binding_id="dirty", when=(WhenClause("dirty"),))
    )
    registry.register_binding(
        make_binding(binding_id="clean", when=(WhenClause.parse("!dirty"),))
    )

    assert registry.stats().binding_count == 3


def test_register_binding_duplicate_id_needs_replace() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    first = make_binding(binding_id="binding")
    second = make_binding(binding_id="binding", sequence=KeySequence.of("F2"))
    registry.register_binding(first)

    with pytest.raises(ValueError):
        registry.register_binding(second)
    registry.register_binding(second, replace=True)

    assert list(registry.iter_bindings()) == [second]
    assert registry.detect_conflicts(first) == []


def test_unregister_binding_bumps_revision() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    binding = make_binding(binding_id="binding")
    registry.register_binding(binding)
    before = registry.revision()

    removed = registry.unregister_binding("binding")

    assert removed == binding
    assert registry.stats().binding_count == 0
    assert registry.stats().modes == ()
    assert registry.revision() == before + 1
    assert registry.unregister_binding("binding") is None


def test_load_default_keymaps_registers_every_mode() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry)

    stats = registry.stats()
    assert stats.modes == ("edit", "prompt", "search")
    assert stats.binding_count == len(DEFAULT_BINDINGS)
    assert registry.get_binding("edit.save").sequence.tokens == ("ctrl+s",)
    assert registry.get_binding("edit.quit").when == (WhenClause("dirty", False),)


def test_load_default_keymaps_timeout_override() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry, default_sequence_timeout_ms=1500)

    assert registry.get_binding("edit.save").sequence.timeout_ms == 1500


def test_load_default_keymaps_exclude_and_extra() -> None:
    registry = KeymapRegistry()
    custom = Binding(
        id="edit.save_f2",
        mode="edit",
        sequence=KeySequence.of("F2"),
        action_id="file.save",
    )

    load_default_keymaps(
        registry, exclude_bindings=("edit.save",), extra_bindings=(custom,)
    )

    with pytest.raises(KeyError):
        registry.get_binding("edit.save")
    assert registry.get_binding("edit.save_f2").action_id == "file.save"
