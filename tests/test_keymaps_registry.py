import pytest

from markdown_engine.keymaps import (
    DEFAULT_ACTIONS,
    DEFAULT_BINDINGS,
    ActionRef,
    Binding,
    KeymapConflictError,
    KeymapRegistry,
    KeyStroke,
    load_default_keymaps,
)


def make_action(action_id: str = "core.test", **metadata: object) -> ActionRef:
    return ActionRef(
        id=action_id, handler=lambda *args, **kwargs: None, metadata=metadata
    )


def make_binding(
    *,
    binding_id: str,
    chord: str = "ctrl+b",
    action_id: str = "core.test",
    priority: int = 0,
) -> Binding:
    return Binding(
        id=binding_id,
        stroke=KeyStroke.parse(chord),
        action_id=action_id,
        priority=priority,
    )


def test_keystroke_normalises_aliases_and_order() -> None:
    assert KeyStroke.parse("Cmd+Shift+Q").token == "ctrl+shift+q"
    assert KeyStroke.parse("shift+control+8").token == "ctrl+shift+8"
    assert KeyStroke.parse("option+x").token == "alt+x"
    assert KeyStroke("Enter").token == "Enter"


def test_keystroke_rejects_empty_chord() -> None:
    with pytest.raises(ValueError):
        KeyStroke.parse("  ")


def test_action_ref_defaults() -> None:
    action = make_action("markdown.bold", button="bold")

    assert action.telemetry_name == "markdown.bold"
    assert action.button_id == "bold"
    assert make_action().button_id is None


def test_register_binding_success() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    binding = make_binding(binding_id="bold")

    registry.register_binding(binding)

    assert registry.stats().binding_count == 1
    assert registry.stats().strokes == ("ctrl+b",)
    assert list(registry.iter_bindings()) == [binding]
    assert registry.bindings_for_action("core.test") == [binding]


def test_register_binding_conflict_detection() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="first"))

    with pytest.raises(KeymapConflictError) as excinfo:
        registry.register_binding(make_binding(binding_id="second"))

    assert [b.id for b in excinfo.value.conflicts] == ["first"]


def test_register_binding_replace_evicts_conflicts() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="first"))

    registry.register_binding(make_binding(binding_id="second"), replace=True)

    assert [b.id for b in registry.bindings_for("ctrl+b")] == ["second"]
    assert registry.stats().binding_count == 1


def test_register_binding_requires_known_action() -> None:
    registry = KeymapRegistry()

    with pytest.raises(KeyError):
        registry.register_binding(make_binding(binding_id="orphan"))


def test_register_action_rejects_duplicates() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    with pytest.raises(ValueError):
        registry.register_action(make_action())
    registry.register_action(make_action(), replace=True)


def test_update_binding_moves_index() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="bold"))

    updated = registry.update_binding("bold", stroke=KeyStroke.parse("ctrl+j"))

    assert registry.bindings_for("ctrl+j") == [updated]
    assert registry.bindings_for("ctrl+b") == []


def test_update_binding_detects_conflicts() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="a", chord="ctrl+a"))
    registry.register_binding(make_binding(binding_id="b", chord="ctrl+b"))

    with pytest.raises(KeymapConflictError):
        registry.update_binding("b", stroke=KeyStroke.parse("ctrl+a"))


def test_unregister_binding() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    binding = registry.register_binding(make_binding(binding_id="bold"))
    before = registry.revision()

    assert registry.unregister_binding("bold") == binding
    assert registry.unregister_binding("bold") is None
    assert registry.stats().strokes == ()
    assert registry.revision() == before + 1


def test_load_default_keymaps() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry)

    stats = registry.stats()
    assert stats.action_count == len(DEFAULT_ACTIONS)
    assert stats.binding_count == len(DEFAULT_BINDINGS)
    assert "ctrl+shift+h" in stats.strokes
    (pick,) = registry.bindings_for("ctrl+alt+h")
    assert pick.action_id == "markdown.heading"
    assert dict(pick.args) == {"pick_level": True}


def test_load_default_keymaps_skips_bindings_of_excluded_actions() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry, exclude_actions=["markdown.bold"])

    assert not registry.has_action("markdown.bold")
    assert registry.bindings_for("ctrl+b") == []
    assert registry.bindings_for("ctrl+i")


def test_load_default_keymaps_twice_requires_replace() -> None:
    registry = KeymapRegistry()
    load_default_keymaps(registry)

    with pytest.raises(ValueError):
        load_default_keymaps(registry)
    load_default_keymaps(registry, replace=True)
    assert registry.stats().binding_count == len(DEFAULT_BINDINGS)
