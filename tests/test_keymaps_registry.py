import pytest

from hxlint.keymaps import (
    Action,
    Binding,
    KeySequence,
    KeymapConflictError,
    KeymapRegistry,
    PrefixNode,
)


def make_binding(
    *keys: str,
    mode: str = "normal",
    command: str | list[str] = "goto_line_end",
    source: str | None = None,
) -> Binding:
    return Binding(
        mode=mode,
        sequence=KeySequence.from_strings(*(keys or ("g", "e"))),
        action=Action.from_value(command),
        source=source,
    )


def test_register_binding_success() -> None:
    registry = KeymapRegistry()
    binding = make_binding("$")

    registry.register_binding(binding)

    assert registry.stats().binding_count == 1
    assert list(registry.iter_bindings(mode="normal")) == [binding]
    assert registry.get_binding("normal", "$") == binding


def test_register_binding_conflict_detection() -> None:
    registry = KeymapRegistry()
    registry.register_binding(make_binding("S-A-up"))

    with pytest.raises(KeymapConflictError) as excinfo:
        registry.register_binding(make_binding("A-S-up", command="expand_selection"))

    assert excinfo.value.conflicts[0].key_signature == "A-S-up"


def test_same_keys_in_other_modes_do_not_conflict() -> None:
    registry = KeymapRegistry()

    registry.register_binding(make_binding("G"))
    registry.register_binding(make_binding("G", mode="select"))

    assert registry.stats().binding_count == 2
    assert registry.stats().modes == ("normal", "select")


def test_register_binding_with_replace_keeps_last() -> None:
    registry = KeymapRegistry()
    first = make_binding("q", command=":clipboard-yank")
    second = make_binding("q", command=":quit")

    registry.register_binding(first)
    registry.register_binding(second, replace=True)

    assert list(registry.iter_bindings()) == [second]


def test_unregister_binding() -> None:
    registry = KeymapRegistry()
    binding = make_binding("W")
    registry.register_binding(binding)

    removed = registry.unregister_binding("normal", "W")

    assert removed == binding
    assert registry.stats().binding_count == 0
    assert registry.unregister_binding("normal", "W") is None


def test_revision_increments_on_change() -> None:
    registry = KeymapRegistry()
    before = registry.revision()

    registry.register_binding(make_binding("W"))

    assert registry.revision() == before + 1


def test_shadowed_prefix_against_group() -> None:
    registry = KeymapRegistry()
    registry.register_prefix(PrefixNode("normal", KeySequence.from_strings("space")))
    registry.register_binding(make_binding("space", "q", command=":quit"))
    blocking = make_binding("space", command="file_picker")
    registry.register_binding(blocking)

    shadowed = registry.shadowed_prefixes()

    assert [(b.key_signature, s.signature) for b, s in shadowed] == [
        ("space", "space")
    ]


def test_shadowed_prefix_against_longer_binding() -> None:
    registry = KeymapRegistry()
    registry.register_binding(make_binding("g"))
    registry.register_binding(make_binding("g", "g", command="goto_file_start"))

    shadowed = registry.shadowed_prefixes()

    assert len(shadowed) == 1
    assert shadowed[0][0].key_signature == "g"
    assert shadowed[0][1].signature == "g g"


def test_no_shadowing_for_siblings() -> None:
    registry = KeymapRegistry()
    registry.register_prefix(PrefixNode("normal", KeySequence.from_strings("space")))
    registry.register_binding(make_binding("space", "f", command="file_picker"))
    registry.register_binding(make_binding("space", "F", command="file_picker"))

    assert registry.shadowed_prefixes() == []
