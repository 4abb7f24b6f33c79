from __future__ import annotations

import tomllib

import pytest

from hxlint.errors import HxlintError, SchemaError
from hxlint.keymaps import Binding, KeymapRegistry, KeySequence, load_keymaps


def load(text: str, **kwargs) -> KeymapRegistry:
    registry = KeymapRegistry()
    load_keymaps(registry, tomllib.loads(text)["keys"], **kwargs)
    return registry


def test_command_list_is_one_binding() -> None:
    registry = load(
        """
        [keys.normal]
        "ret" = ["move_line_down", "goto_first_nonwhitespace"]
        """
    )

    bindings = list(registry.iter_bindings("normal"))
    assert len(bindings) == 1
    assert bindings[0].key_signature == "ret"
    assert bindings[0].action.kind == "sequence"
    assert bindings[0].action.commands == ("move_line_down", "goto_first_nonwhitespace")


def test_nested_tables_become_groups() -> None:
    registry = load(
        """
        [keys.normal.space]
        q = ":quit"

        [keys.normal.space.space]
        s = ":pipe-to helix-ext search --current"
        """
    )

    signatures = sorted(b.key_signature for b in registry.iter_bindings("normal"))
    assert signatures == ["space q", "space space s"]
    prefixes = sorted(p.sequence.signature for p in registry.iter_prefixes("normal"))
    assert prefixes == ["space", "space space"]


def test_angle_bracket_key_names() -> None:
    registry = load(
        """
        [keys.normal]
        "A-lt" = "unindent"
        "gt" = "indent"
        """
    )

    signatures = sorted(b.key_signature for b in registry.iter_bindings("normal"))
    assert signatures == ["A-lt", "gt"]


def test_equivalent_spellings_report_conflict_and_last_wins() -> None:
    conflicts: list[tuple[Binding, Binding]] = []
    registry = load(
        """
        [keys.normal]
        S-A-up = ["extend_to_line_bounds", "delete_selection", "move_line_up", "paste_before"]
        A-S-up = "expand_selection"
        """,
        on_conflict=lambda previous, current: conflicts.append((previous, current)),
    )

    assert len(conflicts) == 1
    binding = registry.find("normal", KeySequence.from_strings("S-A-up"))
    assert binding is not None
    assert binding.action.commands == ("expand_selection",)


def test_errors_raise_without_hook() -> None:
    with pytest.raises(SchemaError):
        load(
            """
            [keys.visual]
            x = "delete_selection"
            """
        )


def test_errors_are_collected_with_hook() -> None:
    errors: list[HxlintError] = []
    registry = load(
        """
        [keys.normal]
        "C--" = "goto_line_end"
        x = 3
        y = []
        z = "ok"
        """,
        on_error=errors.append,
    )

    assert [getattr(e, "code", "") for e in errors] == [
        "keys-chord",
        "keys-value",
        "keys-empty-sequence",
    ]
    assert [b.key_signature for b in registry.iter_bindings()] == ["z"]


def test_returns_binding_count(helix_dir) -> None:
    with open(helix_dir / "config.toml", "rb") as f:
        keys = tomllib.load(f)["keys"]
    registry = KeymapRegistry()

    count = load_keymaps(registry, keys, source="config.toml")

    assert count == registry.stats().binding_count
    assert registry.stats().modes == ("insert", "normal", "select")
