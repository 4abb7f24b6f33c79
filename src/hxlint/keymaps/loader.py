"""Turns a parsed ``keys`` table into registry bindings."""

from __future__ import annotations

from typing import Any, Callable, Mapping, Optional

from hxlint.errors import ChordSyntaxError, HxlintError, SchemaError

from .models import MODES, Action, Binding, KeyChord, KeySequence, PrefixNode
from .registry import KeymapRegistry

ConflictHook = Callable[[Binding, Binding], None]
ErrorHook = Callable[[HxlintError], None]


def load_keymaps(
    registry: KeymapRegistry,
    keys_table: Mapping[str, Any],
    *,
    source: str | None = None,
    on_conflict: Optional[ConflictHook] = None,
    on_error: Optional[ErrorHook] = None,
) -> int:
    """Register every binding found under a ``keys`` table.

    Strings become single-command bindings, lists become one binding holding
    an ordered command sequence, and nested tables become leader groups.
    When two entries share a key sequence the later one wins and
    ``on_conflict(previous, current)`` is called. Malformed entries raise,
    unless ``on_error`` is given, in which case they are reported and
    skipped. Returns the number of bindings registered.
    """

    def fail(error: HxlintError) -> None:
        if on_error is None:
            raise error
        on_error(error)

    count = 0
    for mode, table in keys_table.items():
        path = f"keys.{mode}"
        if mode not in MODES:
            fail(SchemaError(f"unknown mode '{mode}'", path=path, code="keys-mode"))
            continue
        if not isinstance(table, Mapping):
            fail(
                SchemaError(
                    "a mode must map keys to commands", path=path, code="keys-value"
                )
            )
            continue
        count += _load_table(
            registry, mode, table, (), path, source, on_conflict, fail
        )
    return count


def _load_table(
    registry: KeymapRegistry,
    mode: str,
    table: Mapping[str, Any],
    prefix: tuple[KeyChord, ...],
    path: str,
    source: str | None,
    on_conflict: Optional[ConflictHook],
    fail: ErrorHook,
) -> int:
    count = 0
    for token, value in table.items():
        entry_path = f"{path}.{token}"
        try:
            chord = KeyChord.parse(token)
        except ChordSyntaxError as exc:
            fail(SchemaError(str(exc), path=entry_path, code="keys-chord"))
            continue
        sequence = KeySequence(prefix + (chord,))

        if isinstance(value, Mapping):
            registry.register_prefix(PrefixNode(mode, sequence, source))
            count += _load_table(
                registry,
                mode,
                value,
                sequence.chords,
                entry_path,
                source,
                on_conflict,
                fail,
            )
            continue

        try:
            action = Action.from_value(value)
        except TypeError as exc:
            fail(SchemaError(str(exc), path=entry_path, code="keys-value"))
            continue
        except ValueError as exc:
            fail(SchemaError(str(exc), path=entry_path, code="keys-empty-sequence"))
            continue

        binding = Binding(mode=mode, sequence=sequence, action=action, source=source)
        previous = registry.find(mode, sequence)
        if previous is not None and on_conflict is not None:
            on_conflict(previous, binding)
        registry.register_binding(binding, replace=True)
        count += 1
    return count


__all__ = ["load_keymaps"]
