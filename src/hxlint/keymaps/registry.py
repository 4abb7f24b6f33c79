"""Keymap registry storing bindings and leader groups per mode."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Optional

from hxlint.errors import HxlintError
from hxlint.runtime.telemetry import span

from .models import Binding, KeySequence, PrefixNode


@dataclass(slots=True)
class RegistryStats:
    """Lightweight snapshot describing registry state."""

    binding_count: int
    prefix_count: int
    modes: tuple[str, ...]


class KeymapConflictError(HxlintError):
    """Raised when a binding reuses a key sequence already bound in its mode."""

    def __init__(self, binding: Binding, conflicts: Iterable[Binding]):
        conflicts_tuple = tuple(conflicts)
        message = (
            f"Binding '{binding.id}' conflicts with "
            f"{[conflict.action.describe() for conflict in conflicts_tuple]}"
        )
        super().__init__(message)
        self.binding = binding
        self.conflicts = conflicts_tuple


class KeymapRegistry:
    """Owns the binding table of every mode.

    A mode's table is keyed by the canonical key signature, so two spellings
    of one chord (``S-A-up`` and ``A-S-up``) land on the same entry.
    """

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._bindings: Dict[str, Dict[str, Binding]] = {}
        self._prefixes: Dict[str, Dict[str, PrefixNode]] = {}
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def modes(self) -> tuple[str, ...]:
        return tuple(sorted(set(self._bindings) | set(self._prefixes)))

    def get_binding(self, mode: str, signature: str) -> Binding:
        try:
            return self._bindings[mode][signature]
        except KeyError as exc:
            raise KeyError(f"No binding for '{signature}' in mode '{mode}'") from exc

    def find(self, mode: str, sequence: KeySequence) -> Optional[Binding]:
        return self._bindings.get(mode, {}).get(sequence.signature)

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id},
        ) as handle:
            conflicts = self.detect_conflicts(binding)
            if conflicts and not replace:
                handle.add_metadata("conflicts", len(conflicts))
                raise KeymapConflictError(binding, conflicts)

            self._bindings.setdefault(binding.mode, {})[binding.key_signature] = binding
            self._touch()
            return binding

    def register_prefix(self, prefix: PrefixNode) -> PrefixNode:
        by_signature = self._prefixes.setdefault(prefix.mode, {})
        by_signature.setdefault(prefix.sequence.signature, prefix)
        self._touch()
        return prefix

    def unregister_binding(self, mode: str, signature: str) -> Optional[Binding]:
        bucket = self._bindings.get(mode)
        if not bucket:
            return None
        binding = bucket.pop(signature, None)
        if binding is None:
            return None
        if not bucket:
            self._bindings.pop(mode, None)
        self._touch()
        return binding

    def iter_bindings(self, mode: Optional[str] = None) -> Iterator[Binding]:
        if mode is not None:
            yield from self._bindings.get(mode, {}).values()
            return
        for bucket in self._bindings.values():
            yield from bucket.values()

    def iter_prefixes(self, mode: Optional[str] = None) -> Iterator[PrefixNode]:
        if mode is not None:
            yield from self._prefixes.get(mode, {}).values()
            return
        for bucket in self._prefixes.values():
            yield from bucket.values()

    def detect_conflicts(self, binding: Binding) -> list[Binding]:
        existing = self._bindings.get(binding.mode, {}).get(binding.key_signature)
        return [existing] if existing is not None else []

    def shadowed_prefixes(self) -> list[tuple[Binding, KeySequence]]:
        """Bindings whose key sequence also opens a group or a longer binding.

        The editor stops at the shorter binding, so everything below it is
        unreachable. Returns ``(binding, longer_sequence)`` pairs.
        """

        shadowed: list[tuple[Binding, KeySequence]] = []
        for mode, bucket in self._bindings.items():
            groups = [p.sequence for p in self._prefixes.get(mode, {}).values()]
            for binding in bucket.values():
                depth = len(binding.sequence.chords)
                candidates = groups + [
                    other.sequence
                    for other in bucket.values()
                    if len(other.sequence.chords) > depth
                ]
                for sequence in candidates:
                    if sequence.startswith(binding.sequence):
                        shadowed.append((binding, sequence))
                        break
        return shadowed

    def stats(self) -> RegistryStats:
        return RegistryStats(
            binding_count=sum(len(bucket) for bucket in self._bindings.values()),
            prefix_count=sum(len(bucket) for bucket in self._prefixes.values()),
            modes=self.modes(),
        )

    def _touch(self) -> None:
        self._revision += 1


__all__ = [
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
]
