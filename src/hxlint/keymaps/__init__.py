"""Keybinding tables: chord parsing, registry, resolution and loading."""

from .models import (
    MODES,
    Action,
    Binding,
    KeyChord,
    KeySequence,
    PrefixNode,
    is_shell_invocation,
    is_typable,
)
from .registry import KeymapConflictError, KeymapRegistry, RegistryStats
from .resolver import KeymapResolver, ResolutionResult
from .loader import load_keymaps

__all__ = [
    "MODES",
    "Action",
    "Binding",
    "KeyChord",
    "KeySequence",
    "PrefixNode",
    "is_shell_invocation",
    "is_typable",
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
    "KeymapResolver",
    "ResolutionResult",
    "load_keymaps",
]
