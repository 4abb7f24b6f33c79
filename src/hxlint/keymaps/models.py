"""Dataclasses describing key chords, bindings and bound actions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Literal, Optional

from hxlint.errors import ChordSyntaxError

MODES: tuple[str, ...] = ("normal", "insert", "select")

NAMED_KEYS: frozenset[str] = frozenset(
    {
        "backspace",
        "space",
        "ret",
        "minus",
        "lt",
        "gt",
        "left",
        "right",
        "up",
        "down",
        "home",
        "end",
        "pageup",
        "pagedown",
        "tab",
        "del",
        "ins",
        "null",
        "esc",
        "capslock",
        "scrolllock",
        "numlock",
        "printscreen",
        "pause",
        "menu",
        "keypadbegin",
        # media keys
        "play",
        "pausemedia",
        "playpause",
        "reverse",
        "stop",
        "fastforward",
        "rewind",
        "tracknext",
        "trackprevious",
        "record",
        "lowervolume",
        "raisevolume",
        "mutevolume",
        # modifier keys pressed on their own
        "leftshift",
        "leftcontrol",
        "leftalt",
        "leftsuper",
        "lefthyper",
        "leftmeta",
        "rightshift",
        "rightcontrol",
        "rightalt",
        "rightsuper",
        "righthyper",
        "rightmeta",
        "isolevel3shift",
        "isolevel5shift",
    }
    | {f"F{index}" for index in range(1, 25)}
)

MODIFIER_ALIASES: dict[str, str] = {
    "C": "C",
    "A": "A",
    "S": "S",
    "Meta": "Meta",
    "Cmd": "Meta",
    "Win": "Meta",
}

MODIFIER_ORDER: tuple[str, ...] = ("C", "A", "S", "Meta")

SHELL_COMMANDS: tuple[str, ...] = (
    ":sh",
    ":run-shell-command",
    ":insert-output",
    ":append-output",
    ":pipe",
    ":pipe-to",
)


def _normalize_modifiers(modifiers: Iterable[str]) -> tuple[str, ...]:
    values = {MODIFIER_ALIASES.get(m.strip(), m.strip()) for m in modifiers if m.strip()}
    unknown = values.difference(MODIFIER_ORDER)
    if unknown:
        raise ValueError(f"unknown modifiers {sorted(unknown)}")
    return tuple(m for m in MODIFIER_ORDER if m in values)


def _normalize_key(key: str) -> str:
    if key == " ":
        return "space"
    return key


@dataclass(frozen=True, slots=True)
class KeyChord:
    """Single key press: one key plus an ordered set of modifiers."""

    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        object.__setattr__(self, "key", _normalize_key(self.key))
        object.__setattr__(self, "modifiers", _normalize_modifiers(self.modifiers))
        if self.key not in NAMED_KEYS and len(self.key) != 1:
            raise ValueError(f"unknown key name '{self.key}'")

    @property
    def token(self) -> str:
        if self.modifiers:
            return "-".join(self.modifiers + (self.key,))
        return self.key

    @classmethod
    def parse(cls, token: str) -> "KeyChord":
        """Parse ``C-n``, ``S-A-up``, ``A-'`` and friends.

        The final ``-`` separated part is the key; a bare ``-`` has no key and
        must be written ``minus``.
        """

        if token == " ":
            return cls("space")
        if not token:
            raise ChordSyntaxError(token, "empty key")
        parts = token.split("-")
        key = parts.pop()
        if not key:
            raise ChordSyntaxError(token, "'-' must be written as 'minus'")
        try:
            return cls(key, tuple(parts))
        except ValueError as exc:
            raise ChordSyntaxError(token, str(exc)) from exc


@dataclass(frozen=True, slots=True)
class KeySequence:
    """Immutable, non-empty run of chords."""

    chords: tuple[KeyChord, ...]

    def __post_init__(self) -> None:
        if not self.chords:
            raise ValueError("KeySequence requires at least one chord")

    @property
    def tokens(self) -> tuple[str, ...]:
        return tuple(chord.token for chord in self.chords)

    @property
    def signature(self) -> str:
        return " ".join(self.tokens)

    def append(self, *chords: KeyChord) -> "KeySequence":
        return KeySequence(self.chords + tuple(chords))

    def startswith(self, other: "KeySequence") -> bool:
        return self.chords[: len(other.chords)] == other.chords

    @classmethod
    def from_strings(cls, *tokens: str) -> "KeySequence":
        return cls(tuple(KeyChord.parse(token) for token in tokens))

    @classmethod
    def parse(cls, text: str) -> "KeySequence":
        """Parse a space separated sequence such as ``"space space s"``."""

        return cls.from_strings(*text.split())


def is_typable(command: str) -> bool:
    return command.startswith(":")


def is_shell_invocation(command: str) -> bool:
    if "%sh{" in command:
        return True
    name = command.split(maxsplit=1)[0] if command.strip() else ""
    return name in SHELL_COMMANDS


@dataclass(frozen=True, slots=True)
class Action:
    """What a key sequence is bound to: one command or an ordered list."""

    kind: Literal["command", "sequence"]
    commands: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.commands:
            raise ValueError("Action requires at least one command")
        if self.kind == "command" and len(self.commands) != 1:
            raise ValueError("a command action holds exactly one command")

    @classmethod
    def from_value(cls, value: object) -> "Action":
        if isinstance(value, str):
            return cls("command", (value,))
        if isinstance(value, list):
            if not all(isinstance(item, str) for item in value):
                raise TypeError("command sequences may only contain strings")
            return cls("sequence", tuple(value))
        raise TypeError(f"unsupported binding value {type(value).__name__}")

    def shell_invocations(self) -> tuple[str, ...]:
        return tuple(cmd for cmd in self.commands if is_shell_invocation(cmd))

    def describe(self) -> str:
        if self.kind == "command":
            return f"command {self.commands[0]}"
        noun = "command" if len(self.commands) == 1 else "commands"
        return f"sequence of {len(self.commands)} {noun}: " + ", ".join(self.commands)


@dataclass(frozen=True, slots=True)
class Binding:
    """Associates a key sequence in one mode with an action."""

    mode: str
    sequence: KeySequence
    action: Action
    source: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.mode:
            raise ValueError("binding mode cannot be empty")

    @property
    def key_signature(self) -> str:
        return self.sequence.signature

    @property
    def id(self) -> str:
        return f"{self.mode}:{self.key_signature}"

    def describe(self) -> str:
        return f"[{self.mode}] {self.key_signature} -> {self.action.describe()}"


@dataclass(frozen=True, slots=True)
class PrefixNode:
    """Nested sub-table of bindings (a leader group)."""

    mode: str
    sequence: KeySequence
    source: Optional[str] = None


__all__ = [
    "MODES",
    "NAMED_KEYS",
    "KeyChord",
    "KeySequence",
    "Action",
    "Binding",
    "PrefixNode",
    "is_typable",
    "is_shell_invocation",
]
