"""Setting entries flattened from config.toml and their type checks."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional

from hxlint.diagnostics import Diagnostic, error, warning

from .schema import OptionSpec, is_known_group, lookup

# Sections of config.toml that are not editor options.
RESERVED_SECTIONS = frozenset({"keys", "theme"})


@dataclass(frozen=True, slots=True)
class SettingEntry:
    """Dotted option path and the value found for it."""

    path: str
    value: Any
    source: Optional[str] = None

    @property
    def spec(self) -> OptionSpec | None:
        return lookup(self.path)


def flatten_settings(
    data: Mapping[str, Any], *, source: str | None = None
) -> list[SettingEntry]:
    """Flatten every option table into dotted entries.

    ``keys`` and ``theme`` are skipped. A table whose schema kind is a
    mapping (``editor.auto-pairs``) stays a single entry.
    """

    entries: list[SettingEntry] = []

    def walk(path: str, value: Any) -> None:
        spec = lookup(path)
        if isinstance(value, Mapping) and not (spec and spec.is_leaf_table):
            for key, child in value.items():
                walk(f"{path}.{key}", child)
            return
        entries.append(SettingEntry(path, value, source))

    for key, value in data.items():
        if key in RESERVED_SECTIONS:
            continue
        walk(key, value)
    return entries


def _type_name(value: Any) -> str:
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, Mapping):
        return "table"
    if isinstance(value, list):
        return "array"
    return type(value).__name__


def _matches_kind(kind: str, value: Any) -> bool:
    if kind == "any":
        return True
    if kind == "bool":
        return isinstance(value, bool)
    if kind == "int":
        return isinstance(value, int) and not isinstance(value, bool)
    if kind in ("str", "char"):
        return isinstance(value, str)
    if kind == "list[str]":
        return isinstance(value, list) and all(isinstance(v, str) for v in value)
    if kind == "list[int]":
        return isinstance(value, list) and all(
            isinstance(v, int) and not isinstance(v, bool) for v in value
        )
    if kind == "mapping":
        return isinstance(value, Mapping)
    if kind == "bool|mapping":
        return isinstance(value, (bool, Mapping))
    raise ValueError(f"unknown option kind '{kind}'")


def check_setting(
    entry: SettingEntry, *, allow_unknown: bool = False
) -> list[Diagnostic]:
    spec = entry.spec
    if spec is None:
        if allow_unknown:
            return []
        parent = entry.path.rsplit(".", 1)[0]
        hint = f" in known group '{parent}'" if is_known_group(parent) else ""
        return [
            warning(
                "setting-unknown",
                f"unknown option '{entry.path}'{hint}",
                path=entry.path,
                source=entry.source,
            )
        ]

    if not _matches_kind(spec.kind, entry.value):
        return [
            error(
                "setting-type",
                f"expected {spec.kind}, found {_type_name(entry.value)}",
                path=entry.path,
                source=entry.source,
            )
        ]

    problems: list[Diagnostic] = []
    value = entry.value
    if spec.choices and value not in spec.choices:
        problems.append(
            error(
                "setting-choice",
                f"'{value}' is not one of {', '.join(spec.choices)}",
                path=entry.path,
                source=entry.source,
            )
        )
    if spec.kind == "char" and len(value) != 1:
        problems.append(
            error(
                "setting-type",
                f"expected a single character, found {value!r}",
                path=entry.path,
                source=entry.source,
            )
        )
    if spec.elements:
        for element in value:
            if element not in spec.elements:
                problems.append(
                    error(
                        "setting-choice",
                        f"unknown element '{element}'",
                        path=entry.path,
                        source=entry.source,
                    )
                )
    if spec.path == "editor.auto-pairs" and isinstance(value, Mapping):
        for opening, closing in value.items():
            if len(opening) != 1 or not isinstance(closing, str) or len(closing) != 1:
                problems.append(
                    error(
                        "setting-type",
                        f"auto-pair {opening!r} -> {closing!r} must map one "
                        "character to one character",
                        path=f"{entry.path}.{opening}",
                        source=entry.source,
                    )
                )
    return problems


def check_theme(value: Any, *, source: str | None = None) -> list[Diagnostic]:
    """``theme`` is a name, or a table of ``light``/``dark``/``fallback`` names."""

    if isinstance(value, str):
        if not value:
            return [error("theme-type", "theme name is empty", path="theme", source=source)]
        return []
    if isinstance(value, Mapping):
        allowed = {"light", "dark", "fallback"}
        problems = [
            error("theme-type", f"unknown theme key '{key}'", path="theme", source=source)
            for key in value
            if key not in allowed
        ]
        problems.extend(
            error("theme-type", f"theme '{key}' must be a name", path=f"theme.{key}", source=source)
            for key, name in value.items()
            if key in allowed and not isinstance(name, str)
        )
        return problems
    return [
        error(
            "theme-type",
            f"expected a theme name, found {_type_name(value)}",
            path="theme",
            source=source,
        )
    ]


class SettingsTable:
    """Read-only view over flattened settings; later entries win."""

    def __init__(self, entries: list[SettingEntry], *, theme: Any = None) -> None:
        self._entries = MappingProxyType({entry.path: entry for entry in entries})
        self.theme = theme

    @classmethod
    def from_document(
        cls, data: Mapping[str, Any], *, source: str | None = None
    ) -> "SettingsTable":
        return cls(flatten_settings(data, source=source), theme=data.get("theme"))

    def __iter__(self) -> Iterator[SettingEntry]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, path: object) -> bool:
        return path in self._entries

    def get(self, path: str, default: Any = None) -> Any:
        entry = self._entries.get(path)
        return default if entry is None else entry.value

    def paths(self) -> tuple[str, ...]:
        return tuple(self._entries)


__all__ = [
    "SettingEntry",
    "SettingsTable",
    "flatten_settings",
    "check_setting",
    "check_theme",
]
