"""Registry of language entries and the servers they reference."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Mapping, Optional

from hxlint.errors import HxlintError, SchemaError
from hxlint.runtime.telemetry import span

from .models import BUILTIN_SERVERS, LanguageEntry, ServerDefinition


class DuplicateLanguageError(SchemaError):
    """Raised when a language name is registered twice."""

    def __init__(self, entry: LanguageEntry, existing: LanguageEntry) -> None:
        super().__init__(
            f"language '{entry.name}' is already defined"
            + (f" in {existing.source}" if existing.source else ""),
            path=f"language.{entry.name}",
            code="language-duplicate",
        )
        self.entry = entry
        self.existing = existing


@dataclass(frozen=True, slots=True)
class UnresolvedReference:
    """A ``language-servers`` item naming a server nobody defines."""

    language: str
    server: str
    source: Optional[str] = None


class LanguageRegistry:
    """Owns language entries (unique by name) and server definitions."""

    def __init__(
        self,
        *,
        builtin_servers: Iterable[str] = BUILTIN_SERVERS,
        logger_name: str | None = None,
    ) -> None:
        self._languages: Dict[str, LanguageEntry] = {}
        self._servers: Dict[str, ServerDefinition] = {}
        self._builtin = frozenset(builtin_servers)
        self._logger_name = logger_name

    def register_language(
        self, entry: LanguageEntry, *, replace: bool = False
    ) -> LanguageEntry:
        existing = self._languages.get(entry.name)
        if existing is not None and not replace:
            raise DuplicateLanguageError(entry, existing)
        self._languages[entry.name] = entry
        return entry

    def register_server(self, definition: ServerDefinition) -> ServerDefinition:
        existing = self._servers.get(definition.name)
        if existing is not None:
            definition = existing.merged_with(definition)
        self._servers[definition.name] = definition
        return definition

    def get_language(self, name: str) -> LanguageEntry:
        try:
            return self._languages[name]
        except KeyError as exc:
            raise KeyError(f"Language '{name}' is not registered") from exc

    def languages(self) -> tuple[LanguageEntry, ...]:
        return tuple(self._languages.values())

    def servers(self) -> tuple[ServerDefinition, ...]:
        return tuple(self._servers.values())

    def is_builtin(self, name: str) -> bool:
        return name in self._builtin

    def resolve_server(self, name: str) -> Optional[ServerDefinition]:
        """Return the definition, ``None`` for a built-in, or raise ``KeyError``."""

        if name in self._servers:
            return self._servers[name]
        if name in self._builtin:
            return None
        raise KeyError(f"Language server '{name}' is not defined")

    def unresolved_references(self) -> list[UnresolvedReference]:
        with span(
            "languages::unresolved_references",
            logger_name=self._logger_name,
            component="languages",
            metadata={"languages": len(self._languages)},
        ) as handle:
            missing: list[UnresolvedReference] = []
            for entry in self._languages.values():
                for ref in entry.language_servers:
                    if ref.name not in self._servers and ref.name not in self._builtin:
                        missing.append(
                            UnresolvedReference(entry.name, ref.name, entry.source)
                        )
            handle.add_metadata("unresolved", len(missing))
            return missing

    def unused_servers(self) -> tuple[str, ...]:
        referenced = {
            ref.name for entry in self._languages.values() for ref in entry.language_servers
        }
        return tuple(name for name in self._servers if name not in referenced)

    def features_for(self, language: str, server: str) -> frozenset[str]:
        entry = self.get_language(language)
        for ref in entry.language_servers:
            if ref.name == server:
                return ref.features()
        raise KeyError(f"Language '{language}' does not use server '{server}'")


def load_languages(
    registry: LanguageRegistry,
    data: Mapping[str, Any],
    *,
    source: str | None = None,
    on_error: Optional[Callable[[HxlintError], None]] = None,
) -> int:
    """Read ``language-server`` and ``language`` sections into ``registry``.

    Malformed entries raise, unless ``on_error`` is given. Returns the number
    of language entries registered.
    """

    def fail(error: HxlintError) -> None:
        if on_error is None:
            raise error
        on_error(error)

    servers = data.get("language-server", {})
    if not isinstance(servers, Mapping):
        fail(SchemaError("must be a table of servers", path="language-server"))
        servers = {}
    for name, table in servers.items():
        try:
            registry.register_server(ServerDefinition.from_table(name, table, source=source))
        except SchemaError as exc:
            fail(exc)

    languages = data.get("language", [])
    if not isinstance(languages, list):
        fail(SchemaError("must be an array of tables", path="language"))
        languages = []
    count = 0
    for index, table in enumerate(languages):
        try:
            registry.register_language(
                LanguageEntry.from_table(table, index=index, source=source)
            )
        except SchemaError as exc:
            fail(exc)
            continue
        count += 1
    return count


__all__ = [
    "DuplicateLanguageError",
    "LanguageRegistry",
    "UnresolvedReference",
    "load_languages",
]
