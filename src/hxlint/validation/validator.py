"""Builds the in-memory tables from documents and checks their invariants."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from hxlint.diagnostics import Diagnostic, Report, error, info, warning
from hxlint.documents import Document, DocumentSet
from hxlint.errors import HxlintError, SchemaError
from hxlint.keymaps import Binding, KeymapRegistry, KeymapResolver, load_keymaps
from hxlint.languages import BUILTIN_SERVERS, LanguageRegistry, load_languages
from hxlint.runtime.options import LintOptions
from hxlint.runtime.telemetry import record_event, span
from hxlint.settings import SettingsTable, check_setting, check_theme, flatten_settings

LOGGER_NAME = "hxlint.validation"


@dataclass(slots=True)
class ConfigModel:
    """Immutable-by-convention tables built from one document set."""

    keymaps: KeymapRegistry
    languages: LanguageRegistry
    settings: SettingsTable
    diagnostics: list[Diagnostic] = field(default_factory=list)

    def resolver(self) -> KeymapResolver:
        return KeymapResolver(self.keymaps, logger_name=LOGGER_NAME)


def _schema_code(exc: HxlintError, fallback: str) -> str:
    if isinstance(exc, SchemaError) and exc.code:
        return exc.code
    return fallback


class Validator:
    """Checks a document set and reports diagnostics.

    By default every document contributes to one logical table, so a key
    sequence or language name repeated across files is reported. With
    ``options.layered`` the documents are merged first, later files
    overriding earlier ones the way the editor layers user and project
    configuration.
    """

    def __init__(self, options: Optional[LintOptions] = None) -> None:
        self.options = options or LintOptions()

    def build(self, documents: DocumentSet) -> ConfigModel:
        keymaps = KeymapRegistry(logger_name=LOGGER_NAME)
        languages = LanguageRegistry(
            builtin_servers=BUILTIN_SERVERS | set(self.options.extra_servers),
            logger_name=LOGGER_NAME,
        )
        diagnostics: list[Diagnostic] = []
        setting_entries = []
        theme: Any = None

        for name, config, langs in self._sections(documents):
            if "theme" in config:
                theme = config["theme"]
                diagnostics.extend(check_theme(theme, source=name))
            entries = flatten_settings(config, source=name)
            setting_entries.extend(entries)
            for entry in entries:
                diagnostics.extend(
                    check_setting(
                        entry, allow_unknown=self.options.allow_unknown_settings
                    )
                )
            diagnostics.extend(self._load_keys(keymaps, config.get("keys"), name))
            diagnostics.extend(self._load_languages(languages, langs, name))

        return ConfigModel(
            keymaps=keymaps,
            languages=languages,
            settings=SettingsTable(setting_entries, theme=theme),
            diagnostics=diagnostics,
        )

    def validate(self, documents: DocumentSet) -> Report:
        with span(
            "validation::validate",
            logger_name=LOGGER_NAME,
            component="validation",
            metadata={"documents": len(documents), "layered": self.options.layered},
        ) as handle:
            model = self.build(documents)
            report = Report(list(model.diagnostics))
            report.extend(self._check_prefixes(model.keymaps))
            report.extend(self._check_servers(model.languages))
            report = report.filter(self.options.disabled_checks)
            handle.add_metadata("errors", len(report.errors))
            handle.add_metadata("warnings", len(report.warnings))
            record_event(
                "validation.finished",
                data={"errors": len(report.errors), "warnings": len(report.warnings)},
                logger_name=LOGGER_NAME,
            )
            return report

    def _sections(
        self, documents: DocumentSet
    ) -> list[tuple[str, Mapping[str, Any], Mapping[str, Any]]]:
        if self.options.layered:
            return [("<merged>", documents.config, documents.languages)]
        sections = []
        for document in documents:
            sections.append(self._document_sections(document))
        return sections

    @staticmethod
    def _document_sections(
        document: Document,
    ) -> tuple[str, Mapping[str, Any], Mapping[str, Any]]:
        config = document.config_part() if document.has_config else {}
        langs = document.languages_part() if document.has_languages else {}
        return document.name, config, langs

    def _load_keys(
        self, registry: KeymapRegistry, keys: Any, source: str
    ) -> list[Diagnostic]:
        if keys is None:
            return []
        if not isinstance(keys, Mapping):
            return [error("keys-mode", "'keys' must be a table of modes", path="keys", source=source)]

        found: list[Diagnostic] = []

        def on_conflict(previous: Binding, current: Binding) -> None:
            where = f" (first bound in {previous.source})" if previous.source != source else ""
            found.append(
                error(
                    "keys-duplicate",
                    f"'{current.key_signature}' is bound more than once in "
                    f"{current.mode} mode{where}; the later binding "
                    f"({current.action.describe()}) wins",
                    path=".".join(("keys", current.mode) + current.sequence.tokens),
                    source=source,
                )
            )

        def on_error(exc: HxlintError) -> None:
            found.append(
                error(
                    _schema_code(exc, "keys-value"),
                    getattr(exc, "message", str(exc)),
                    path=getattr(exc, "path", ""),
                    source=source,
                )
            )

        load_keymaps(
            registry, keys, source=source, on_conflict=on_conflict, on_error=on_error
        )
        return found

    def _load_languages(
        self, registry: LanguageRegistry, data: Mapping[str, Any], source: str
    ) -> list[Diagnostic]:
        if not data:
            return []
        found: list[Diagnostic] = []

        def on_error(exc: HxlintError) -> None:
            path = getattr(exc, "path", "")
            fallback = "server-shape" if path.startswith("language-server") else "language-shape"
            found.append(
                error(
                    _schema_code(exc, fallback),
                    getattr(exc, "message", str(exc)),
                    path=path,
                    source=source,
                )
            )

        load_languages(registry, data, source=source, on_error=on_error)
        return found

    def _check_prefixes(self, registry: KeymapRegistry) -> list[Diagnostic]:
        return [
            warning(
                "keys-shadowed-prefix",
                f"'{binding.key_signature}' is bound to {binding.action.describe()} "
                f"but also starts '{sequence.signature}', which becomes unreachable",
                path=f"keys.{binding.mode}",
                source=binding.source,
            )
            for binding, sequence in registry.shadowed_prefixes()
        ]

    def _check_servers(self, registry: LanguageRegistry) -> list[Diagnostic]:
        found: list[Diagnostic] = []
        for ref in registry.unresolved_references():
            found.append(
                error(
                    "server-unresolved",
                    f"language '{ref.language}' uses '{ref.server}', which has no "
                    "[language-server] definition and is not built in",
                    path=f"language.{ref.language}.language-servers",
                    source=ref.source,
                )
            )
        for entry in registry.languages():
            for server in entry.language_servers:
                for feature in server.unknown_features():
                    found.append(
                        error(
                            "server-feature",
                            f"unknown feature '{feature}' for server '{server.name}'",
                            path=f"language.{entry.name}.language-servers",
                            source=entry.source,
                        )
                    )
        for name in registry.unused_servers():
            found.append(
                info(
                    "server-unused",
                    f"language server '{name}' is defined but no language uses it",
                    path=f"language-server.{name}",
                    source=registry.resolve_server(name).source,
                )
            )
        return found


def validate(
    documents: DocumentSet, options: Optional[LintOptions] = None
) -> Report:
    return Validator(options).validate(documents)


__all__ = ["ConfigModel", "Validator", "validate"]
