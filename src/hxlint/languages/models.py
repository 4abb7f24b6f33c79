"""Language registrations and language-server definitions."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional

from hxlint.documents.merge import merge_tables
from hxlint.errors import SchemaError

# Editor features a language server can be limited to or excluded from.
FEATURES: frozenset[str] = frozenset(
    {
        "format",
        "goto-definition",
        "goto-declaration",
        "goto-type-definition",
        "goto-reference",
        "goto-implementation",
        "signature-help",
        "hover",
        "document-highlight",
        "completion",
        "code-action",
        "workspace-command",
        "document-symbols",
        "workspace-symbols",
        "diagnostics",
        "rename-symbol",
        "inlay-hints",
        "document-colors",
    }
)

# Servers the editor ships definitions for in its default languages.toml.
BUILTIN_SERVERS: frozenset[str] = frozenset(
    {
        "als",
        "amber-lsp",
        "angular",
        "ansible-language-server",
        "astro-ls",
        "awk-language-server",
        "basedpyright",
        "bash-language-server",
        "bass",
        "bicep-langserver",
        "bitbake-language-server",
        "blueprint-compiler",
        "bufls",
        "cairo-language-server",
        "circom-lsp",
        "cl-lsp",
        "clangd",
        "clarity-lsp",
        "clojure-lsp",
        "cmake-language-server",
        "codeql",
        "crystalline",
        "csharp-ls",
        "cuelsp",
        "dart",
        "deno-lsp",
        "dhall-lsp-server",
        "docker-compose-langserver",
        "docker-langserver",
        "dot-language-server",
        "dts-lsp",
        "earthlyls",
        "elixir-ls",
        "elm-language-server",
        "elp",
        "elvish",
        "erlang-ls",
        "fish-lsp",
        "forc",
        "forth-lsp",
        "fortls",
        "fsharp-ls",
        "gleam",
        "glsl_analyzer",
        "golangci-lint-lsp",
        "gopls",
        "graphql-language-service",
        "harper-ls",
        "haskell-language-server",
        "helm_ls",
        "hyprls",
        "idris2-lsp",
        "intelephense",
        "jdtls",
        "jedi",
        "jq-lsp",
        "jsonnet-language-server",
        "julia",
        "just-lsp",
        "kotlin-language-server",
        "lean",
        "lexical",
        "ltex-ls",
        "ltex-ls-plus",
        "lua-language-server",
        "markdoc-ls",
        "markdown-oxide",
        "marksman",
        "mesonlsp",
        "mint",
        "mojo-lsp",
        "neocmakelsp",
        "nextls",
        "nil",
        "nimlangserver",
        "nixd",
        "nls",
        "nu-lsp",
        "ocamllsp",
        "ols",
        "omnisharp",
        "openscad-lsp",
        "pasls",
        "perlnavigator",
        "pest-language-server",
        "phpactor",
        "pkgbuild-language-server",
        "prisma-language-server",
        "protols",
        "purescript-language-server",
        "pylsp",
        "pylyzer",
        "pyright",
        "qmlls",
        "quint-language-server",
        "r",
        "racket",
        "regal",
        "rescript-language-server",
        "robotframework_ls",
        "ruby-lsp",
        "ruff",
        "rust-analyzer",
        "scls",
        "serve-d",
        "slint-lsp",
        "solargraph",
        "solc",
        "sorbet",
        "sourcekit-lsp",
        "sql-language-server",
        "starpls",
        "steep",
        "superhtml",
        "svelteserver",
        "swipl",
        "tailwindcss-ls",
        "taplo",
        "templ",
        "terraform-ls",
        "texlab",
        "tinymist",
        "ty",
        "typescript-language-server",
        "typespec",
        "typst-lsp",
        "v-analyzer",
        "vala-language-server",
        "vale-ls",
        "vhdl_ls",
        "vscode-css-language-server",
        "vscode-html-language-server",
        "vscode-json-language-server",
        "vuels",
        "wgsl_analyzer",
        "yaml-language-server",
        "zls",
    }
)


def _feature_list(value: Any, *, path: str) -> tuple[str, ...]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise SchemaError("features must be a list of names", path=path)
    return tuple(dict.fromkeys(value))


@dataclass(frozen=True, slots=True)
class FormatterSpec:
    """External formatter: command plus argument list."""

    command: str
    args: tuple[str, ...] = ()

    @classmethod
    def from_value(cls, value: Any, *, path: str = "formatter") -> "FormatterSpec":
        if not isinstance(value, Mapping):
            raise SchemaError("formatter must be a table", path=path)
        command = value.get("command")
        if not isinstance(command, str) or not command:
            raise SchemaError("formatter needs a command", path=f"{path}.command")
        args = value.get("args", [])
        if not isinstance(args, list) or not all(isinstance(a, str) for a in args):
            raise SchemaError("formatter args must be strings", path=f"{path}.args")
        return cls(command, tuple(args))

    @property
    def argv(self) -> tuple[str, ...]:
        return (self.command,) + self.args


@dataclass(frozen=True, slots=True)
class ServerRef:
    """One item of a language's ``language-servers`` list."""

    name: str
    except_features: tuple[str, ...] = ()
    only_features: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("server name cannot be empty")
        if self.except_features and self.only_features:
            raise ValueError("'except-features' and 'only-features' are exclusive")

    @classmethod
    def from_value(cls, value: Any, *, path: str = "language-servers") -> "ServerRef":
        """Accept ``"name"`` or ``{ name = ..., except-features = [...] }``."""

        if isinstance(value, str):
            return cls(value)
        if not isinstance(value, Mapping):
            raise SchemaError("expected a server name or table", path=path)
        name = value.get("name")
        if not isinstance(name, str) or not name:
            raise SchemaError("server reference needs a name", path=f"{path}.name")
        unknown = set(value) - {"name", "except-features", "only-features"}
        if unknown:
            raise SchemaError(f"unexpected keys {sorted(unknown)}", path=path)
        except_features = _feature_list(
            value.get("except-features", []), path=f"{path}.except-features"
        )
        only_features = _feature_list(
            value.get("only-features", []), path=f"{path}.only-features"
        )
        try:
            return cls(name, except_features, only_features)
        except ValueError as exc:
            raise SchemaError(str(exc), path=path) from exc

    def features(self) -> frozenset[str]:
        if self.only_features:
            return frozenset(self.only_features)
        return FEATURES.difference(self.except_features)

    def unknown_features(self) -> tuple[str, ...]:
        return tuple(
            f for f in self.except_features + self.only_features if f not in FEATURES
        )


@dataclass(frozen=True, slots=True)
class LanguageEntry:
    """One ``[[language]]`` table."""

    name: str
    file_types: tuple[Any, ...] = ()
    formatter: Optional[FormatterSpec] = None
    language_servers: tuple[ServerRef, ...] = ()
    extra: Mapping[str, Any] = field(default_factory=dict)
    source: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("language name cannot be empty")
        object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))

    @classmethod
    def from_table(
        cls, table: Mapping[str, Any], *, index: int = 0, source: str | None = None
    ) -> "LanguageEntry":
        path = f"language[{index}]"
        if not isinstance(table, Mapping):
            raise SchemaError("a language entry must be a table", path=path)
        name = table.get("name")
        if not isinstance(name, str) or not name:
            raise SchemaError("language entry needs a name", path=f"{path}.name")
        path = f"language.{name}"

        formatter = None
        if "formatter" in table:
            formatter = FormatterSpec.from_value(
                table["formatter"], path=f"{path}.formatter"
            )

        servers_value = table.get("language-servers", [])
        if not isinstance(servers_value, list):
            raise SchemaError(
                "language-servers must be a list", path=f"{path}.language-servers"
            )
        servers = tuple(
            ServerRef.from_value(item, path=f"{path}.language-servers[{i}]")
            for i, item in enumerate(servers_value)
        )

        file_types = table.get("file-types", [])
        if not isinstance(file_types, list):
            raise SchemaError("file-types must be a list", path=f"{path}.file-types")

        extra = {
            key: value
            for key, value in table.items()
            if key not in ("name", "formatter", "language-servers", "file-types")
        }
        return cls(
            name=name,
            file_types=tuple(file_types),
            formatter=formatter,
            language_servers=servers,
            extra=extra,
            source=source,
        )

    def server_names(self) -> tuple[str, ...]:
        return tuple(ref.name for ref in self.language_servers)


@dataclass(frozen=True, slots=True)
class ServerDefinition:
    """A ``[language-server.<name>]`` table; ``config`` is passed through as-is."""

    name: str
    command: Optional[str] = None
    args: tuple[str, ...] = ()
    config: Mapping[str, Any] = field(default_factory=dict)
    environment: Mapping[str, str] = field(default_factory=dict)
    timeout: Optional[int] = None
    source: Optional[str] = None

    @classmethod
    def from_table(
        cls, name: str, table: Mapping[str, Any], *, source: str | None = None
    ) -> "ServerDefinition":
        path = f"language-server.{name}"
        if not isinstance(table, Mapping):
            raise SchemaError("a language server must be a table", path=path)
        command = table.get("command")
        if command is not None and not isinstance(command, str):
            raise SchemaError("command must be a string", path=f"{path}.command")
        args = table.get("args", [])
        if not isinstance(args, list) or not all(isinstance(a, str) for a in args):
            raise SchemaError("args must be a list of strings", path=f"{path}.args")
        config = table.get("config", {})
        if not isinstance(config, Mapping):
            raise SchemaError("config must be a table", path=f"{path}.config")
        environment = table.get("environment", {})
        if not isinstance(environment, Mapping):
            raise SchemaError("environment must be a table", path=f"{path}.environment")
        timeout = table.get("timeout")
        if timeout is not None and (isinstance(timeout, bool) or not isinstance(timeout, int)):
            raise SchemaError("timeout must be an integer", path=f"{path}.timeout")
        return cls(
            name=name,
            command=command,
            args=tuple(args),
            config=dict(config),
            environment=dict(environment),
            timeout=timeout,
            source=source,
        )

    def merged_with(self, other: "ServerDefinition") -> "ServerDefinition":
        """Combine two partial definitions of the same server; ``other`` wins."""

        return ServerDefinition(
            name=self.name,
            command=other.command or self.command,
            args=other.args or self.args,
            config=merge_tables(self.config, other.config),
            environment={**self.environment, **other.environment},
            timeout=other.timeout if other.timeout is not None else self.timeout,
            source=other.source or self.source,
        )


__all__ = [
    "FEATURES",
    "BUILTIN_SERVERS",
    "FormatterSpec",
    "ServerRef",
    "LanguageEntry",
    "ServerDefinition",
]
