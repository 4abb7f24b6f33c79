"""Loading config.toml / languages.toml documents."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Iterator, Literal, Mapping, Optional

from hxlint.errors import DocumentError
from hxlint.runtime.telemetry import span

from .merge import merge_tables

DocumentKind = Literal["config", "languages", "mixed", "empty"]

CONFIG_SECTIONS = frozenset({"theme", "editor", "keys"})
LANGUAGE_SECTIONS = frozenset({"language", "language-server", "use-grammars", "grammar"})

CONFIG_FILE = "config.toml"
LANGUAGES_FILE = "languages.toml"


def detect_kind(data: Mapping[str, Any]) -> DocumentKind:
    has_config = any(key in CONFIG_SECTIONS for key in data)
    has_languages = any(key in LANGUAGE_SECTIONS for key in data)
    if has_config and has_languages:
        return "mixed"
    if has_languages:
        return "languages"
    if has_config:
        return "config"
    if data:
        # Unknown top-level keys only; treat as editor options.
        return "config"
    return "empty"


@dataclass(slots=True)
class Document:
    """One parsed TOML file."""

    data: dict[str, Any]
    path: Optional[Path] = None
    kind: DocumentKind = field(default="empty")

    def __post_init__(self) -> None:
        if self.kind == "empty":
            self.kind = detect_kind(self.data)

    @property
    def name(self) -> str:
        return str(self.path) if self.path else "<string>"

    @property
    def has_config(self) -> bool:
        return self.kind in ("config", "mixed")

    @property
    def has_languages(self) -> bool:
        return self.kind in ("languages", "mixed")

    def config_part(self) -> dict[str, Any]:
        return {k: v for k, v in self.data.items() if k not in LANGUAGE_SECTIONS}

    def languages_part(self) -> dict[str, Any]:
        return {k: v for k, v in self.data.items() if k in LANGUAGE_SECTIONS}


def parse_document(text: str, *, path: Path | None = None) -> Document:
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise DocumentError(path, f"invalid TOML: {exc}") from exc
    return Document(data=data, path=path)


def load_document(path: Path | str) -> Document:
    path = Path(path)
    with span(
        "documents::load",
        component="documents",
        metadata={"path": str(path)},
    ) as handle:
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except FileNotFoundError as exc:
            raise DocumentError(path, "file not found") from exc
        except tomllib.TOMLDecodeError as exc:
            raise DocumentError(path, f"invalid TOML: {exc}") from exc
        except OSError as exc:
            raise DocumentError(path, f"cannot read file: {exc.strerror}") from exc
        document = Document(data=data, path=path)
        handle.add_metadata("kind", document.kind)
        return document


class DocumentSet:
    """Ordered documents, later ones layered over earlier ones."""

    def __init__(self, documents: Iterable[Document] = ()) -> None:
        self._documents = list(documents)

    def __iter__(self) -> Iterator[Document]:
        return iter(self._documents)

    def __len__(self) -> int:
        return len(self._documents)

    def add(self, document: Document) -> None:
        self._documents.append(document)

    @classmethod
    def from_paths(cls, paths: Iterable[Path | str]) -> "DocumentSet":
        return cls(load_document(path) for path in paths)

    @classmethod
    def discover(cls, config_dir: Path) -> "DocumentSet":
        """Load ``config.toml`` and ``languages.toml`` from an editor config dir."""

        documents = [
            load_document(config_dir / name)
            for name in (CONFIG_FILE, LANGUAGES_FILE)
            if (config_dir / name).is_file()
        ]
        return cls(documents)

    @property
    def config(self) -> dict[str, Any]:
        merged: dict[str, Any] = {}
        for document in self._documents:
            if document.has_config:
                merged = merge_tables(merged, document.config_part())
        return merged

    @property
    def languages(self) -> dict[str, Any]:
        merged: dict[str, Any] = {}
        for document in self._documents:
            if document.has_languages:
                merged = merge_tables(merged, document.languages_part())
        return merged


__all__ = [
    "CONFIG_FILE",
    "LANGUAGES_FILE",
    "Document",
    "DocumentSet",
    "detect_kind",
    "load_document",
    "parse_document",
]
