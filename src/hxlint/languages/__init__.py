"""Language registrations, formatters and language-server wiring."""

from .models import (
    BUILTIN_SERVERS,
    FEATURES,
    FormatterSpec,
    LanguageEntry,
    ServerDefinition,
    ServerRef,
)
from .registry import (
    DuplicateLanguageError,
    LanguageRegistry,
    UnresolvedReference,
    load_languages,
)

__all__ = [
    "BUILTIN_SERVERS",
    "FEATURES",
    "FormatterSpec",
    "LanguageEntry",
    "ServerDefinition",
    "ServerRef",
    "DuplicateLanguageError",
    "LanguageRegistry",
    "UnresolvedReference",
    "load_languages",
]
