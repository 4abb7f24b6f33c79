"""TOML documents: loading, layering and writing."""

from .merge import merge_tables
from .document import (
    CONFIG_FILE,
    LANGUAGES_FILE,
    Document,
    DocumentSet,
    detect_kind,
    load_document,
    parse_document,
)
from .writer import dump_document, round_trip, semantically_equal, write_document

__all__ = [
    "merge_tables",
    "CONFIG_FILE",
    "LANGUAGES_FILE",
    "Document",
    "DocumentSet",
    "detect_kind",
    "load_document",
    "parse_document",
    "dump_document",
    "round_trip",
    "semantically_equal",
    "write_document",
]
