"""Serialisation of configuration tables and the round-trip check."""

from __future__ import annotations

import datetime as dt
import tomllib
from pathlib import Path
from typing import Any, Mapping

import tomli_w

from hxlint.errors import DocumentError


def dump_document(data: Mapping[str, Any]) -> str:
    try:
        return tomli_w.dumps(dict(data))
    except TypeError as exc:
        raise DocumentError(None, f"cannot serialise: {exc}") from exc


def write_document(data: Mapping[str, Any], path: Path) -> Path:
    text = dump_document(data)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise DocumentError(path, f"cannot write file: {exc.strerror}") from exc
    return path


def round_trip(data: Mapping[str, Any]) -> dict[str, Any]:
    """Serialise ``data`` and parse the output back."""

    text = dump_document(data)
    try:
        return tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise DocumentError(None, f"writer produced invalid TOML: {exc}") from exc


def _kind(value: Any) -> str:
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, int):
        return "int"
    if isinstance(value, float):
        return "float"
    if isinstance(value, str):
        return "str"
    if isinstance(value, Mapping):
        return "table"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dt.datetime):
        return "datetime"
    if isinstance(value, dt.date):
        return "date"
    if isinstance(value, dt.time):
        return "time"
    return type(value).__name__


def semantically_equal(left: Any, right: Any) -> bool:
    """Same key sets, same value types, same array order; formatting ignored."""

    if _kind(left) != _kind(right):
        return False
    if isinstance(left, Mapping):
        if set(left) != set(right):
            return False
        return all(semantically_equal(left[key], right[key]) for key in left)
    if isinstance(left, list):
        if len(left) != len(right):
            return False
        return all(semantically_equal(a, b) for a, b in zip(left, right))
    if isinstance(left, float) and left != left:
        return right != right
    return left == right


__all__ = ["dump_document", "write_document", "round_trip", "semantically_equal"]
