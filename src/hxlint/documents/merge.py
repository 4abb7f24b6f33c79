"""Layering of configuration tables (defaults < user < project)."""

from __future__ import annotations

from typing import Any, Mapping

# Arrays of tables that are merged by their ``name`` key instead of replaced.
KEYED_ARRAYS: Mapping[str, str] = {"language": "name"}


def merge_tables(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Return ``base`` with ``override`` layered on top.

    Tables merge recursively; scalars and plain arrays are replaced. The
    ``language`` array is merged entry by entry, matching on ``name``:
    matching entries merge recursively and new entries are appended.
    Neither input is modified.
    """

    merged: dict[str, Any] = {key: _copy(value) for key, value in base.items()}
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = merge_tables(current, value)
        elif key in KEYED_ARRAYS and isinstance(current, list) and isinstance(value, list):
            merged[key] = _merge_keyed(current, value, KEYED_ARRAYS[key])
        else:
            merged[key] = _copy(value)
    return merged


def _merge_keyed(base: list[Any], override: list[Any], key: str) -> list[Any]:
    result = [_copy(item) for item in base]
    positions = {
        item[key]: index
        for index, item in enumerate(result)
        if isinstance(item, Mapping) and isinstance(item.get(key), str)
    }
    for item in override:
        name = item.get(key) if isinstance(item, Mapping) else None
        if not isinstance(name, str):
            result.append(_copy(item))
            continue
        if name in positions:
            index = positions[name]
            result[index] = merge_tables(result[index], item)
        else:
            positions[name] = len(result)
            result.append(_copy(item))
    return result


def _copy(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {key: _copy(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_copy(item) for item in value]
    return value


__all__ = ["merge_tables", "KEYED_ARRAYS"]
