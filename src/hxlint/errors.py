"""Exception hierarchy for hxlint.

Library code raises these; the validator turns them into diagnostics so a
single malformed entry does not hide the rest of a report.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class HxlintError(Exception):
    """Base class for every error raised by hxlint."""


class DocumentError(HxlintError):
    """A configuration document could not be read or is not valid TOML."""

    def __init__(self, path: Optional[Path | str], detail: str) -> None:
        location = str(path) if path else "<string>"
        super().__init__(f"{location}: {detail}")
        self.path = path
        self.detail = detail


class SchemaError(HxlintError, ValueError):
    """A section holds a value of the wrong shape.

    ``code`` names the diagnostic the validator reports for it.
    """

    def __init__(self, message: str, *, path: str = "", code: str = "") -> None:
        super().__init__(f"{path}: {message}" if path else message)
        self.message = message
        self.path = path
        self.code = code


class ChordSyntaxError(HxlintError, ValueError):
    """A key chord token cannot be parsed."""

    def __init__(self, token: str, reason: str) -> None:
        super().__init__(f"Invalid key '{token}': {reason}")
        self.token = token
        self.reason = reason


__all__ = ["HxlintError", "DocumentError", "SchemaError", "ChordSyntaxError"]
