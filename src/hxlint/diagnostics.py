"""Diagnostics produced while checking configuration documents."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator, Optional


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """One problem found in a document.

    ``path`` is the dotted location inside the document (``keys.normal.ret``),
    ``source`` the file it came from, when known.
    """

    code: str
    severity: Severity
    message: str
    path: str = ""
    source: Optional[str] = None

    @property
    def location(self) -> str:
        if self.source and self.path:
            return f"{self.source}:{self.path}"
        return self.source or self.path

    def escalate(self) -> "Diagnostic":
        if self.severity is not Severity.WARNING:
            return self
        return Diagnostic(self.code, Severity.ERROR, self.message, self.path, self.source)


def error(code: str, message: str, *, path: str = "", source: str | None = None) -> Diagnostic:
    return Diagnostic(code, Severity.ERROR, message, path, source)


def warning(code: str, message: str, *, path: str = "", source: str | None = None) -> Diagnostic:
    return Diagnostic(code, Severity.WARNING, message, path, source)


def info(code: str, message: str, *, path: str = "", source: str | None = None) -> Diagnostic:
    return Diagnostic(code, Severity.INFO, message, path, source)


@dataclass(slots=True)
class Report:
    """Ordered collection of diagnostics for one validation run."""

    diagnostics: list[Diagnostic] = field(default_factory=list)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.diagnostics)

    def __len__(self) -> int:
        return len(self.diagnostics)

    def add(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)

    def extend(self, diagnostics: Iterable[Diagnostic]) -> None:
        self.diagnostics.extend(diagnostics)

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity is Severity.ERROR]

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity is Severity.WARNING]

    def codes(self) -> list[str]:
        return [d.code for d in self.diagnostics]

    def ok(self, *, strict: bool = False) -> bool:
        if strict:
            return not self.errors and not self.warnings
        return not self.errors

    def exit_code(self, *, strict: bool = False) -> int:
        return 0 if self.ok(strict=strict) else 1

    def filter(self, disabled: Iterable[str]) -> "Report":
        dropped = set(disabled)
        return Report([d for d in self.diagnostics if d.code not in dropped])

    def escalated(self) -> "Report":
        return Report([d.escalate() for d in self.diagnostics])


__all__ = ["Severity", "Diagnostic", "Report", "error", "warning", "info"]
