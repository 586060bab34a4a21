"""Diagnostic model: recoverable findings reported while compiling styles."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Severity(Enum):
    """Severity level for a diagnostic message."""

    ERROR = "ERROR"
    WARNING = "WARNING"


@dataclass(frozen=True)
class Diagnostic:
    """A single finding about a style declaration.

    Attributes:
        rule: Identifier for the check that produced this diagnostic.
        severity: How serious the issue is.
        message: Human-readable description of the problem.
        path: The source file involved, if known.
        line: 1-based line of the declaration, if known.
        column: 1-based column of the declaration, if known.
    """

    rule: str
    severity: Severity
    message: str
    path: str | None = None
    line: int | None = None
    column: int | None = None

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    @property
    def is_warning(self) -> bool:
        return self.severity is Severity.WARNING

    def located(self, path: str, line: int | None, column: int | None) -> Diagnostic:
        """Return a copy anchored at the given file position."""
        return Diagnostic(self.rule, self.severity, self.message, path, line, column)

    def __str__(self) -> str:
        location = ""
        if self.path:
            location = f" [{self.path}"
            if self.line is not None:
                location += f":{self.line}:{self.column}"
            location += "]"
        return f"{self.severity.value}{location}: {self.message}"
