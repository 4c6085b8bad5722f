"""Diagnostics produced by an audit run."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List


class Severity(str, Enum):
    """Severity of a diagnostic.

    ERROR is a structural or transport failure, WARNING a compliance gap.
    """
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class Diagnostic:
    """A single audit finding."""
    severity: Severity
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {"severity": self.severity.value, "message": self.message}


def error(message: str) -> Diagnostic:
    return Diagnostic(Severity.ERROR, message)


def warning(message: str) -> Diagnostic:
    return Diagnostic(Severity.WARNING, message)


@dataclass
class AuditResult:
    """Diagnostics plus the log group names that compliant stages write to.

    Attributes:
        diagnostics: Findings in encounter order
        log_group_names: Deduplicated log group names (order not significant)
    """
    diagnostics: List[Diagnostic] = field(default_factory=list)
    log_group_names: List[str] = field(default_factory=list)

    @property
    def errors(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.severity is Severity.ERROR]

    @property
    def warnings(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.severity is Severity.WARNING]

    @property
    def has_errors(self) -> bool:
        return any(d.severity is Severity.ERROR for d in self.diagnostics)

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to dictionary for JSON serialization."""
        return {
            "diagnostics": [d.to_dict() for d in self.diagnostics],
            "log_group_names": sorted(self.log_group_names),
            "error_count": len(self.errors),
            "warning_count": len(self.warnings),
        }
