"""
Pre-flight Check Models

Shared data types for flow model checks.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List


class CheckSeverity(str, Enum):
    """Severity levels for check results."""
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass
class CheckResult:
    """Result of a single model check."""
    name: str
    passed: bool
    severity: CheckSeverity
    message: str
    details: List[str] = field(default_factory=list)

    @classmethod
    def ok(cls, name: str, message: str) -> "CheckResult":
        return cls(name=name, passed=True, severity=CheckSeverity.INFO, message=message)

    @classmethod
    def warning(cls, name: str, message: str, details: List[str]) -> "CheckResult":
        return cls(name=name, passed=False, severity=CheckSeverity.WARNING, message=message, details=details)

    @classmethod
    def error(cls, name: str, message: str, details: List[str]) -> "CheckResult":
        return cls(name=name, passed=False, severity=CheckSeverity.ERROR, message=message, details=details)

    def __str__(self) -> str:
        status = "PASS" if self.passed else "FAIL"
        return f"[{status}] {self.name}: {self.message}"
