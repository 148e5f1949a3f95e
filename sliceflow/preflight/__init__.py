"""
Pre-flight Check Module

Validates a flow model before slices are built or rendered.
"""

from .models import CheckResult, CheckSeverity
from .checker import PreflightChecker, PreflightResult

__all__ = [
    "PreflightChecker",
    "PreflightResult",
    "CheckResult",
    "CheckSeverity",
]
