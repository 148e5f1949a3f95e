"""
Pre-flight Checker

Main orchestrator for flow model checks.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional

from ..model import FlowModel, ModelError, ModelLoader
from .models import CheckResult, CheckSeverity
from .checks.timeline import validate_timeline
from .checks.references import validate_references


@dataclass
class PreflightResult:
    """Complete pre-flight check results."""
    checks: List[CheckResult]
    model_path: Optional[Path] = None

    @property
    def passed(self) -> bool:
        """Check if all critical checks passed."""
        return not self.errors

    @property
    def errors(self) -> List[CheckResult]:
        """Get all error-level failures."""
        return [c for c in self.checks if not c.passed and c.severity == CheckSeverity.ERROR]

    @property
    def warnings(self) -> List[CheckResult]:
        """Get all warning-level issues."""
        return [c for c in self.checks if not c.passed and c.severity == CheckSeverity.WARNING]

    def summary(self) -> str:
        """Get summary string."""
        total = len(self.checks)
        passed = len([c for c in self.checks if c.passed])
        errors = len(self.errors)
        warnings = len(self.warnings)

        if errors > 0:
            status = "FAILED"
        elif warnings > 0:
            status = "PASSED with warnings"
        else:
            status = "PASSED"

        return f"{status}: {passed}/{total} checks passed ({errors} errors, {warnings} warnings)"


class PreflightChecker:
    """
    Orchestrates flow model checks.

    Runs a series of checks to validate:
    - The model file parses and matches the document schema
    - The timeline is non-empty and yields slices
    - sourcedFrom, producedBy and actor references resolve
    - Specifications match an existing slice
    """

    def __init__(
        self,
        model_path: Optional[Path] = None,
        model: Optional[FlowModel] = None,
    ):
        """
        Initialize the checker.

        Args:
            model_path: Path to the model file
            model: Pre-loaded flow model
        """
        self.model_path = model_path
        self.model = model

    def run_all(self) -> PreflightResult:
        """
        Run all pre-flight checks.

        Returns:
            PreflightResult with all check results
        """
        structure = self._check_structure()
        checks = [structure]

        if self.model is not None:
            checks.extend(validate_timeline(self.model))
            checks.extend(validate_references(self.model))

        return PreflightResult(checks=checks, model_path=self.model_path)

    def run_check(self, check_name: str) -> Optional[CheckResult]:
        """
        Run a specific check by name.

        Args:
            check_name: Name of the check to run

        Returns:
            CheckResult or None if check not found
        """
        structure = self._check_structure()
        if check_name == "structure":
            return structure
        if self.model is None:
            return None

        check_map: Dict[str, Callable[[], CheckResult]] = {
            "timeline": lambda: validate_timeline(self.model)[0],
            "sourced_from": lambda: validate_references(self.model)[0],
            "produced_by": lambda: validate_references(self.model)[1],
            "actors": lambda: validate_references(self.model)[2],
            "specifications": lambda: validate_references(self.model)[3],
        }

        if check_name in check_map:
            return check_map[check_name]()
        return None

    def _check_structure(self) -> CheckResult:
        """Load the model if needed and report whether it is well-formed."""
        if self.model is None and self.model_path is not None:
            try:
                self.model = ModelLoader(self.model_path).load().model
            except ModelError as e:
                return CheckResult.error("Model Structure", "Model could not be loaded", [str(e)])

        if self.model is None:
            return CheckResult.error("Model Structure", "No model to check", [])

        return CheckResult.ok("Model Structure", f"Model '{self.model.name}' is well-formed")
