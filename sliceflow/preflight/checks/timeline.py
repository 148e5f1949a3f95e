"""
Timeline Validation

Checks the shape of the timeline itself: presence and tick layout.
"""

from collections import Counter
from typing import List

from ...model import FlowModel
from ..models import CheckResult


def validate_timeline(model: FlowModel) -> List[CheckResult]:
    """
    Validate the timeline of a flow model.

    Args:
        model: Loaded flow model

    Returns:
        List of check results
    """
    results = [_check_not_empty(model)]

    if model.timeline:
        results.append(_check_slices_present(model))
        results.append(_check_shared_ticks(model))

    return results


def _check_not_empty(model: FlowModel) -> CheckResult:
    """A model without timeline elements has nothing to show."""
    if not model.timeline:
        return CheckResult.error(
            "Timeline",
            "Timeline is empty",
            ["Add at least one event, state view, actor or command"],
        )
    return CheckResult.ok("Timeline", f"{len(model.timeline)} elements")


def _check_slices_present(model: FlowModel) -> CheckResult:
    """Slices only come from state views and commands."""
    if not model.state_views and not model.commands:
        return CheckResult.warning(
            "Slices",
            "No state views or commands; no slices will be built",
            [],
        )
    names = {(e.type, e.name) for e in model.state_views + model.commands}
    return CheckResult.ok("Slices", f"{len(names)} distinct state views and commands")


def _check_shared_ticks(model: FlowModel) -> CheckResult:
    """Shared ticks are allowed; report them so ordering surprises are visible."""
    counts = Counter(e.tick for e in model.timeline)
    shared = sorted(tick for tick, count in counts.items() if count > 1)
    if shared:
        result = CheckResult.ok("Ticks", f"{len(shared)} ticks shared by several elements")
        result.details = [f"@{tick}" for tick in shared]
        return result
    return CheckResult.ok("Ticks", "Every element has its own tick")
