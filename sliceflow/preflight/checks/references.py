"""
Reference Validation

Finds names that point at nothing on the timeline. None of these stop
slices from being built; they are reported as warnings.
"""

from typing import List

from ...model import FlowModel
from ..models import CheckResult


def validate_references(model: FlowModel) -> List[CheckResult]:
    """
    Validate cross-references between timeline elements.

    Args:
        model: Loaded flow model

    Returns:
        List of check results
    """
    return [
        _check_sourced_from(model),
        _check_produced_by(model),
        _check_actors(model),
        _check_specifications(model),
    ]


def _check_sourced_from(model: FlowModel) -> CheckResult:
    """Every sourcedFrom name should match an event."""
    event_names = {e.name for e in model.events}
    dangling = []
    for state in model.state_views:
        for name in state.sourced_from:
            if name not in event_names:
                dangling.append(f"{state.name} @{state.tick} -> {name}")

    if dangling:
        return CheckResult.warning(
            "Sourced From",
            f"{len(dangling)} references to events that never happen",
            dangling,
        )
    return CheckResult.ok("Sourced From", "All sourcedFrom events exist")


def _check_produced_by(model: FlowModel) -> CheckResult:
    """Every producedBy key should name an exact command occurrence."""
    command_keys = {c.key for c in model.commands}
    orphaned = []
    for event in model.events:
        if event.produced_by is None:
            continue
        if event.produced_by_key not in command_keys:
            orphaned.append(f"{event.name} @{event.tick} <- {event.produced_by}")

    if orphaned:
        return CheckResult.warning(
            "Produced By",
            f"{len(orphaned)} events produced by no command occurrence",
            orphaned,
        )
    return CheckResult.ok("Produced By", "All producedBy keys match a command")


def _check_actors(model: FlowModel) -> CheckResult:
    """Actors should read known state views and send known commands."""
    view_names = {s.name for s in model.state_views}
    command_names = {c.name for c in model.commands}
    problems = []
    for actor in model.actors:
        if actor.reads_view not in view_names:
            problems.append(f"{actor.name} @{actor.tick} reads unknown view {actor.reads_view}")
        if actor.sends_command not in command_names:
            problems.append(f"{actor.name} @{actor.tick} sends unknown command {actor.sends_command}")

    if problems:
        return CheckResult.warning("Actors", f"{len(problems)} unknown actor references", problems)
    return CheckResult.ok("Actors", "All actor references exist")


def _check_specifications(model: FlowModel) -> CheckResult:
    """Specifications without a matching slice are dropped by the builder."""
    keys = {(e.type, e.name) for e in model.state_views + model.commands}
    unmatched = [
        f"{spec.type}:{spec.name}"
        for spec in model.specifications
        if (spec.type, spec.name) not in keys
    ]

    if unmatched:
        return CheckResult.warning(
            "Specifications",
            f"{len(unmatched)} specifications match no slice and will be ignored",
            unmatched,
        )
    return CheckResult.ok("Specifications", f"{len(model.specifications)} specifications matched")
