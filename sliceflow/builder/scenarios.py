"""
Timeline scenario synthesis.

Replays a slice's occurrences against the full timeline to produce a
walkthrough scenario without any author input: Given/Then steps for
state views, command and events-only rows for commands.
"""

from typing import Optional, Sequence

from ..model.models import (
    Event,
    EventReference,
    ScenarioStep,
    StateViewScenario,
    StepType,
)
from .slices import (
    TIMELINE_SCENARIO_NAME,
    CommandOccurrence,
    CommandReference,
    StateOccurrence,
    TimelineScenario,
    TimelineScenarioRow,
)


def _event_ref(event: Event) -> EventReference:
    return EventReference(event=event.name, data=event.example)


def synthesize_state_scenario(
    occurrences: Sequence[StateOccurrence],
    events: Sequence[Event],
) -> Optional[StateViewScenario]:
    """
    Build the Given/Then timeline scenario for a state view slice.

    For each occurrence the Given is the earliest event named in that
    occurrence's ``sourcedFrom`` lying strictly between the previous
    occurrence's tick and its own. A first occurrence with no such event
    becomes the scenario's initial state instead of a step.

    Args:
        occurrences: The slice's state occurrences
        events: Every timeline event, in tick order

    Returns:
        The scenario, or None for a slice without occurrences
    """
    if not occurrences:
        return None

    initial_state = None
    steps = []
    prev_tick = 0

    for index, occ in enumerate(sorted(occurrences, key=lambda o: o.tick)):
        sources = set(occ.state.sourced_from)
        given = next(
            (e for e in events if e.name in sources and prev_tick < e.tick < occ.tick),
            None,
        )
        if given is not None:
            steps.append(ScenarioStep(given=_event_ref(given), then=occ.state.example))
        elif index == 0:
            initial_state = occ.state.example
        else:
            steps.append(ScenarioStep(then=occ.state.example))
        prev_tick = occ.tick

    return StateViewScenario(name=TIMELINE_SCENARIO_NAME, initial_state=initial_state, steps=steps)


def synthesize_command_scenario(
    occurrences: Sequence[CommandOccurrence],
    events: Sequence[Event],
) -> Optional[TimelineScenario]:
    """
    Build the row-based timeline scenario for a command slice.

    Every event between the previous command row and the next occurrence
    gets its own events-only row; each occurrence then gets a command row
    with the events it produced. The cursor advances past the produced
    events so they are not repeated as events-only rows.

    Args:
        occurrences: The slice's command occurrences
        events: Every timeline event, in tick order

    Returns:
        The scenario, or None for a slice without occurrences
    """
    if not occurrences:
        return None

    rows = []
    last_tick = 0

    for occ in sorted(occurrences, key=lambda o: o.tick):
        for event in events:
            if last_tick < event.tick < occ.tick:
                rows.append(TimelineScenarioRow(type=StepType.EVENTS_ONLY, events=[_event_ref(event)]))

        rows.append(TimelineScenarioRow(
            type=StepType.COMMAND,
            command=CommandReference(name=occ.command.name, data=occ.command.example),
            produced_events=[_event_ref(e) for e in occ.produced_events],
        ))
        last_tick = max([occ.tick] + [e.tick for e in occ.produced_events])

    return TimelineScenario(name=TIMELINE_SCENARIO_NAME, rows=rows)
