"""
Slice aggregation.

Groups state view and command occurrences into slices keyed by
(type, name), keeping every occurrence with its own tick and payload
and resolving cross-references to events on the timeline.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from ..model.models import Attachment, Command, CommandKey, Event, StateView, TimelineElement
from .slices import COMMAND, STATE, CommandOccurrence, EventRef, Slice, StateOccurrence

logger = logging.getLogger(__name__)


def by_tick(elements: Iterable[TimelineElement]) -> List[TimelineElement]:
    """Sort by tick; elements sharing a tick keep their timeline order."""
    return sorted(elements, key=lambda e: e.tick)


def timeline_events(timeline: Sequence[TimelineElement]) -> List[Event]:
    """Get every event on the timeline in tick order."""
    return by_tick(e for e in timeline if isinstance(e, Event))


def index_produced_events(events: Sequence[Event]) -> Dict[CommandKey, List[Event]]:
    """Map each command occurrence key to the events naming it in ``producedBy``."""
    produced: Dict[CommandKey, List[Event]] = {}
    for event in events:
        key = event.produced_by_key
        if key is not None:
            produced.setdefault(key, []).append(event)
    return produced


def resolve_event_refs(names: Iterable[str], events: Sequence[Event]) -> Tuple[EventRef, ...]:
    """
    Resolve event names to every tick at which they occur.

    A name with no matching event yields a ref with no ticks.
    """
    refs = []
    for name in names:
        matches = [e for e in events if e.name == name]
        system = next((e.system for e in matches if e.system is not None), None)
        ticks = tuple(sorted(e.tick for e in matches))
        if not ticks:
            logger.debug("Dangling event reference: %s", name)
        refs.append(EventRef(name=name, ticks=ticks, system=system))
    return tuple(refs)


@dataclass
class _SliceAccumulator:
    """Working state for one slice during the timeline scan."""

    name: str
    type: str
    ticks: List[int] = field(default_factory=list)
    example: Optional[Any] = None
    attachments: List[Attachment] = field(default_factory=list)
    state_occurrences: List[StateOccurrence] = field(default_factory=list)
    command_occurrences: List[CommandOccurrence] = field(default_factory=list)
    # dict keys as an insertion-ordered set of referenced event names
    referenced: Dict[str, None] = field(default_factory=dict)

    def add_state(self, state: StateView) -> None:
        self._add_common(state)
        self.state_occurrences.append(StateOccurrence(tick=state.tick, state=state))
        for name in state.sourced_from:
            self.referenced.setdefault(name, None)

    def add_command(self, command: Command, produced_events: Sequence[Event]) -> None:
        self._add_common(command)
        self.command_occurrences.append(
            CommandOccurrence(tick=command.tick, command=command, produced_events=tuple(produced_events))
        )
        for event in produced_events:
            self.referenced.setdefault(event.name, None)

    def _add_common(self, element: Any) -> None:
        self.ticks.append(element.tick)
        # first non-null payload by ascending tick wins
        if self.example is None and element.example is not None:
            self.example = element.example
        self.attachments.extend(element.attachments)

    def finalize(self, events: Sequence[Event]) -> Slice:
        refs = resolve_event_refs(self.referenced, events)
        return Slice(
            name=self.name,
            type=self.type,
            ticks=tuple(self.ticks),
            example=self.example,
            attachments=tuple(self.attachments),
            sourced_from=refs if self.type == STATE else (),
            state_occurrences=tuple(self.state_occurrences),
            produces=refs if self.type == COMMAND else (),
            command_occurrences=tuple(self.command_occurrences),
        )


def aggregate_slices(timeline: Sequence[TimelineElement]) -> List[Slice]:
    """
    Group state views and commands into slices.

    Slices come back in first-seen order of their (type, name) key while
    scanning the timeline by ascending tick. Events and actors never
    become slices. A command occurrence only picks up events whose
    ``producedBy`` names that exact occurrence.

    Args:
        timeline: Timeline elements in any order

    Returns:
        Slices without scenarios
    """
    events = timeline_events(timeline)
    produced = index_produced_events(events)

    accumulators: Dict[Tuple[str, str], _SliceAccumulator] = {}
    for element in by_tick(e for e in timeline if isinstance(e, (StateView, Command))):
        key = (element.type, element.name)
        acc = accumulators.get(key)
        if acc is None:
            acc = accumulators[key] = _SliceAccumulator(name=element.name, type=element.type)

        if isinstance(element, StateView):
            acc.add_state(element)
        elif isinstance(element, Command):
            acc.add_command(element, produced.get(element.key, []))
        else:
            raise TypeError(f"Unexpected timeline element: {element!r}")

    return [acc.finalize(events) for acc in accumulators.values()]
