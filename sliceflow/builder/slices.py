"""
Slice view-model types.

A slice is the deduplicated aggregate of every occurrence of one named
state view or command. Everything here is derived from a flow model by
the slice builder and is never mutated after construction.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import ConfigDict, Field

from ..model.models import (
    Actor,
    Attachment,
    Command,
    CommandScenario,
    Event,
    EventReference,
    FlowBaseModel,
    StateView,
    StateViewScenario,
    StepType,
)

TIMELINE_SCENARIO_NAME = "Timeline Scenario"

STATE = "state"
COMMAND = "command"


# ============================================================
# Synthesized Scenarios
# ============================================================

class CommandReference(FlowBaseModel):
    """The command sent in a timeline scenario row."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str
    data: Optional[Any] = None


class TimelineScenarioRow(FlowBaseModel):
    """One row of a command slice's timeline scenario."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    type: StepType
    events: List[EventReference] = Field(default_factory=list)
    command: Optional[CommandReference] = None
    produced_events: List[EventReference] = Field(default_factory=list, alias="producedEvents")
    fails: Optional[str] = None


class TimelineScenario(FlowBaseModel):
    """Walkthrough of a command slice replayed from the timeline."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str = TIMELINE_SCENARIO_NAME
    rows: List[TimelineScenarioRow] = Field(default_factory=list)


Scenario = Union[TimelineScenario, StateViewScenario, CommandScenario]


# ============================================================
# Slices
# ============================================================

@dataclass(frozen=True)
class EventRef:
    """A named event with every tick at which it occurs on the timeline."""

    name: str
    ticks: Tuple[int, ...] = ()
    system: Optional[str] = None

    @property
    def dangling(self) -> bool:
        """True when no event of this name exists anywhere on the timeline."""
        return not self.ticks

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"name": self.name, "ticks": list(self.ticks)}
        if self.system is not None:
            data["system"] = self.system
        return data


@dataclass(frozen=True)
class StateOccurrence:
    """One appearance of a state view at a specific tick."""

    tick: int
    state: StateView

    def to_dict(self) -> Dict[str, Any]:
        return {"tick": self.tick, "state": self.state.to_dict()}


@dataclass(frozen=True)
class CommandOccurrence:
    """One appearance of a command together with the events it produced."""

    tick: int
    command: Command
    produced_events: Tuple[Event, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tick": self.tick,
            "command": self.command.to_dict(),
            "producedEvents": [e.to_dict() for e in self.produced_events],
        }


@dataclass(frozen=True)
class SliceExample:
    """Example payload of one occurrence."""

    tick: int
    data: Any


@dataclass(frozen=True)
class Slice:
    """
    Aggregate of every occurrence of one state view or command.

    ``scenarios`` holds the synthesized timeline scenario first (when the
    slice has occurrences) followed by ``spec_scenario_count`` declared ones.
    """

    name: str
    type: str
    ticks: Tuple[int, ...] = ()
    example: Optional[Any] = None
    attachments: Tuple[Attachment, ...] = ()
    sourced_from: Tuple[EventRef, ...] = ()
    state_occurrences: Tuple[StateOccurrence, ...] = ()
    produces: Tuple[EventRef, ...] = ()
    command_occurrences: Tuple[CommandOccurrence, ...] = ()
    scenarios: Tuple[Scenario, ...] = ()
    spec_scenario_count: int = 0

    @property
    def key(self) -> str:
        """Unique slice key, ``type:name``."""
        return f"{self.type}:{self.name}"

    @property
    def occurrence_count(self) -> int:
        return len(self.state_occurrences) + len(self.command_occurrences)

    @property
    def timeline_scenario(self) -> Optional[Scenario]:
        """The synthesized scenario, if any."""
        if len(self.scenarios) > self.spec_scenario_count:
            return self.scenarios[0]
        return None

    @property
    def spec_scenarios(self) -> Tuple[Scenario, ...]:
        """The author-declared scenarios, in declared order."""
        return self.scenarios[len(self.scenarios) - self.spec_scenario_count:]

    def examples(self) -> List[SliceExample]:
        """Get every occurrence's example payload with its tick."""
        if self.type == STATE:
            pairs = [(occ.tick, occ.state.example) for occ in self.state_occurrences]
        else:
            pairs = [(occ.tick, occ.command.example) for occ in self.command_occurrences]
        return [SliceExample(tick=tick, data=data) for tick, data in pairs if data is not None]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data: Dict[str, Any] = {
            "name": self.name,
            "type": self.type,
            "ticks": list(self.ticks),
        }
        if self.example is not None:
            data["example"] = self.example
        data.update({
            "attachments": [a.to_dict() for a in self.attachments],
            "sourcedFrom": [ref.to_dict() for ref in self.sourced_from],
            "stateOccurrences": [occ.to_dict() for occ in self.state_occurrences],
            "produces": [ref.to_dict() for ref in self.produces],
            "commandOccurrences": [occ.to_dict() for occ in self.command_occurrences],
            "scenarios": [s.to_dict() for s in self.scenarios],
            "specScenarioCount": self.spec_scenario_count,
        })
        return data


@dataclass(frozen=True)
class GroupedActor:
    """An actor name with every tick it appears at."""

    name: str
    ticks: Tuple[int, ...] = ()
    role: Optional[str] = None


@dataclass(frozen=True)
class SliceViewModel:
    """Slices in first-seen order plus the timeline's actors, passed through."""

    slices: Tuple[Slice, ...] = ()
    actors: Tuple[Actor, ...] = ()

    def get_slice(self, slice_type: str, name: str) -> Optional[Slice]:
        """Get a slice by type and name."""
        for s in self.slices:
            if s.type == slice_type and s.name == name:
                return s
        return None

    def reading_actors(self, state_name: str) -> List[Actor]:
        """Get actors that read a specific state view."""
        return [a for a in self.actors if a.reads_view == state_name]

    def triggering_actors(self, command_name: str) -> List[Actor]:
        """Get actors that send a specific command."""
        return [a for a in self.actors if a.sends_command == command_name]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "slices": [s.to_dict() for s in self.slices],
            "actors": [a.to_dict() for a in self.actors],
        }


def group_actors_by_name(actors: List[Actor]) -> List[GroupedActor]:
    """Group actors by name, collecting their ticks; the first role seen wins."""
    grouped: Dict[str, Dict[str, Any]] = {}
    for actor in actors:
        entry = grouped.setdefault(actor.name, {"ticks": [], "role": actor.role})
        entry["ticks"].append(actor.tick)
    return [
        GroupedActor(name=name, ticks=tuple(entry["ticks"]), role=entry["role"])
        for name, entry in grouped.items()
    ]
