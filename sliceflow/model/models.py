"""
Pydantic models for flow model validation.

These models define the schema of a flow model document: the
chronological timeline of events, state views, actors and commands,
plus the author-declared specifications attached to slices.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, List, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator


class AttachmentType(str, Enum):
    """Kinds of material that can be attached to a state view or command."""
    IMAGE = "image"
    LINK = "link"
    NOTE = "note"
    FILE = "file"


class StepType(str, Enum):
    """Row kinds used by command scenarios."""
    EVENTS_ONLY = "events-only"
    COMMAND = "command"


class FlowBaseModel(BaseModel):
    """Base for all document models: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(populate_by_name=True)

    def to_dict(self) -> dict:
        """Dump using the document's own (camelCase) key spelling."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


@dataclass(frozen=True)
class CommandKey:
    """
    Identifies one command occurrence by name and tick.

    Authored documents spell it ``"{name}-{tick}"`` in ``producedBy``.
    """

    name: str
    tick: int

    @classmethod
    def parse(cls, value: str) -> Optional["CommandKey"]:
        """Parse ``"Name-42"``; ticks are non-negative, so the tick follows the last dash."""
        name, sep, tick = value.rpartition("-")
        if not sep or not name:
            return None
        try:
            return cls(name=name, tick=int(tick))
        except ValueError:
            return None

    def __str__(self) -> str:
        return f"{self.name}-{self.tick}"


class Attachment(FlowBaseModel):
    """Image, link, note or file attached to a slice."""

    type: AttachmentType = Field(..., description="Attachment kind")
    label: str = Field(..., description="Display label")
    path: Optional[str] = Field(None, description="Relative file path")
    url: Optional[str] = Field(None, description="External URL")
    content: Optional[str] = Field(None, description="Inline note content")


# ============================================================
# Timeline Elements
# ============================================================

class Event(FlowBaseModel):
    """Something that happened."""

    type: Literal["event"] = "event"
    name: str = Field(..., description="Event name")
    tick: int = Field(..., ge=0, description="Timeline position")
    produced_by: Optional[str] = Field(
        None, alias="producedBy", description="Producing command as '{name}-{tick}'"
    )
    external_source: Optional[str] = Field(
        None, alias="externalSource", description="External system the event comes from"
    )
    system: Optional[str] = Field(None, description="Owning system")
    example: Optional[Any] = Field(None, description="Example payload")

    @property
    def produced_by_key(self) -> Optional[CommandKey]:
        """The producing command occurrence, or None if absent or unparseable."""
        if not self.produced_by:
            return None
        return CommandKey.parse(self.produced_by)


class StateView(FlowBaseModel):
    """A read projection built from named events."""

    type: Literal["state"] = "state"
    name: str = Field(..., description="State view name")
    tick: int = Field(..., ge=0, description="Timeline position")
    sourced_from: List[str] = Field(
        default_factory=list, alias="sourcedFrom", description="Event names the view is built from"
    )
    example: Optional[Any] = Field(None, description="Example payload")
    attachments: List[Attachment] = Field(default_factory=list, description="Attachments")


class Actor(FlowBaseModel):
    """A participant reading a view and sending a command."""

    type: Literal["actor"] = "actor"
    name: str = Field(..., description="Actor name")
    tick: int = Field(..., ge=0, description="Timeline position")
    reads_view: str = Field(..., alias="readsView", description="State view the actor reads")
    sends_command: str = Field(..., alias="sendsCommand", description="Command the actor sends")
    wireframes: List[str] = Field(default_factory=list, description="Wireframe image paths")
    role: Optional[str] = Field(None, description="Actor role")


class Command(FlowBaseModel):
    """An intent to act."""

    type: Literal["command"] = "command"
    name: str = Field(..., description="Command name")
    tick: int = Field(..., ge=0, description="Timeline position")
    example: Optional[Any] = Field(None, description="Example payload")
    attachments: List[Attachment] = Field(default_factory=list, description="Attachments")

    @property
    def key(self) -> CommandKey:
        return CommandKey(name=self.name, tick=self.tick)


TimelineElement = Annotated[
    Union[Event, StateView, Actor, Command],
    Field(discriminator="type"),
]


# ============================================================
# Specifications
# ============================================================

class EventReference(FlowBaseModel):
    """An event name together with an example payload."""

    event: str = Field(..., description="Event name")
    data: Optional[Any] = Field(None, description="Example payload")


class ScenarioStep(FlowBaseModel):
    """A Given/Then step of a state view scenario."""

    given: Optional[EventReference] = Field(None, description="Event applied to the view")
    then: Optional[Any] = Field(None, description="Resulting view payload")


class StateViewScenario(FlowBaseModel):
    """Author-declared Given/Then scenario for a state view."""

    name: str = Field(..., description="Scenario name")
    initial_state: Optional[Any] = Field(None, alias="initialState", description="View before any step")
    steps: List[ScenarioStep] = Field(default_factory=list, description="Given/Then steps")


class CommandScenarioStep(FlowBaseModel):
    """One row of a command scenario."""

    type: StepType = Field(..., description="Row kind")
    events: List[EventReference] = Field(default_factory=list, description="Events for events-only rows")
    when: Optional[Any] = Field(None, description="Command payload")
    produces: List[EventReference] = Field(default_factory=list, description="Events the command produces")
    fails: Optional[str] = Field(None, description="Failure reason, if the command is rejected")


class CommandScenario(FlowBaseModel):
    """Author-declared Given/When/Then scenario for a command."""

    name: str = Field(..., description="Scenario name")
    steps: List[CommandScenarioStep] = Field(default_factory=list, description="Scenario rows")


class StateSpecification(FlowBaseModel):
    """Scenarios declared for a state view slice."""

    type: Literal["state"] = "state"
    name: str = Field(..., description="State view name")
    scenarios: List[StateViewScenario] = Field(default_factory=list)


class CommandSpecification(FlowBaseModel):
    """Scenarios declared for a command slice."""

    type: Literal["command"] = "command"
    name: str = Field(..., description="Command name")
    scenarios: List[CommandScenario] = Field(default_factory=list)


Specification = Annotated[
    Union[StateSpecification, CommandSpecification],
    Field(discriminator="type"),
]


# ============================================================
# Flow Model (Main)
# ============================================================

class FlowModel(FlowBaseModel):
    """
    Complete flow model document.

    The timeline is the only required section; specifications are
    optional and matched to slices by type and name.
    """

    schema_ref: Optional[str] = Field(None, alias="$schema", description="JSON schema reference")
    name: str = Field("Untitled", description="Model name")
    description: Optional[str] = Field(None, description="Model description")
    version: Optional[str] = Field(None, description="Model version")
    timeline: List[TimelineElement] = Field(..., description="Chronological elements")
    specifications: List[Specification] = Field(default_factory=list, description="Declared scenarios")

    @field_validator("specifications", mode="before")
    @classmethod
    def null_specifications(cls, v: Any) -> Any:
        """Treat an explicit null the same as an absent section."""
        return [] if v is None else v

    @property
    def events(self) -> List[Event]:
        return [e for e in self.timeline if isinstance(e, Event)]

    @property
    def state_views(self) -> List[StateView]:
        return [e for e in self.timeline if isinstance(e, StateView)]

    @property
    def actors(self) -> List[Actor]:
        return [e for e in self.timeline if isinstance(e, Actor)]

    @property
    def commands(self) -> List[Command]:
        return [e for e in self.timeline if isinstance(e, Command)]

