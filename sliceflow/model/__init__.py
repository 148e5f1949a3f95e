"""Flow model documents: schema, loading and defaults."""

from .models import (
    FlowModel,
    TimelineElement,
    Event,
    StateView,
    Actor,
    Command,
    CommandKey,
    Attachment,
    EventReference,
    ScenarioStep,
    StateViewScenario,
    CommandScenario,
    CommandScenarioStep,
    Specification,
    StateSpecification,
    CommandSpecification,
)
from .loader import ModelLoader, ModelError

__all__ = [
    "FlowModel",
    "TimelineElement",
    "Event",
    "StateView",
    "Actor",
    "Command",
    "CommandKey",
    "Attachment",
    "EventReference",
    "ScenarioStep",
    "StateViewScenario",
    "CommandScenario",
    "CommandScenarioStep",
    "Specification",
    "StateSpecification",
    "CommandSpecification",
    "ModelLoader",
    "ModelError",
]
