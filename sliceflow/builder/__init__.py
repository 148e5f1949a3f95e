"""Slice view-model building components."""

from .slices import (
    EventRef,
    StateOccurrence,
    CommandOccurrence,
    Slice,
    SliceExample,
    SliceViewModel,
    GroupedActor,
    TimelineScenario,
    TimelineScenarioRow,
    CommandReference,
    TIMELINE_SCENARIO_NAME,
    group_actors_by_name,
)
from .aggregator import aggregate_slices, resolve_event_refs
from .scenarios import synthesize_state_scenario, synthesize_command_scenario
from .slice_builder import SliceBuilder, build_slice_view_model, merge_specifications
from .export import export_slices_to_json, slices_output_path, download_name, write_slices

__all__ = [
    "EventRef",
    "StateOccurrence",
    "CommandOccurrence",
    "Slice",
    "SliceExample",
    "SliceViewModel",
    "GroupedActor",
    "TimelineScenario",
    "TimelineScenarioRow",
    "CommandReference",
    "TIMELINE_SCENARIO_NAME",
    "group_actors_by_name",
    "aggregate_slices",
    "resolve_event_refs",
    "synthesize_state_scenario",
    "synthesize_command_scenario",
    "SliceBuilder",
    "build_slice_view_model",
    "merge_specifications",
    "export_slices_to_json",
    "slices_output_path",
    "download_name",
    "write_slices",
]
