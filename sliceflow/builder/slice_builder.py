"""
Main slice builder that turns a flow model into its slice view model.

Combines aggregation, timeline scenario synthesis and declared
specifications into the slice collection every renderer consumes.
"""

import copy
import logging
from dataclasses import replace
from typing import List, Optional, Sequence

from ..model.models import Actor, FlowModel, Specification
from .aggregator import aggregate_slices, timeline_events
from .scenarios import synthesize_command_scenario, synthesize_state_scenario
from .slices import STATE, Scenario, Slice, SliceViewModel

logger = logging.getLogger(__name__)


def merge_specifications(slice_: Slice, specifications: Sequence[Specification]) -> Slice:
    """
    Append declared scenarios after the slice's synthesized one.

    Matching is by exact (type, name); every matching specification
    contributes its scenarios in declared order.
    """
    declared: List[Scenario] = [
        scenario
        for spec in specifications
        if spec.type == slice_.type and spec.name == slice_.name
        for scenario in spec.scenarios
    ]
    if not declared:
        return slice_
    return replace(
        slice_,
        scenarios=slice_.scenarios + tuple(declared),
        spec_scenario_count=slice_.spec_scenario_count + len(declared),
    )


class SliceBuilder:
    """
    Builds the slice view model for one flow model.

    The builder works on its own deep copy of the timeline, so the
    result shares no mutable state with the model it was built from.
    """

    def __init__(self, model: FlowModel):
        """
        Initialize the slice builder.

        Args:
            model: Validated flow model
        """
        self.model = model

    def build(self) -> SliceViewModel:
        """
        Build the slice view model.

        Returns:
            Slices in first-seen order and the timeline's actors
        """
        timeline = copy.deepcopy(self.model.timeline)
        specifications = copy.deepcopy(self.model.specifications)
        events = timeline_events(timeline)

        slices = []
        for slice_ in aggregate_slices(timeline):
            synthesized = self._synthesize(slice_, events)
            if synthesized is not None:
                slice_ = replace(slice_, scenarios=(synthesized,))
            slices.append(merge_specifications(slice_, specifications))

        self._log_unmatched_specifications(slices, specifications)
        actors = tuple(e for e in timeline if isinstance(e, Actor))

        logger.debug("Built %d slices from %d timeline elements", len(slices), len(timeline))
        return SliceViewModel(slices=tuple(slices), actors=actors)

    def _synthesize(self, slice_: Slice, events) -> Optional[Scenario]:
        if slice_.type == STATE:
            return synthesize_state_scenario(slice_.state_occurrences, events)
        return synthesize_command_scenario(slice_.command_occurrences, events)

    def _log_unmatched_specifications(
        self, slices: Sequence[Slice], specifications: Sequence[Specification]
    ) -> None:
        keys = {(s.type, s.name) for s in slices}
        for spec in specifications:
            if (spec.type, spec.name) not in keys:
                logger.debug("Dropping specification for unknown %s slice: %s", spec.type, spec.name)


def build_slice_view_model(model: FlowModel) -> SliceViewModel:
    """Build the slice view model from a validated flow model."""
    return SliceBuilder(model).build()
