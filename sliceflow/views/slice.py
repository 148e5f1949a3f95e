"""
Slice view.

Renders one panel per slice with its example payload, cross-references,
actors and scenarios, followed by the model's external events.
"""

import json
from typing import Any, List

from rich.console import Console, Group
from rich.json import JSON
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

from ..builder import Slice, SliceViewModel, TimelineScenario
from ..builder.slices import STATE
from ..model import CommandScenario, Event, FlowModel, StateViewScenario
from ..model.models import StepType
from .styles import STYLES, render_header, styled, symbol

MAX_DATA_WIDTH = 60


def _data(value: Any) -> str:
    """Compact one-line JSON, truncated for scenario lines."""
    text = json.dumps(value, ensure_ascii=False)
    if len(text) > MAX_DATA_WIDTH:
        text = text[:MAX_DATA_WIDTH - 3] + "..."
    return f"[grey50]{escape(text)}[/grey50]"


def _ref_lines(label: str, refs) -> List[str]:
    lines = [f"[dim]{label}:[/dim]"]
    for ref in refs:
        if ref.dangling:
            chip = "[dim red](never happens)[/dim red]"
        else:
            chip = "[dim]" + ", ".join(f"@{t}" for t in ref.ticks) + "[/dim]"
        lines.append(f"  {symbol('event')} {styled('event', ref.name)} {chip}")
    return lines


def _state_scenario_lines(scenario: StateViewScenario) -> List[str]:
    lines = []
    if scenario.initial_state is not None:
        lines.append(f"      [dim]Initial:[/dim] {_data(scenario.initial_state)}")
    for step in scenario.steps:
        if step.given is not None:
            given = styled("event", step.given.event)
            if step.given.data is not None:
                given += f" {_data(step.given.data)}"
        else:
            given = "[dim italic](no events)[/dim italic]"
        lines.append(f"      [dim]Given:[/dim] {given}")
        lines.append(f"      [dim]Then:[/dim] {_data(step.then)}")
    return lines


def _timeline_rows(scenario: TimelineScenario) -> List[str]:
    lines = []
    for row in scenario.rows:
        if row.command is None:
            names = ", ".join(styled("event", e.event) for e in row.events)
            lines.append(f"      [dim]Given:[/dim] {names}")
            continue
        data = f" {_data(row.command.data)}" if row.command.data is not None else ""
        lines.append(f"      [dim]When:[/dim] {styled('command', row.command.name)}{data}")
        if row.produced_events:
            produced = ", ".join(styled("event", e.event) for e in row.produced_events)
            lines.append(f"      [dim]Then:[/dim] → {produced}")
        else:
            lines.append("      [dim]Then:[/dim] [dim italic](no events)[/dim italic]")
    return lines


def _command_scenario_lines(scenario: CommandScenario) -> List[str]:
    lines = []
    for step in scenario.steps:
        if step.type == StepType.EVENTS_ONLY:
            names = ", ".join(styled("event", e.event) for e in step.events)
            lines.append(f"      [dim]Given:[/dim] {names}")
        elif step.fails:
            lines.append(f"      [dim]Then:[/dim] [red]✗ {escape(step.fails)}[/red]")
        else:
            produced = ", ".join(styled("event", e.event) for e in step.produces)
            lines.append(f"      [dim]When/Then:[/dim] → {produced or '[dim italic](no events)[/dim italic]'}")
    return lines


def _scenario_lines(slice_: Slice) -> List[str]:
    if not slice_.scenarios:
        return []

    lines = [f"[bold yellow]Scenarios[/bold yellow] [dim]({len(slice_.scenarios)})[/dim]"]
    synthesized = slice_.timeline_scenario
    for scenario in slice_.scenarios:
        origin = "timeline" if scenario is synthesized else "spec"
        lines.append(f"  {symbol(slice_.type)} [yellow]{escape(scenario.name)}[/yellow] [dim]({origin})[/dim]")
        if isinstance(scenario, TimelineScenario):
            lines.extend(_timeline_rows(scenario))
        elif isinstance(scenario, StateViewScenario):
            lines.extend(_state_scenario_lines(scenario))
        else:
            lines.extend(_command_scenario_lines(scenario))
    return lines


def build_slice_panel(slice_: Slice, view_model: SliceViewModel) -> Panel:
    """Build the rich panel for one slice."""
    parts: List[Any] = []

    if slice_.example is not None:
        parts.append(JSON.from_data(slice_.example))

    details: List[str] = []
    if slice_.type == STATE:
        if slice_.sourced_from:
            details.extend(_ref_lines("sourcedFrom", slice_.sourced_from))
        readers = view_model.reading_actors(slice_.name)
        if readers:
            details.append("[dim]readBy:[/dim]")
            for actor in readers:
                details.append(
                    f"  {symbol('actor')} {styled('actor', actor.name)} [dim]@{actor.tick}[/dim]"
                    f" → {styled('command', actor.sends_command)}"
                )
    else:
        triggers = view_model.triggering_actors(slice_.name)
        if triggers:
            details.append("[dim]triggeredBy:[/dim]")
            for actor in triggers:
                details.append(
                    f"  {symbol('actor')} {styled('actor', actor.name)} [dim]@{actor.tick}[/dim]"
                    f" ← {styled('state', actor.reads_view)}"
                )
        if slice_.produces:
            details.extend(_ref_lines("produces", slice_.produces))

    if slice_.attachments:
        details.append(f"[dim]attachments:[/dim] {len(slice_.attachments)}")

    if details:
        parts.append(Text.from_markup("\n".join(details)))

    scenario_lines = _scenario_lines(slice_)
    if scenario_lines:
        parts.append(Text.from_markup("\n".join(scenario_lines)))

    if not parts:
        parts.append(Text("(no details)", style="dim"))

    ticks = ", ".join(f"@{t}" for t in slice_.ticks)
    return Panel(
        Group(*parts),
        title=f"{symbol(slice_.type)} {styled(slice_.type, slice_.name, bold=True)}",
        title_align="left",
        subtitle=f"[dim]{ticks}[/dim]",
        subtitle_align="right",
        border_style=STYLES[slice_.type],
    )


def render_slices(model: FlowModel, view_model: SliceViewModel, console: Console) -> None:
    """Render the slice view: one panel per slice, then external events."""
    render_header(model, console, "Slice View")

    for index, slice_ in enumerate(view_model.slices):
        console.print(build_slice_panel(slice_, view_model))
        is_last = index == len(view_model.slices) - 1
        console.print("        [dim]↓[/dim]" if is_last else "        [dim]│[/dim]")

    external: List[Event] = sorted(
        (e for e in model.events if e.external_source), key=lambda e: e.tick
    )
    if external:
        console.print("[dim]" + "─" * 45 + "[/dim]")
        console.print(f"[bold {STYLES['event']}]● EXTERNAL EVENTS[/bold {STYLES['event']}]")
        for event in external:
            console.print(f"  {styled('event', event.name)} [dim]@{event.tick}[/dim]")
            console.print(f"    [dim]source:[/dim] {escape(event.external_source)}")
