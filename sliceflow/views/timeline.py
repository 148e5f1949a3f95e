"""
Timeline view.

Lists every element in tick order down a vertical line: events to the
left of it, state views and commands on it, actors to the right.
"""

import json
from typing import List

from rich.console import Console
from rich.markup import escape
from rich.rule import Rule

from ..model import Actor, Event, FlowModel, StateView
from ..model.models import TimelineElement
from .styles import STYLES, render_header, styled, symbol

LINE = "│"
LINE_END = "└"
MARGIN = "    "
TICK_SPACING = 10


def _prefix(element: TimelineElement, line: str) -> str:
    tick = f"@{element.tick}".rjust(5)
    mark = symbol(element.type)
    if element.type == "event":
        return f"{MARGIN}{mark}  [dim]{line}[/dim]     {tick}  "
    if element.type == "actor":
        return f"{MARGIN}   [dim]{line}[/dim]  {mark}  {tick}  "
    return f"{MARGIN}   {mark}     {tick}  "


def _detail_lines(element: TimelineElement) -> List[str]:
    lines = []
    if isinstance(element, Event):
        if element.produced_by:
            lines.append(f"[dim]producedBy:[/dim] {styled('command', element.produced_by)}")
        if element.external_source:
            lines.append(f"[dim]externalSource:[/dim] [dim]{escape(element.external_source)}[/dim]")
    elif isinstance(element, StateView):
        if element.sourced_from:
            names = "[dim], [/dim]".join(styled("event", name) for name in element.sourced_from)
            lines.append(f"[dim]sourcedFrom:[/dim] {names}")
    elif isinstance(element, Actor):
        lines.append(f"[dim]readsView:[/dim] {styled('state', element.reads_view)}")
        lines.append(f"[dim]sendsCommand:[/dim] {styled('command', element.sends_command)}")
    return lines


def _example_lines(element: TimelineElement) -> List[str]:
    example = getattr(element, "example", None)
    if example is None:
        return []
    text = json.dumps(example, indent=2, ensure_ascii=False)
    return [f"[grey50]{escape(line)}[/grey50]" for line in text.splitlines()]


def render_timeline(model: FlowModel, console: Console, show_examples: bool = False) -> None:
    """Render the timeline view followed by element counts."""
    render_header(model, console, "Timeline View")

    ordered = sorted(model.timeline, key=lambda e: e.tick)
    for index, element in enumerate(ordered):
        is_last = index == len(ordered) - 1
        line = LINE_END if is_last else LINE
        detail_prefix = f"{MARGIN}   [dim]{line}[/dim]            "

        console.print(_prefix(element, line) + styled(element.type, element.name, bold=True))
        details = _detail_lines(element)
        if show_examples:
            details.extend(_example_lines(element))
        for detail in details:
            console.print(detail_prefix + detail)

        if not is_last:
            gap = ordered[index + 1].tick - element.tick
            for _ in range(1 + max(0, gap // TICK_SPACING - 1)):
                console.print(f"{MARGIN}   [dim]{LINE}[/dim]")

    console.print()
    render_counts(model, console)


def render_counts(model: FlowModel, console: Console) -> None:
    """One line with the number of elements of each kind."""
    counts = [
        (len(model.events), "event", "Events"),
        (len(model.state_views), "state", "Views"),
        (len(model.commands), "command", "Commands"),
        (len(model.actors), "actor", "Actors"),
    ]
    console.print(Rule("[dim]Summary[/dim]", style="dim"))
    console.print()
    console.print("  " + "   ".join(
        f"[bold {STYLES[kind]}]{count}[/bold {STYLES[kind]}] [dim]{label}[/dim]"
        for count, kind, label in counts
    ))
    console.print()
