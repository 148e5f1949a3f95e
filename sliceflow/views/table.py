"""Tabular overview of slices."""

from typing import Dict, List, Set

from rich.console import Console
from rich.markup import escape
from rich.rule import Rule
from rich.table import Table
from rich.tree import Tree

from ..builder import SliceViewModel, group_actors_by_name
from ..builder.slices import COMMAND, STATE
from ..model import FlowModel
from .styles import render_header, styled, symbol


def build_summary_table(view_model: SliceViewModel) -> Table:
    """One row per slice: type, name, ticks, references and scenario counts."""
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("", width=2)
    table.add_column("Slice")
    table.add_column("Ticks", style="dim")
    table.add_column("Events")
    table.add_column("Scenarios", justify="right")

    for slice_ in view_model.slices:
        refs = slice_.sourced_from if slice_.type == STATE else slice_.produces
        events = ", ".join(
            styled("event", ref.name) if not ref.dangling else f"[dim red]{escape(ref.name)}?[/dim red]"
            for ref in refs
        )
        timeline = 1 if slice_.timeline_scenario is not None else 0
        table.add_row(
            symbol(slice_.type),
            styled(slice_.type, slice_.name),
            ", ".join(str(t) for t in slice_.ticks),
            events or "[dim]-[/dim]",
            f"{timeline} + {slice_.spec_scenario_count}",
        )
    return table

def build_data_flow_tree(model: FlowModel, view_model: SliceViewModel) -> Tree:
    """
    Tree of how information moves: views with their source events and the
    actors reading them, commands with the events they produce, then
    external events.
    """
    tree = Tree("[cyan]Information Flow[/cyan]")

    produced = {
        s.name: sorted({ref.name for ref in s.produces})
        for s in view_model.slices
        if s.type == COMMAND
    }
    actor_commands: Dict[str, Set[str]] = {}
    actor_views: Dict[str, Set[str]] = {}
    for actor in view_model.actors:
        actor_views.setdefault(actor.name, set()).add(actor.reads_view)
        actor_commands.setdefault(actor.name, set()).add(actor.sends_command)

    states = sorted((s for s in view_model.slices if s.type == STATE), key=lambda s: s.name)
    for slice_ in states:
        node = tree.add(f"{symbol(STATE)} {styled(STATE, slice_.name)}")
        sources = sorted({ref.name for ref in slice_.sourced_from})
        if sources:
            branch = node.add("[dim]← sourced from[/dim]")
            for name in sources:
                branch.add(f"{symbol('event')} {styled('event', name)}")
        for actor_name in sorted(a for a, views in actor_views.items() if slice_.name in views):
            actor_node = node.add(f"{symbol('actor')} {styled('actor', actor_name)}")
            for command_name in sorted(actor_commands[actor_name]):
                _add_command(actor_node, command_name, produced.get(command_name, []))

    for command_name in sorted(produced):
        _add_command(tree, command_name, produced[command_name])

    external = [e for e in model.events if e.external_source]
    if external:
        branch = tree.add("[yellow]⚡ External Events[/yellow]")
        for event in external:
            branch.add(
                f"{symbol('event')} {styled('event', event.name)} "
                f"[dim]from {escape(event.external_source)}[/dim]"
            )
    return tree


def _add_command(parent: Tree, name: str, events: List[str]) -> None:
    node = parent.add(f"{symbol(COMMAND)} {styled(COMMAND, name)}")
    if events:
        branch = node.add("[dim]→ produces[/dim]")
        for event_name in events:
            branch.add(f"{symbol('event')} {styled('event', event_name)}")



def render_summary(model: FlowModel, view_model: SliceViewModel, console: Console) -> None:
    """Render the slice table, the actors and the data flow tree."""
    render_header(model, console, "Table View")
    console.print(build_summary_table(view_model))

    grouped = group_actors_by_name(list(view_model.actors))
    if grouped:
        console.print()
        console.print("[bold]Actors[/bold]")
        for actor in grouped:
            role = f" [dim]({escape(actor.role)})[/dim]" if actor.role else ""
            ticks = ", ".join(f"@{t}" for t in actor.ticks)
            console.print(f"  {symbol('actor')} {styled('actor', actor.name)}{role} [dim]{ticks}[/dim]")

    console.print()
    console.print(Rule("[bold cyan]Data Flow[/bold cyan]", align="left", style="dim"))
    console.print(build_data_flow_tree(model, view_model))
