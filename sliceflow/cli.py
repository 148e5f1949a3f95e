"""
Command-line interface for sliceflow.

Provides commands for creating flow models, validating them, viewing
their slices in the terminal and exporting slices.json.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm
from rich.table import Table

from . import __version__
from .builder import build_slice_view_model, write_slices
from .model import FlowModel, ModelError, ModelLoader
from .model.defaults import default_model_filename, get_default_model
from .preflight import PreflightChecker
from .views import render_slices, render_summary, render_timeline

console = Console()
logger = logging.getLogger(__name__)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _load_model(file: str) -> FlowModel:
    """Load a model or exit with the loader's message."""
    try:
        return ModelLoader(file).load().model
    except ModelError as e:
        console.print(f"[red]Error loading model: {escape(str(e))}[/red]")
        sys.exit(1)


# ============================================================
# Main CLI Group
# ============================================================

@click.group()
@click.version_option(version=__version__, prog_name="sliceflow")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, verbose: bool):
    """
    sliceflow - event-driven design models as slices

    Describe a design as a timeline of events, state views, actors and
    commands, then view it slice by slice or export slices.json.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    _setup_logging(verbose)


# ============================================================
# INIT Command
# ============================================================

@cli.command()
@click.option("--name", "-n", type=str, default="New Model", help="Model name")
@click.option(
    "--output",
    "-o",
    type=click.Path(),
    default=None,
    help="Output file (default: <name>.giraflow.json)",
)
def init(name: str, output: Optional[str]):
    """Create a starter model file."""
    output_path = Path(output) if output else Path(default_model_filename(name))

    if output_path.exists():
        if not Confirm.ask(f"[yellow]{output_path} already exists. Overwrite?[/yellow]", console=console):
            console.print("[red]Aborted.[/red]")
            return

    loader = ModelLoader.from_dict(get_default_model(name))
    written = loader.save(output_path)
    logger.debug("Starter model written to %s", written)

    console.print(Panel.fit(
        f"[green]Model created![/green]\n\n"
        f"Wrote [cyan]{escape(str(written))}[/cyan]\n\n"
        f"[bold]Next steps:[/bold]\n"
        f"1. Edit the timeline: events, state views, actors, commands\n"
        f"2. Run: [yellow]sliceflow view {escape(str(written))} --view slice[/yellow]",
        title="Initialization Complete",
    ))


# ============================================================
# VALIDATE Command
# ============================================================

@cli.command()
@click.argument("file", type=click.Path(exists=True))
@click.option("--details", "-d", "show_details", is_flag=True, help="Show details for passing checks too")
def validate(file: str, show_details: bool):
    """
    Validate a model file.

    Reports structural errors and references that point at nothing.
    Reference problems are warnings: slices can still be built.
    """
    console.print(f"\n[bold blue]Validating model: {escape(file)}[/bold blue]\n")

    checker = PreflightChecker(model_path=Path(file))
    result = checker.run_all()

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Check")
    table.add_column("Status")
    table.add_column("Details")

    for check in result.checks:
        if check.passed:
            status = "[green]PASS[/green]"
        elif check.severity.value == "error":
            status = "[red]FAIL[/red]"
        else:
            status = "[yellow]WARN[/yellow]"

        details = escape(check.message)
        if (show_details or not check.passed) and check.details:
            details += "\n" + "\n".join(f"  • {escape(d)}" for d in check.details)

        table.add_row(check.name, status, details)

    console.print(table)
    console.print()

    if result.passed:
        console.print(f"[green]{result.summary()}[/green]")
    else:
        console.print(f"[red]{result.summary()}[/red]")
        sys.exit(1)


# ============================================================
# VIEW Command
# ============================================================

@cli.command()
@click.argument("file", type=click.Path(exists=True))
@click.option(
    "--view",
    "view_mode",
    type=click.Choice(["slice", "table", "timeline"]),
    default="slice",
    help="Display mode",
)
@click.option("--output", "-o", type=click.Path(), default=None, help="Also save the output to a text file")
@click.option("--example", "-e", "show_examples", is_flag=True, help="Show example payloads in the timeline view")
def view(file: str, view_mode: str, output: Optional[str], show_examples: bool):
    """Visualize a model's slices in the terminal."""
    model = _load_model(file)
    view_model = build_slice_view_model(model)

    out = Console(record=True) if output else console
    if view_mode == "table":
        render_summary(model, view_model, out)
    elif view_mode == "timeline":
        render_timeline(model, out, show_examples=show_examples)
    else:
        render_slices(model, view_model, out)

    if output:
        out.save_text(output)
        console.print(f"\n[green bold]✓ Output saved to:[/green bold] {escape(output)}")


# ============================================================
# GENERATE-SLICES Command
# ============================================================

@cli.command("generate-slices")
@click.argument("file", type=click.Path(exists=True))
def generate_slices(file: str):
    """Generate slices.json next to a .giraflow.json model."""
    model = _load_model(file)
    view_model = build_slice_view_model(model)

    slices_path = write_slices(view_model, Path(file))
    logger.debug("Exported %d slices", len(view_model.slices))
    console.print(f"Slices written to [cyan]{escape(str(slices_path))}[/cyan]")


# ============================================================
# Entry Point
# ============================================================

if __name__ == "__main__":
    cli()
