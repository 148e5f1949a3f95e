"""Colors and symbols shared by the terminal views."""

from rich.console import Console
from rich.markup import escape
from rich.rule import Rule

from ..model import FlowModel

STYLES = {
    "event": "#FF8C00",
    "state": "green",
    "command": "blue",
    "actor": "white",
}

SYMBOLS = {
    "event": "●",
    "state": "◆",
    "command": "▶",
    "actor": "○",
}


def styled(element_type: str, name: str, bold: bool = False) -> str:
    """Format an element name with its type's color."""
    style = STYLES.get(element_type, "default")
    if bold:
        style = f"bold {style}"
    return f"[{style}]{escape(name)}[/{style}]"


def symbol(element_type: str) -> str:
    return styled(element_type, SYMBOLS.get(element_type, "•"))


def render_header(model: FlowModel, console: Console, view_name: str) -> None:
    """Print the model name, version and view as a rule."""
    parts = [f"[cyan]{escape(model.name)}[/cyan]"]
    if model.version:
        parts.append(f"v{model.version}")
    parts.append(view_name)

    console.print()
    console.print(Rule(" • ".join(parts), style="dim"))
    if model.description:
        console.print(f"  [dim italic]{escape(model.description)}[/dim italic]")
    console.print()
