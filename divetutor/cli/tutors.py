"""CLI command listing the registered tutors."""

import typer
from rich.console import Console
from rich.table import Table

from divetutor.tutors.registry import PersonaRegistry

console = Console()
app = typer.Typer()


@app.command()
def tutors():
    """List the available discipline tutors."""
    table = Table(title="DiveTutor tutors")
    table.add_column("Key", style="bold")
    table.add_column("Name")
    table.add_column("Discipline")
    table.add_column("Specialty")

    registry = PersonaRegistry()
    for key, persona in registry.items():
        table.add_row(key, persona.display_name, persona.discipline, persona.specialty_label)

    console.print(table)
