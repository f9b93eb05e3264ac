"""CLI command for asking a discipline tutor a question."""

import asyncio
import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from divetutor.errors import IndexBuildError, TutorNotFoundError
from divetutor.services import create_services

console = Console()
app = typer.Typer()

logger = logging.getLogger(__name__)


@app.command()
def ask(
    discipline: Annotated[
        str,
        typer.Argument(help="Tutor key or discipline label, e.g. 'ndt' or 'NDT'"),
    ],
    message: Annotated[
        str,
        typer.Argument(help="Your question for the tutor"),
    ],
    session_id: Annotated[
        str | None,
        typer.Option("--session-id", help="Optional session identifier to tag the chat"),
    ] = None,
    no_index: Annotated[
        bool,
        typer.Option("--no-index", help="Skip building the similarity index (no retrieved context)"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging"),
    ] = False,
):
    """Ask a commercial diving tutor a question."""
    if verbose:
        logging.basicConfig(level=logging.INFO)
    else:
        logging.basicConfig(level=logging.WARNING)

    services = create_services()

    async def _run():
        if not no_index:
            try:
                await services.build_index()
            except IndexBuildError as e:
                console.print(f"[yellow]Similarity index unavailable:[/yellow] {e}")
        return await services.dispatcher.chat(discipline, message, session_id)

    try:
        with console.status("[bold green]Thinking..."):
            result = asyncio.run(_run())
    except TutorNotFoundError as e:
        known = ", ".join(p.discipline for p in services.registry.list_all())
        console.print(f"[bold red]{e}[/bold red]\nAvailable disciplines: {known}")
        raise typer.Exit(1)

    mode, color = ("offline fallback", "yellow") if result.used_fallback else ("live", "green")

    header = Text()
    header.append(result.persona.display_name, style="bold")
    header.append(f"  {result.persona.discipline}", style="dim")
    header.append("  Mode: ", style="dim")
    header.append(mode, style=f"bold {color}")

    body = result.response_text
    if result.matched_chunks:
        sources = "\n".join(
            f"  [{i + 1}] {c.passage_title} (chunk {c.chunk_index})"
            for i, c in enumerate(result.matched_chunks)
        )
        body = f"{body}\n\nReference content:\n{sources}"

    console.print()
    console.print(Panel(Text(body), title=header, border_style=color, padding=(1, 2)))
