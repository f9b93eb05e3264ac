"""CLI command for searching the professional content index."""

import asyncio
import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from divetutor.errors import IndexBuildError
from divetutor.services import create_services

console = Console()
app = typer.Typer()


@app.command()
def search(
    query: Annotated[
        str,
        typer.Argument(help="Natural language search query"),
    ],
    discipline: Annotated[
        str | None,
        typer.Option("--discipline", "-d", help="Only return content for this discipline label"),
    ] = None,
    limit: Annotated[
        int,
        typer.Option("--limit", "-k", help="Maximum number of results"),
    ] = 5,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging"),
    ] = False,
):
    """Search the professional diving content by semantic similarity."""
    logging.basicConfig(level=logging.INFO if verbose else logging.WARNING)

    services = create_services(llm=None)

    async def _run():
        await services.build_index()
        return await services.index.query_with_scores(query, discipline, limit)

    try:
        with console.status("[bold green]Building index and searching..."):
            results = asyncio.run(_run())
    except IndexBuildError as e:
        console.print(f"[bold red]Index build failed:[/bold red] {e}")
        raise typer.Exit(1)

    if not results:
        console.print("[yellow]No matching content.[/yellow]")
        return

    table = Table(title=f"Results for: {query}")
    table.add_column("Score", justify="right")
    table.add_column("Discipline")
    table.add_column("Source")
    table.add_column("Excerpt")
    for chunk, score in results:
        table.add_row(
            f"{score:.3f}",
            chunk.metadata.discipline,
            f"{chunk.passage_title} #{chunk.chunk_index}",
            chunk.text[:120].replace("\n", " "),
        )
    console.print(table)
