"""CLI command running the tutor HTTP API."""

import logging
from typing import Annotated

import typer
import uvicorn

from config.settings import get_settings

app = typer.Typer()


@app.command()
def serve(
    host: Annotated[
        str | None,
        typer.Option("--host", help="Bind address (default from DIVETUTOR_HOST)"),
    ] = None,
    port: Annotated[
        int | None,
        typer.Option("--port", help="Bind port (default from DIVETUTOR_PORT)"),
    ] = None,
):
    """Serve the tutor API with uvicorn."""
    settings = get_settings()
    logging.basicConfig(level=settings.divetutor_log_level.upper())

    from divetutor.api.app import create_app

    uvicorn.run(
        create_app(),
        host=host or settings.divetutor_host,
        port=port or settings.divetutor_port,
        log_level=settings.divetutor_log_level.lower(),
    )
