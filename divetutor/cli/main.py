"""DiveTutor CLI entry point."""

import typer

from divetutor.cli.ask import ask
from divetutor.cli.search import search
from divetutor.cli.serve import serve
from divetutor.cli.tutors import tutors

app = typer.Typer(
    name="divetutor",
    help="Commercial diving AI tutors - ask discipline experts, with an offline fallback when no model is available.",
)

app.command(name="ask")(ask)
app.command(name="tutors")(tutors)
app.command(name="search")(search)
app.command(name="serve")(serve)


if __name__ == "__main__":
    app()
