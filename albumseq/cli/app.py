"""
albumseq command line interface

Example:
    albumseq init
    albumseq add-tracklist --name "My Album" "Song1:3:45" "Song2:4:10"
    albumseq add-medium --name Vinyl --sides 2 --max-duration 22:00
    albumseq add-constraint --kind adjacent --weight 2 Song1 Song2
    albumseq propose --tracklist "My Album" --medium Vinyl --count 10 --min-score 5
"""

from dataclasses import dataclass
from pathlib import Path
from typing import List, NoReturn, Optional

import structlog
import typer
from rich.console import Console
from rich.markup import escape

from albumseq.cli.commands import (
    handle_add_constraint,
    handle_add_medium,
    handle_add_tracklist,
    handle_propose,
    handle_remove_constraint,
)
from albumseq.cli.rendering import (
    ShowFilter,
    describe_stored_constraint,
    render_context,
    render_proposals,
)
from albumseq.config import settings
from albumseq.context.store import ProgramContext
from albumseq.exceptions import AlbumseqError
from albumseq.utils.logging import setup_logging

logger = structlog.get_logger()

console = Console()
err_console = Console(stderr=True)

app = typer.Typer(
    name="albumseq",
    help="Sequence tracks across the sides of a medium to satisfy placement constraints.",
    add_completion=False,
    no_args_is_help=True,
)


@dataclass
class CliState:
    context_path: Path


def _fail(message: str) -> NoReturn:
    err_console.print(f"[bold red]Error:[/bold red] {escape(message)}")
    raise typer.Exit(1)


def _state(ctx: typer.Context) -> CliState:
    return ctx.obj


@app.callback()
def main_callback(
    ctx: typer.Context,
    context: Path = typer.Option(
        Path(settings.context_path), "--context", "-c", help="Path to the context file"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    setup_logging("DEBUG" if verbose else settings.log_level, settings.log_file)
    ctx.obj = CliState(context_path=context)
    logger.debug("Using context file", path=str(context), command=ctx.invoked_subcommand)


@app.command()
def init(ctx: typer.Context) -> None:
    """Initialize a new, empty context file."""
    path = _state(ctx).context_path
    if path.exists():
        _fail(f"Context file already exists at {path}")

    try:
        ProgramContext().save(path)
    except AlbumseqError as e:
        _fail(str(e))
    console.print(f"Created new context at {escape(str(path))}")


@app.command("add-tracklist")
def add_tracklist(
    ctx: typer.Context,
    tracks: List[str] = typer.Argument(
        ..., help='Tracks as "Title:Duration" (MM:SS or decimal minutes)'
    ),
    name: str = typer.Option(..., "--name", "-n", help="Name of the tracklist"),
) -> None:
    """Add or replace a named tracklist."""
    path = _state(ctx).context_path
    try:
        program = ProgramContext.load_or_empty(path)
        replaced = handle_add_tracklist(program, name, tracks)
        program.save(path)
    except AlbumseqError as e:
        _fail(str(e))

    verb = "Replaced" if replaced else "Added"
    console.print(f"{verb} tracklist '{escape(name)}' ({len(tracks)} tracks)")


@app.command("add-medium")
def add_medium(
    ctx: typer.Context,
    name: str = typer.Option(..., "--name", "-n", help="Name of the medium"),
    sides: int = typer.Option(..., "--sides", "-s", help="Number of sides"),
    max_duration: str = typer.Option(
        ..., "--max-duration", "-d", help="Max duration per side (MM:SS or decimal minutes)"
    ),
) -> None:
    """Add or replace a named medium."""
    path = _state(ctx).context_path
    try:
        program = ProgramContext.load_or_empty(path)
        replaced = handle_add_medium(program, name, sides, max_duration)
        program.save(path)
    except AlbumseqError as e:
        _fail(str(e))

    verb = "Replaced" if replaced else "Added"
    console.print(f"{verb} medium '{escape(name)}'")


@app.command("add-constraint")
def add_constraint(
    ctx: typer.Context,
    args: List[str] = typer.Argument(..., help="Arguments for the constraint kind"),
    kind: str = typer.Option(
        ..., "--kind", "-k", help='Constraint kind: "atpos", "adjacent" or "onsameside"'
    ),
    weight: int = typer.Option(1, "--weight", "-w", min=0, help="Weight of the constraint"),
) -> None:
    """Add a constraint, or update the weight of an identical one."""
    path = _state(ctx).context_path
    try:
        program = ProgramContext.load_or_empty(path)
        constraint, replaced = handle_add_constraint(program, kind, args, weight)
        program.save(path)
    except AlbumseqError as e:
        _fail(str(e))

    verb = "Replaced" if replaced else "Added"
    console.print(f"{verb} constraint {escape(constraint.describe())}")


@app.command("remove-constraint")
def remove_constraint(
    ctx: typer.Context,
    index: int = typer.Option(..., "--index", "-i", help="Index of the constraint to remove"),
) -> None:
    """Remove a constraint by index (see `show --filter constraints`)."""
    path = _state(ctx).context_path
    try:
        program = ProgramContext.load_or_empty(path)
        removed = handle_remove_constraint(program, index)
        program.save(path)
    except AlbumseqError as e:
        _fail(str(e))

    console.print(
        f"Removed constraint at index {index}: {escape(describe_stored_constraint(removed))}"
    )


@app.command()
def show(
    ctx: typer.Context,
    show_filter: ShowFilter = typer.Option(ShowFilter.ALL, "--filter", "-f", help="What to show"),
) -> None:
    """Show the context or part of it."""
    try:
        program = ProgramContext.load_or_empty(_state(ctx).context_path)
    except AlbumseqError as e:
        _fail(str(e))

    render_context(console, program, show_filter)


@app.command()
def propose(
    ctx: typer.Context,
    tracklist: str = typer.Option(..., "--tracklist", "-t", help="Tracklist name"),
    medium: str = typer.Option(..., "--medium", "-m", help="Medium name"),
    count: int = typer.Option(
        settings.default_count, "--count", "-c", min=0, help="Number of propositions"
    ),
    min_score: Optional[int] = typer.Option(
        None, "--min-score", min=0, help="Minimum score to include"
    ),
    workers: int = typer.Option(
        settings.worker_count, "--workers", "-w", min=1, help="Processes evaluating orderings"
    ),
    max_tracks: int = typer.Option(
        settings.max_tracks, "--max-tracks", min=0,
        help="Refuse tracklists longer than this (0 disables the limit)",
    ),
) -> None:
    """Propose the top scoring orderings of a tracklist on a medium."""
    try:
        program = ProgramContext.load_or_empty(_state(ctx).context_path)
        proposal = handle_propose(
            program,
            tracklist,
            medium,
            count,
            min_score,
            workers=workers,
            max_tracks=max_tracks or None,
        )
    except AlbumseqError as e:
        _fail(str(e))

    render_proposals(console, proposal)
