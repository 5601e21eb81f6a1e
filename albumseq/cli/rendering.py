"""
Rich output for the command line
"""

from enum import Enum

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from albumseq.cli.commands import Proposal
from albumseq.context.models import StoredConstraint
from albumseq.context.store import ProgramContext
from albumseq.sequencing.optimizer import RankedOrdering
from albumseq.sequencing.scoring import evaluate_constraints
from albumseq.utils.parsing import format_duration


class ShowFilter(str, Enum):
    ALL = "all"
    TRACKLISTS = "tracklists"
    MEDIA = "media"
    CONSTRAINTS = "constraints"


def describe_stored_constraint(stored: StoredConstraint) -> str:
    args = ", ".join(repr(value) for value in stored.kind.data)
    return f"{stored.kind.kind}({args}) (weight {stored.weight})"


def render_context(console: Console, ctx: ProgramContext, show: ShowFilter = ShowFilter.ALL) -> None:
    if show in (ShowFilter.ALL, ShowFilter.TRACKLISTS):
        console.print("[bold]--- Tracklists ---[/bold]")
        for tracklist in ctx.tracklists:
            console.print(f"Tracklist [cyan]{escape(tracklist.name)}[/cyan]:")
            for track in tracklist.tracks:
                console.print(f"  {escape(track.title)} ({format_duration(track.duration)})")

    if show in (ShowFilter.ALL, ShowFilter.MEDIA):
        console.print("[bold]--- Media ---[/bold]")
        for medium in ctx.mediums:
            console.print(
                f"Medium: [cyan]{escape(medium.name)}[/cyan] | Sides: {medium.sides} | "
                f"Max per side: {format_duration(medium.max_duration_per_side)}"
            )

    if show in (ShowFilter.ALL, ShowFilter.CONSTRAINTS):
        console.print("[bold]--- Constraints ---[/bold]")
        for index, stored in enumerate(ctx.constraints):
            console.print(f"[{index}] {escape(describe_stored_constraint(stored))}")


def render_proposals(console: Console, proposal: Proposal) -> None:
    header = (
        f"Top {proposal.count} permutations for tracklist '{proposal.tracklist_name}' "
        f"on medium '{proposal.medium.name}'"
    )
    if proposal.min_score is not None:
        header += f" with score >= {proposal.min_score}"
    console.print(f"[bold cyan]{escape(header)}:[/bold cyan]")

    if not proposal.results:
        console.print("[yellow]No ordering fits the medium with the requested score.[/yellow]")
        return

    for number, ranked in enumerate(proposal.results, start=1):
        _render_ranked(console, number, ranked, proposal)


def _render_ranked(console: Console, number: int, ranked: RankedOrdering, proposal: Proposal) -> None:
    table = Table(
        title=f"Permutation #{number}  Score: {ranked.score}",
        title_justify="left",
        title_style="bold yellow",
    )
    table.add_column("#", justify="right")
    table.add_column("Title")
    table.add_column("Duration", justify="right")

    track_number = 1
    for side_index, side in enumerate(ranked.sides):
        side_duration = sum(track.duration for track in side)
        table.add_row(
            "",
            f"[bold blue]Side {side_index + 1}[/bold blue]",
            f"[blue]{format_duration(side_duration)}[/blue]",
        )
        for track in side:
            table.add_row(str(track_number), escape(track.title), format_duration(track.duration))
            track_number += 1

    table.add_section()
    table.add_row("", "[bold]TOTAL[/bold]", f"[bold]{format_duration(ranked.ordering.total_duration)}[/bold]")
    console.print(table)

    evaluated = evaluate_constraints(ranked.ordering, ranked.allocation, proposal.constraints)
    for constraint, satisfied in evaluated:
        if satisfied:
            console.print(f"  [green]satisfied[/green] {escape(constraint.describe())}")
    console.print()
