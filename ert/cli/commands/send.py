"""``ert send`` — dispatch one report through a group file's mux."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from ert.cli.commands._loader import load_mux
from ert.models.trace import Trace

console = Console()


def send_cmd(
    group: str = typer.Argument(..., help="Name of the group to report to."),
    trace: str = typer.Option("/", "--trace", "-t", help="Trace path, e.g. /billing/nightly."),
    topic: str = typer.Option("", "--topic", help="Report topic."),
    body: str = typer.Option("", "--body", "-b", help="Report body."),
    config: Path = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to the group file (defaults to ERT_GROUPS_FILE).",
    ),
) -> None:
    """Validate the group file, then send one report to GROUP."""
    mux, settings = load_mux(config)
    err = mux.validate()
    if err is not None:
        console.print(f"[red]Invalid configuration:[/red] {escape(str(err))}")
        raise typer.Exit(code=1)

    if settings.disabled:
        console.print("[dim]Reporting is disabled (ERT_DISABLED); nothing sent.[/dim]")
        return

    mux.report(group, Trace.parse(trace), topic, body)
    console.print(f"[green]Report dispatched[/green] to group [bold]{escape(group)}[/bold]")
