"""``ert validate`` and ``ert groups`` — check and inspect a group file."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ert.cli.commands._loader import load_mux

console = Console()


def validate_cmd(
    config: Path = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to the group file (defaults to ERT_GROUPS_FILE).",
    ),
) -> None:
    """Validate a group file: every group must exist once and have a reporter."""
    mux, _ = load_mux(config)
    err = mux.validate()
    if err is not None:
        console.print(f"[red]Invalid configuration:[/red] {escape(str(err))}")
        raise typer.Exit(code=1)

    console.print(f"[green]OK[/green]: {len(mux.group_names)} group(s) configured")


def groups_cmd(
    config: Path = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to the group file (defaults to ERT_GROUPS_FILE).",
    ),
) -> None:
    """List configured groups with their delivery policy."""
    mux, _ = load_mux(config)

    if not mux.group_names:
        console.print("[dim]No groups configured.[/dim]")
        return

    table = Table(title="Report Groups")
    table.add_column("Group", style="cyan")
    table.add_column("Policy")
    table.add_column("Reporters", justify="right")

    for name in mux.group_names:
        policy = "[yellow]try all[/yellow]" if mux.is_try_all(name) else "first success"
        table.add_row(escape(name), policy, str(mux.reporter_count(name)))

    console.print(table)
