"""Main Typer application — registers all CLI commands.

Entry point: ``ert`` (configured via pyproject.toml scripts).
"""

from __future__ import annotations

import typer

from ert.cli.commands.send import send_cmd
from ert.cli.commands.validate import groups_cmd, validate_cmd

app = typer.Typer(
    name="ert",
    help="ert: route error reports to groups of reporters.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

app.command(name="validate", help="Validate a group file.")(validate_cmd)
app.command(name="groups", help="List configured groups.")(groups_cmd)
app.command(name="send", help="Send one report to a group.")(send_cmd)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
