"""ert CLI — Typer-based command-line interface.

Provides the ``ert`` command with subcommands to validate a group file,
list its groups, and send a single report through it.

All output uses Rich for formatted terminal display.
"""
