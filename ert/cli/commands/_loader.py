"""Shared group-file loading for CLI commands."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from ert.config import ErtSettings
from ert.factory import ReporterConfigError, build_mux
from ert.logging_adapter import LoggingErrorLogger
from ert.models.config import MuxConfig
from ert.mux import Mux

console = Console()


def load_mux(config_path: Path | None) -> tuple[Mux, ErtSettings]:
    """Build the mux described by *config_path* (or ``ERT_GROUPS_FILE``).

    Exits with code 1 and a red message when the ``ERT_*`` settings are
    invalid, or the file is missing, does not parse, or names a reporter
    that cannot be built.
    """
    try:
        settings = ErtSettings()
    except ValidationError as exc:
        console.print(f"[red]Invalid ERT_* settings:[/red]\n{escape(str(exc))}")
        raise typer.Exit(code=1)
    logging.basicConfig(level=settings.log_level)

    path = config_path or settings.groups_file
    try:
        mux_config = MuxConfig.from_file(path)
        mux = build_mux(mux_config, settings, error_logger=LoggingErrorLogger())
    except FileNotFoundError:
        console.print(f"[red]Group file not found:[/red] {escape(str(path))}")
        raise typer.Exit(code=1)
    except ValidationError as exc:
        console.print(f"[red]Invalid group file {escape(str(path))}:[/red]\n{escape(str(exc))}")
        raise typer.Exit(code=1)
    except ReporterConfigError as exc:
        console.print(f"[red]Reporter configuration error:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1)
    return mux, settings
