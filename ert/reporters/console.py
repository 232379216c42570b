"""Console reporter — prints reports to the terminal with Rich."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from ert.models.trace import Trace
from ert.reporters._formatting import format_subject

logger = logging.getLogger(__name__)


class ConsoleReporter:
    """Renders each report as a Rich panel.

    Parameters
    ----------
    console:
        Target console.  Defaults to a console on stderr so reports do not
        mix with program output.
    """

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console(stderr=True)

    def __call__(self, trace: Trace, topic: str, body: str) -> None:
        subject = format_subject(trace, topic)
        content = Text(body) if body else Text("(empty body)", style="dim")
        self._console.print(Panel(content, title=Text(subject), border_style="red"))
        logger.debug("ConsoleReporter: printed report %s", subject)
