"""Reporter protocol for ert delivery channels.

A reporter is any callable taking ``(trace, topic, body)``.  Returning
normally means the report was delivered; raising means it was not.  The
mux catches the exception, logs it, and moves on to the next reporter.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ert.models.trace import Trace


@runtime_checkable
class Reporter(Protocol):
    """Delivers one report over one channel (mail, console, file, ...)."""

    def __call__(self, trace: Trace, topic: str, body: str) -> None:
        """Deliver the report or raise."""
        ...
