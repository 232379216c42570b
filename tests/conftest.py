"""Shared test fixtures for ert."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from ert.models.trace import Trace
from ert.mux import Mux
from ert.reporters.mail import MailMessage


class RecordingReporter:
    """A reporter that records every call and optionally fails."""

    def __init__(
        self,
        name: str = "recorder",
        *,
        fail: bool = False,
        journal: list[str] | None = None,
    ) -> None:
        self.name = name
        self.fail = fail
        self.calls: list[tuple[Trace, str, str]] = []
        self._journal = journal

    def __call__(self, trace: Trace, topic: str, body: str) -> None:
        self.calls.append((trace, topic, body))
        if self._journal is not None:
            self._journal.append(self.name)
        if self.fail:
            raise RuntimeError(f"{self.name} failed for testing")


class RecordingErrorLogger:
    """An ErrorLogger that keeps (error, rendered message) pairs."""

    def __init__(self) -> None:
        self.entries: list[tuple[BaseException, str]] = []

    def log_error(self, error: BaseException, msg: str, *args: Any) -> None:
        self.entries.append((error, msg % args if args else msg))


class InMemoryTransport:
    """A MailTransport that keeps sent mails instead of sending them."""

    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.sent: list[tuple[str, list[str], MailMessage]] = []

    def send(self, sender: str, recipients: list[str], message: MailMessage) -> None:
        if self.fail:
            raise ConnectionError("transport down")
        self.sent.append((sender, recipients, message))


@pytest.fixture
def journal() -> list[str]:
    """Shared call log recording reporter invocation order."""
    return []


@pytest.fixture
def make_reporter(journal: list[str]) -> Callable[..., RecordingReporter]:
    """Factory fixture: build a RecordingReporter writing to ``journal``."""

    def _factory(name: str = "recorder", fail: bool = False) -> RecordingReporter:
        return RecordingReporter(name, fail=fail, journal=journal)

    return _factory


@pytest.fixture
def error_logger() -> RecordingErrorLogger:
    return RecordingErrorLogger()


@pytest.fixture
def mux(error_logger: RecordingErrorLogger) -> Mux:
    """Provide an empty mux wired to the recording error logger."""
    return Mux(logger=error_logger)


@pytest.fixture
def transport() -> InMemoryTransport:
    return InMemoryTransport()


@pytest.fixture
def groups_file(tmp_path: Path) -> Callable[[dict[str, Any]], Path]:
    """Factory fixture: write a JSON group file and return its path."""

    def _write(data: dict[str, Any]) -> Path:
        path = tmp_path / "ert.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write
