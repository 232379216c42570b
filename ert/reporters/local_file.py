"""Local file reporter — appends reports to a JSON-lines file.

One line per report::

    {"trace": "/a/b", "topic": "...", "body": "...", "reported_at": "..."}
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from ert.models.report import Report
from ert.models.trace import Trace

logger = logging.getLogger(__name__)


class LocalFileReporter:
    """Appends every report to *path*.

    Parameters
    ----------
    path:
        Target file.  Defaults to ``.ert/reports.jsonl``.  Parent
        directories are created on construction.
    """

    def __init__(self, path: Path | str | None = None) -> None:
        self._path = Path(path) if path else Path(".ert/reports.jsonl")
        self._path.parent.mkdir(parents=True, exist_ok=True)

    @property
    def path(self) -> Path:
        return self._path

    def __call__(self, trace: Trace, topic: str, body: str) -> None:
        data = Report(trace=trace, topic=topic, body=body).model_dump(mode="json")
        data["reported_at"] = datetime.now(timezone.utc).isoformat()
        line = json.dumps(data, sort_keys=True)
        with self._path.open("a", encoding="utf-8") as fh:
            fh.write(line + "\n")
        logger.debug("LocalFileReporter: appended report to %s", self._path)

    def read_reports(self) -> list[dict[str, Any]]:
        """Return every report written so far, oldest first."""
        if not self._path.exists():
            return []
        with self._path.open(encoding="utf-8") as fh:
            return [json.loads(line) for line in fh if line.strip()]
