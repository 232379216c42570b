"""Shared formatting helpers for ert reporters."""

from __future__ import annotations

from ert.models.trace import Trace

SUBJECT_PREFIX = "ERT Report"


def format_subject(trace: Trace, topic: str) -> str:
    """Return the one-line subject used by mail and console reporters.

    >>> from ert.models.trace import T
    >>> format_subject(T("a", "b"), "disk full")
    'ERT Report: /a/b: disk full'
    >>> format_subject(T("a"), "")
    'ERT Report: /a'
    """
    if topic:
        return f"{SUBJECT_PREFIX}: {trace}: {topic}"
    return f"{SUBJECT_PREFIX}: {trace}"
