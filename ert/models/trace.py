"""Trace — an immutable path labelling where a report came from.

A trace is display-only: it never influences routing.  Branching a trace
from a shared prefix is safe because ``add`` always returns a new value.

>>> base = T("billing", "invoices")
>>> str(base.add("render"))
'/billing/invoices/render'
>>> str(base)
'/billing/invoices'
"""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

Segment = Annotated[str, Field(min_length=1)]


class Trace(BaseModel):
    """Ordered, frozen sequence of path segments."""

    model_config = ConfigDict(frozen=True)

    segments: tuple[Segment, ...] = ()

    @classmethod
    def of(cls, *segments: str) -> Trace:
        return cls(segments=segments)

    @classmethod
    def parse(cls, path: str) -> Trace:
        """Build a trace from its rendered form (``/a/b``).

        Empty parts are dropped, so ``"a//b/"`` and ``"/a/b"`` are equal.
        """
        return cls(segments=tuple(part for part in path.split("/") if part))

    def add(self, *segments: str) -> Trace:
        """Return a new trace with *segments* appended."""
        return Trace(segments=self.segments + segments)

    def __str__(self) -> str:
        return "/" + "/".join(self.segments)


def T(*segments: str) -> Trace:
    """Shorthand for ``Trace.of``."""
    return Trace.of(*segments)
