"""The report value handed to every reporter during one dispatch."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_serializer

from ert.models.trace import Trace


class Report(BaseModel):
    """A single report: where it came from, what it is about, and the text.

    Reports are transient.  The mux builds one for the diagnostic it
    broadcasts on a misrouted call; reporters that persist reports (see
    ``LocalFileReporter``) build one to serialize it.  The trace dumps in
    its rendered ``/a/b`` form.
    """

    model_config = ConfigDict(frozen=True)

    trace: Trace
    topic: str
    body: str

    @field_serializer("trace")
    def _render_trace(self, trace: Trace) -> str:
        return str(trace)
