"""ert data models — traces, reports, group specs and group configuration."""

from ert.models.config import GroupConfig, MuxConfig, ReporterConfig, ReporterType
from ert.models.groups import GroupOption, GroupSpec, GroupState, try_all
from ert.models.report import Report
from ert.models.trace import T, Trace

__all__ = [
    # trace
    "T",
    "Trace",
    # report
    "Report",
    # groups
    "GroupOption",
    "GroupSpec",
    "GroupState",
    "try_all",
    # config
    "GroupConfig",
    "MuxConfig",
    "ReporterConfig",
    "ReporterType",
]
