"""ert: in-process error report routing.

Reports (trace, topic, body) are dispatched to named groups of reporters:
  - fluent group configuration with a single deferred validation
  - stop-at-first-success or try-all delivery per group
  - unknown groups trigger a sanitized broadcast to every reporter
  - mail (SMTP), console (Rich) and JSON-lines file reporters
  - env-driven settings and a JSON group file for wiring without code
"""

__version__ = "0.1.0"

from ert.logging_adapter import LoggingErrorLogger
from ert.models.groups import GroupSpec, try_all
from ert.models.report import Report
from ert.models.trace import T, Trace
from ert.mux import ConfigurationError, ErrorLogger, Mux
from ert.reporters import Reporter

__all__ = [
    "ConfigurationError",
    "ErrorLogger",
    "GroupSpec",
    "LoggingErrorLogger",
    "Mux",
    "Report",
    "Reporter",
    "T",
    "Trace",
    "try_all",
    "__version__",
]
