"""Mux — routes reports to named groups of reporters.

Configuration is fluent: every configuration call returns the mux, and the
first failing call is recorded instead of raised.  After that, further
configuration calls are no-ops and ``validate()`` returns the recorded
error.  Check it once at startup::

    mux = (
        Mux(logger=LoggingErrorLogger())
        .new_group("ops", try_all())
        .add("ops", mail.to("ops@example.com"))
        .add("ops", ConsoleReporter())
    )
    mux.ensure_valid()

Dispatch never raises.  Reporter failures are logged and the next reporter
is tried.  A report for an unknown group is turned into a diagnostic that
goes to every reporter of every group, without the original body.

Configuration is not thread-safe.  Once configured, ``report()`` only reads
the group map and may be called from many threads.
"""

from __future__ import annotations

import inspect
import logging
from typing import Any, Protocol, runtime_checkable

from ert.models.groups import GroupOption, GroupSpec, GroupState
from ert.models.report import Report
from ert.models.trace import T, Trace
from ert.reporters import Reporter

logger = logging.getLogger(__name__)


class ConfigurationError(ValueError):
    """Raised (or returned by ``Mux.validate``) for an invalid mux setup."""


@runtime_checkable
class ErrorLogger(Protocol):
    """Receives errors the mux cannot hand back to its caller."""

    def log_error(self, error: BaseException, msg: str, *args: Any) -> None:
        ...


MISROUTE_TRACE = T("ert", "mux", "report")

_MISROUTE_BODY = """
Bad ert Mux.report call from {file}:{line}: the report group '{group}' doesn't exist!

This message is sent to every registered group and reporter in the hope
that it reaches the team that owns the calling code.

Original trace: {trace}

!! Please forward this message to the team responsible for that code !!

-- ert
"""


class Mux:
    """Registry of report groups and the dispatcher over them.

    Parameters
    ----------
    logger:
        Optional ``ErrorLogger`` receiving reporter failures and misrouted
        calls.  Without one those events are dropped silently.
    """

    def __init__(self, *, logger: ErrorLogger | None = None) -> None:
        self._logger = logger
        self._err: ConfigurationError | None = None
        self._groups: dict[str, GroupState] = {}
        self._nop = False

    @classmethod
    def nop(cls, *, logger: ErrorLogger | None = None) -> Mux:
        """Return a mux whose ``report()`` does nothing.

        Configuration and validation behave as usual, so call sites do not
        change when reporting is switched off.  *logger* is accepted for
        symmetry with the live mux; a nop mux never calls it.
        """
        mux = cls(logger=logger)
        mux._nop = True
        return mux

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def new_group(self, name: str, *options: GroupOption) -> Mux:
        """Register an empty group called *name*."""
        if self._err is not None:
            return self

        if not name:
            self._err = ConfigurationError("group name must not be empty")
            return self

        if name in self._groups:
            self._err = ConfigurationError(f"group '{name}' already exists")
            return self

        group = GroupState()
        for option in options:
            option(group)

        self._groups[name] = group
        logger.debug("Registered group %s (try_all=%s)", name, group.try_all)
        return self

    def add(self, name: str, reporter: Reporter) -> Mux:
        """Append *reporter* to the group called *name*."""
        if self._err is not None:
            return self

        group = self._groups.get(name)
        if group is None:
            self._err = ConfigurationError(f"group '{name}' doesn't exist")
            return self

        group.reporters.append(reporter)
        return self

    def add_group(self, spec: GroupSpec) -> Mux:
        self.new_group(spec.name, *spec.options)
        for reporter in spec.reporters:
            self.add(spec.name, reporter)
        return self

    def add_groups(self, *specs: GroupSpec) -> Mux:
        for spec in specs:
            self.add_group(spec)
        return self

    def validate(self) -> ConfigurationError | None:
        """Return the first configuration problem, or ``None``.

        Checks, in order: the first recorded configuration error, that at
        least one group exists, and that every group has a reporter.
        """
        if self._err is not None:
            return self._err

        if not self._groups:
            return ConfigurationError("no groups defined")

        for name, group in self._groups.items():
            if not group.reporters:
                return ConfigurationError(f"group '{name}' has no reporter assigned")

        return None

    def ensure_valid(self) -> None:
        """Raise ``ConfigurationError`` unless ``validate()`` passes."""
        err = self.validate()
        if err is not None:
            raise err

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def is_nop(self) -> bool:
        return self._nop

    @property
    def group_names(self) -> list[str]:
        """Registered group names in registration order."""
        return list(self._groups)

    def reporter_count(self, name: str) -> int:
        group = self._groups.get(name)
        return len(group.reporters) if group is not None else 0

    def is_try_all(self, name: str) -> bool:
        group = self._groups.get(name)
        return group is not None and group.try_all

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def report(self, name: str, trace: Trace, topic: str, body: str) -> None:
        """Deliver a report to the group called *name*.

        Reporters run in registration order.  A successful delivery ends the
        walk unless the group is try-all.  A failing reporter is logged and
        the next one is tried.  Never raises.
        """
        if self._nop:
            return

        group = self._groups.get(name)
        if group is None:
            caller = inspect.currentframe().f_back  # type: ignore[union-attr]
            file = caller.f_code.co_filename if caller else "<unknown>"
            line = caller.f_lineno if caller else 0
            self._broadcast_misroute(name, trace, file, line)
            return

        for i, reporter in enumerate(group.reporters):
            try:
                reporter(trace, topic, body)
            except Exception as exc:  # noqa: BLE001
                self._log_error(
                    exc, "reporting to group '%s' via reporter no. %d failed", name, i
                )
                continue
            if not group.try_all:
                return

    def _broadcast_misroute(self, name: str, trace: Trace, file: str, line: int) -> None:
        self._log_error(
            ConfigurationError(
                f"bad ert Mux.report call from {file}:{line}: "
                f"given report group '{name}' doesn't exist"
            ),
            "invalid report",
        )

        # The original topic and body may hold data not meant for these
        # recipients; only the trace is quoted.
        diagnostic = Report(
            trace=MISROUTE_TRACE,
            topic=f"ERROR: ert: wrong report group '{name}'",
            body=_MISROUTE_BODY.format(file=file, line=line, group=name, trace=trace),
        )
        for group_name, group in self._groups.items():
            for i, reporter in enumerate(group.reporters):
                try:
                    reporter(diagnostic.trace, diagnostic.topic, diagnostic.body)
                except Exception as exc:  # noqa: BLE001
                    self._log_error(
                        exc,
                        "broadcasting misrouted report to group '%s' via reporter no. %d failed",
                        group_name,
                        i,
                    )

    def _log_error(self, error: BaseException, msg: str, *args: Any) -> None:
        if self._logger is None:
            return
        try:
            self._logger.log_error(error, msg, *args)
        except Exception:  # noqa: BLE001
            logger.exception(
                "Error logger failed while logging: " + msg + ": %s", *args, error
            )
