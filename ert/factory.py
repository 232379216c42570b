"""Builds a ``Mux`` from declarative group configuration.

Reporter types resolve to the implementations in ``ert.reporters``.  The
returned mux is configured but not validated; callers run ``validate()``
(or ``ensure_valid()``) before going live.
"""

from __future__ import annotations

import logging

from ert.config import ErtSettings, get_settings
from ert.models.config import MuxConfig, ReporterConfig, ReporterType
from ert.models.groups import GroupOption, try_all
from ert.models.trace import Trace
from ert.mux import ErrorLogger, Mux
from ert.reporters import Reporter
from ert.reporters.console import ConsoleReporter
from ert.reporters.local_file import LocalFileReporter
from ert.reporters.mail import MailReporter, MailTransport, SmtpTransport

logger = logging.getLogger(__name__)


class ReporterConfigError(ValueError):
    """A reporter entry cannot be turned into a reporter."""


def build_mux(
    mux_config: MuxConfig,
    settings: ErtSettings | None = None,
    *,
    error_logger: ErrorLogger | None = None,
    transport: MailTransport | None = None,
) -> Mux:
    """Return a mux wired from *mux_config*.

    *settings* defaults to ``ert.config.get_settings()``.  Disabled
    reporter entries are skipped.

    Returns a nop mux when ``settings.disabled`` is set.  Its groups hold
    inert placeholders so validation still checks the group file, but no
    reporter is built.

    Raises
    ------
    ReporterConfigError
        If a reporter entry lacks a required setting.
    """
    settings = settings or get_settings()
    if settings.disabled:
        logger.info("Reporting disabled, using a nop mux")
        mux = Mux.nop()
    else:
        mux = Mux(logger=error_logger)

    mail: MailReporter | None = None
    for group in mux_config.groups:
        options: list[GroupOption] = [try_all()] if group.try_all else []
        mux.new_group(group.name, *options)
        for entry in group.reporters:
            if not entry.enabled:
                logger.debug(
                    "Skipping disabled %s reporter in group %s",
                    entry.reporter_type.value,
                    group.name,
                )
                continue
            if settings.disabled:
                # Nothing is built, so no sender, transport or file is needed.
                mux.add(group.name, _inert_reporter)
                continue
            if entry.reporter_type is ReporterType.MAIL and mail is None:
                mail = _mail_reporter(settings, transport)
            mux.add(group.name, build_reporter(entry, mail))

    return mux


def build_reporter(entry: ReporterConfig, mail: MailReporter | None = None) -> Reporter:
    """Turn one reporter entry into a reporter."""
    if entry.reporter_type is ReporterType.MAIL:
        if mail is None:
            raise ReporterConfigError("mail reporter requires a MailReporter")
        recipients = entry.config.get("to") or []
        if isinstance(recipients, str):
            recipients = [recipients]
        if not recipients:
            raise ReporterConfigError("mail reporter requires at least one 'to' address")
        return mail.to(*recipients)

    if entry.reporter_type is ReporterType.CONSOLE:
        return ConsoleReporter()

    if entry.reporter_type is ReporterType.LOCAL_FILE:
        path = entry.config.get("path")
        if not path:
            raise ReporterConfigError("local_file reporter requires a 'path'")
        return LocalFileReporter(path)

    raise ReporterConfigError(f"unknown reporter type: {entry.reporter_type!r}")


def _inert_reporter(trace: Trace, topic: str, body: str) -> None:
    """Placeholder registered in a disabled mux; never called."""


def _mail_reporter(settings: ErtSettings, transport: MailTransport | None) -> MailReporter:
    if transport is None:
        transport = SmtpTransport(
            settings.smtp_host,
            settings.smtp_port,
            username=settings.smtp_username,
            password=settings.smtp_password,
            starttls=settings.smtp_starttls,
            timeout=settings.smtp_timeout_seconds,
        )
    try:
        return MailReporter(transport, settings.mail_sender, settings.mail_content_type)
    except ValueError as exc:
        raise ReporterConfigError(f"mail reporter: {exc} (set ERT_MAIL_SENDER)") from exc
