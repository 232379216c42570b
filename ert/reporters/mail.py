"""Mail reporter — sends each report as an email through a transport.

The reporter only builds the message; delivery is delegated to a
``MailTransport``.  ``SmtpTransport`` is the production transport, tests
plug in an in-memory one.
"""

from __future__ import annotations

import logging
import smtplib
from email.message import EmailMessage
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict

from ert.models.trace import Trace
from ert.reporters import Reporter
from ert.reporters._formatting import format_subject

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "text/plain"


class MailMessage(BaseModel):
    """A mail ready to hand to a transport."""

    model_config = ConfigDict(frozen=True)

    subject: str
    body: str
    content_type: str = DEFAULT_CONTENT_TYPE


@runtime_checkable
class MailTransport(Protocol):
    """Anything that can send a ``MailMessage``."""

    def send(self, sender: str, recipients: list[str], message: MailMessage) -> None:
        ...


class SmtpTransport:
    """Sends mails over SMTP, one connection per message.

    Parameters
    ----------
    host, port:
        SMTP server address.
    username, password:
        Optional credentials; login is skipped when *username* is empty.
    starttls:
        Upgrade the connection with STARTTLS before login.
    timeout:
        Socket timeout in seconds.
    """

    def __init__(
        self,
        host: str = "localhost",
        port: int = 25,
        *,
        username: str = "",
        password: str = "",
        starttls: bool = False,
        timeout: float = 10.0,
    ) -> None:
        self._host = host
        self._port = port
        self._username = username
        self._password = password
        self._starttls = starttls
        self._timeout = timeout

    def send(self, sender: str, recipients: list[str], message: MailMessage) -> None:
        msg = build_email(sender, recipients, message)
        with smtplib.SMTP(self._host, self._port, timeout=self._timeout) as smtp:
            if self._starttls:
                smtp.starttls()
            if self._username:
                smtp.login(self._username, self._password)
            smtp.send_message(msg)
        logger.debug("SmtpTransport: sent %r to %s", message.subject, recipients)


def build_email(sender: str, recipients: list[str], message: MailMessage) -> EmailMessage:
    """Turn a ``MailMessage`` into a stdlib ``EmailMessage``."""
    msg = EmailMessage()
    msg["From"] = sender
    msg["To"] = ", ".join(recipients)
    msg["Subject"] = message.subject
    maintype, _, subtype = message.content_type.partition("/")
    if maintype == "text" and subtype:
        msg.set_content(message.body, subtype=subtype)
    else:
        msg.set_content(message.body)
    return msg


class MailReporter:
    """Builds mail reporters bound to a transport and a sender address.

    Examples
    --------
    >>> reporter = MailReporter(transport, "ert@example.com").to("ops@example.com")  # doctest: +SKIP
    >>> mux.add("ops", reporter)  # doctest: +SKIP
    """

    def __init__(
        self,
        transport: MailTransport,
        sender: str,
        content_type: str = "",
    ) -> None:
        if not sender:
            raise ValueError("sender is required")
        self._transport = transport
        self._sender = sender
        self._content_type = content_type or DEFAULT_CONTENT_TYPE

    @property
    def sender(self) -> str:
        return self._sender

    @property
    def content_type(self) -> str:
        return self._content_type

    def to(self, *recipients: str) -> Reporter:
        """Return a reporter mailing every report to *recipients*."""
        rcpts = list(recipients)

        def _report(trace: Trace, topic: str, body: str) -> None:
            message = MailMessage(
                subject=format_subject(trace, topic),
                body=body,
                content_type=self._content_type,
            )
            self._transport.send(self._sender, rcpts, message)

        return _report
