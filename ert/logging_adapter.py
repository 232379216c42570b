"""Bridge from the mux's ``ErrorLogger`` capability to stdlib logging."""

from __future__ import annotations

import logging
from typing import Any


class LoggingErrorLogger:
    """Logs mux errors at ERROR level, with the exception attached.

    Parameters
    ----------
    logger:
        Target logger.  Defaults to the ``ert`` logger.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger("ert")

    def log_error(self, error: BaseException, msg: str, *args: Any) -> None:
        self._logger.error(
            msg + ": %s",
            *args,
            error,
            exc_info=(type(error), error, error.__traceback__),
        )
