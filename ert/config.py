"""Runtime settings — env-driven via pydantic-settings.

All settings can be overridden with ``ERT_*`` environment variables or a
``.env`` file in the working directory.

Examples
--------
::

    export ERT_DISABLED=true            # nop mux, nothing is reported
    export ERT_GROUPS_FILE=/etc/ert.json
    export ERT_MAIL_SENDER=ert@example.com
    export ERT_SMTP_HOST=mail.example.com
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ErtSettings(BaseSettings):
    """Settings shared by the factory and the CLI."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="ERT_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Runtime
    environment: str = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    disabled: bool = False

    # Group configuration
    groups_file: Path = Path("ert.json")

    # Mail reporter
    mail_sender: str = ""
    mail_content_type: str = "text/plain"

    # SMTP transport
    smtp_host: str = "localhost"
    smtp_port: int = 25
    smtp_username: str = ""
    smtp_password: str = ""
    smtp_starttls: bool = False
    smtp_timeout_seconds: float = 10.0

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


@lru_cache(maxsize=1)
def get_settings() -> ErtSettings:
    """Return the process-wide settings, read from the environment once.

    Built on first use rather than at import, so a bad ``ERT_*`` value
    surfaces where the caller can report it.
    """
    return ErtSettings()
