"""Declarative reporter/group configuration, loaded from a JSON file.

Each group lists its reporters in delivery order.  Reporter types map to
the implementations under ``ert.reporters``; ``ert.factory`` turns a
``MuxConfig`` into a live ``Mux``.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ReporterType(str, Enum):
    """The reporter implementations that can be wired from configuration."""

    MAIL = "mail"
    CONSOLE = "console"
    LOCAL_FILE = "local_file"


class ReporterConfig(BaseModel):
    """One reporter entry of a group."""

    model_config = ConfigDict(frozen=True)

    reporter_type: ReporterType
    config: dict[str, Any] = {}
    enabled: bool = True


class GroupConfig(BaseModel):
    """A named group with its delivery policy and ordered reporters."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    try_all: bool = False
    reporters: list[ReporterConfig] = []


class MuxConfig(BaseModel):
    """All groups of one mux."""

    model_config = ConfigDict(frozen=True)

    groups: list[GroupConfig] = []

    @classmethod
    def from_file(cls, path: Path) -> MuxConfig:
        """Parse a JSON group file."""
        return cls.model_validate_json(Path(path).read_bytes())
