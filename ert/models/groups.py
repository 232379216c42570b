"""Group options and declarative group specs."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class GroupState(BaseModel):
    """Mutable configuration-time state of one registered group.

    ``reporters`` keeps registration order, which is also delivery order.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    reporters: list[Any] = Field(default_factory=list)
    try_all: bool = False


GroupOption = Callable[[GroupState], None]


def try_all() -> GroupOption:
    """Deliver to every reporter of the group, even after one succeeded."""

    def _apply(group: GroupState) -> None:
        group.try_all = True

    return _apply


class GroupSpec(BaseModel):
    """Declarative group: registering it equals one ``new_group`` call
    followed by one ``add`` per reporter, in order.

    Examples
    --------
    >>> spec = GroupSpec(name="ops", options=[try_all()], reporters=[print])
    >>> spec.name
    'ops'
    """

    model_config = ConfigDict(frozen=True)

    name: str
    options: list[Callable[..., Any]] = Field(default_factory=list)
    reporters: list[Callable[..., Any]] = Field(default_factory=list)
