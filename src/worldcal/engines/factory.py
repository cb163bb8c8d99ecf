"""
worldcal.engines.factory
------------------------
Transforms calendar documents and definitions into live CalendarEngine objects.
"""

from __future__ import annotations

import copy
from typing import Any, Mapping, Union

from ..core.definition import CalendarDefinition
from ..core.errors import UnknownCalendarError
from .calendar import CalendarEngine
from .specs import ALL_SPECS

CalendarSource = Union[CalendarDefinition, Mapping[str, Any]]


def build_definition(source: CalendarSource) -> CalendarDefinition:
    if isinstance(source, CalendarDefinition):
        return source
    if isinstance(source, Mapping):
        return CalendarDefinition.from_dict(source)
    raise TypeError(f"Unknown calendar source type: {type(source)}")


def make_engine(source: CalendarSource) -> CalendarEngine:
    """The universal entry point."""
    return CalendarEngine(build_definition(source))


def make_preset(name: str) -> CalendarEngine:
    if name not in ALL_SPECS:
        raise UnknownCalendarError(f"Unknown calendar preset '{name}'")
    return make_engine(copy.deepcopy(ALL_SPECS[name]))
