from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Protocol

from .definition import CalendarDefinition
from .errors import UnknownCalendarError
from .types import CalendarDate

class CalendarEngineProtocol(Protocol):
    """What the presentation layer is allowed to rely on."""
    def get_calendar(self) -> CalendarDefinition: ...
    def world_time_to_date(self, world_time: int) -> CalendarDate: ...
    def date_to_world_time(self, date: CalendarDate) -> int: ...

@dataclass
class EngineRegistry:
    """
    Name -> engine map. Callers own it and pass it by reference;
    worldcal keeps no module-level instance.
    """
    _engines: Dict[str, CalendarEngineProtocol] = field(default_factory=dict)
    active: Optional[str] = None

    def get(self, name: Optional[str] = None) -> CalendarEngineProtocol:
        key = self.active if name is None else name
        if key is None or key not in self._engines:
            raise UnknownCalendarError(f"Unknown calendar '{key}'. Available: {sorted(self._engines)}")
        return self._engines[key]

    def list(self) -> List[str]:
        return sorted(self._engines.keys())

    def register(self, name: str, engine: CalendarEngineProtocol, *, overwrite: bool = False) -> None:
        if (not overwrite) and (name in self._engines):
            raise KeyError(f"Calendar '{name}' already exists. Use overwrite=True to replace.")
        self._engines[name] = engine
        if self.active is None:
            self.active = name

    def activate(self, name: str) -> CalendarEngineProtocol:
        engine = self.get(name)
        self.active = name
        return engine
