from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

from .definition import Moon, MoonPhase

@dataclass(frozen=True)
class TimeOfDay:
    hour: int = 0
    minute: int = 0
    second: int = 0

MIDNIGHT = TimeOfDay(0, 0, 0)

@dataclass(frozen=True)
class CalendarDate:
    """
    A calendar position. ``month`` is 1-based; for intercalary days it is the
    month the span is attached to, and ``day`` counts within the span.
    ``weekday`` is None for days that sit outside the weekday cycle. A date
    built without a time of day is at midnight; ``time=None`` is stored as
    ``MIDNIGHT`` so that both spellings compare equal.
    """
    year: int
    month: int
    day: int
    weekday: Optional[int] = None
    intercalary: Optional[str] = None
    time: TimeOfDay = MIDNIGHT

    def __post_init__(self) -> None:
        if self.time is None:
            object.__setattr__(self, "time", MIDNIGHT)

    @property
    def is_intercalary(self) -> bool:
        return self.intercalary is not None

    def replace(self, **changes: Any) -> "CalendarDate":
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "year": self.year,
            "month": self.month,
            "day": self.day,
            "weekday": self.weekday,
        }
        if self.intercalary is not None:
            out["intercalary"] = self.intercalary
        if self.time != MIDNIGHT:
            out["time"] = {"hour": self.time.hour, "minute": self.time.minute, "second": self.time.second}
        return out

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CalendarDate":
        t = data.get("time")
        return cls(
            year=int(data["year"]),
            month=int(data["month"]),
            day=int(data["day"]),
            weekday=data.get("weekday"),
            intercalary=data.get("intercalary"),
            time=TimeOfDay(int(t.get("hour", 0)), int(t.get("minute", 0)), int(t.get("second", 0))) if t else MIDNIGHT,
        )

@dataclass(frozen=True)
class MoonPhaseInfo:
    moon: Moon
    phase: MoonPhase
    phase_index: int
    day_in_phase: int
    day_in_phase_exact: float
    days_until_next: int
    days_until_next_exact: float
    phase_progress: float

@dataclass(frozen=True)
class SunTimes:
    """Sunrise and sunset as decimal hours of the calendar day."""
    sunrise: float
    sunset: float
