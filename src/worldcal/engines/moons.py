from __future__ import annotations

import math

from ..core.definition import Moon
from ..core.types import MoonPhaseInfo

PHASE_BOUNDARY_TOLERANCE = 1e-6
_PRECISION = 1_000_000


def _normalize(value: float) -> float:
    """Round away float noise from fractional cycle lengths."""
    rounded = round(value * _PRECISION) / _PRECISION
    if rounded == 0 or not math.isfinite(rounded):
        return 0.0
    return rounded


def moon_phase(moon: Moon, days_since_new_moon: int) -> MoonPhaseInfo:
    """
    Phase of ``moon`` a whole number of days after (or before, if negative)
    its reference new moon.
    """
    position = days_since_new_moon % moon.cycle_length

    phase_start = 0.0
    index = len(moon.phases) - 1
    for i, phase in enumerate(moon.phases):
        phase_end = phase_start + phase.length
        if position < phase_end - PHASE_BOUNDARY_TOLERANCE or i == len(moon.phases) - 1:
            index = i
            break
        phase_start = phase_end

    phase = moon.phases[index]
    length = phase.length
    day_in_phase_exact = min(max(_normalize(position - phase_start), 0.0), length)
    until_next_exact = max(_normalize(length - day_in_phase_exact), 0.0)
    progress = min(max(day_in_phase_exact / length, 0.0), 1.0) if length > 0 else 0.0

    return MoonPhaseInfo(
        moon=moon,
        phase=phase,
        phase_index=index,
        day_in_phase=math.floor(day_in_phase_exact),
        day_in_phase_exact=day_in_phase_exact,
        days_until_next=max(math.ceil(until_next_exact), 0),
        days_until_next_exact=until_next_exact,
        phase_progress=progress,
    )
