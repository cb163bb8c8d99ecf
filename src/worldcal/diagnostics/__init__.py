"""Diagnostics package.

- pretty_month: month grid with weekdays, weeks and intercalary days
- round_trip: random world time <-> date sweeps
- year_drift: exact year lengths against a fixed 365-day approximation (optional plot)
"""

__all__ = ["pretty_month", "round_trip", "year_drift"]
