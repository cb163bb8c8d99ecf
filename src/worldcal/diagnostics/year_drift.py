#!/usr/bin/env python3
"""
Exact elapsed days against a flat ``nominal`` days-per-year approximation.

A converter that assumes every year has the same length drifts by one day
per missed leap day; this prints (and optionally plots) that drift for a
preset so the size of the error is visible over centuries.
"""

from __future__ import annotations

import argparse
from typing import Optional

import numpy as np

import worldcal


def _need_matplotlib():
    try:
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "worldcal[diagnostics]"') from e


def drift_table(eng: worldcal.CalendarEngine, start_year: int, end_year: int, nominal: Optional[int] = None):
    """
    Returns (years, exact_days, drift) arrays where ``exact_days[i]`` counts
    days from the first day of ``start_year`` to the first day of ``years[i]``
    and ``drift = exact_days - nominal * (years - start_year)``.
    """
    if nominal is None:
        nominal = eng.get_year_length(start_year if not eng.is_leap_year(start_year) else start_year + 1)
    years = np.arange(start_year, end_year + 1, dtype=np.int64)
    base = eng.table.days_before_year(start_year)
    exact = np.array([eng.table.days_before_year(int(y)) - base for y in years], dtype=np.int64)
    drift = exact - nominal * (years - start_year)
    return years, exact, drift


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Drift of a fixed-length year approximation against exact year lengths.")
    p.add_argument("--calendar", default="gregorian", help="preset name (default: gregorian)")
    p.add_argument("--start-year", type=int, default=None, help="default: the calendar epoch")
    p.add_argument("--years", type=int, default=2000, help="span in years")
    p.add_argument("--step", type=int, default=100, help="print every STEP years")
    p.add_argument("--nominal", type=int, default=None, help="approximate days per year (default: common-year length)")
    p.add_argument("--plot", action="store_true", help="plot drift with matplotlib")
    p.add_argument("--out", type=str, default=None, help="save figure to this path instead of showing it")
    args = p.parse_args(argv)

    eng = worldcal.preset(args.calendar)
    start = eng.get_calendar().year.epoch if args.start_year is None else args.start_year
    years, exact, drift = drift_table(eng, start, start + args.years, args.nominal)

    print(f"{'year':>8} {'exact days':>12} {'drift':>8}")
    for i in range(0, len(years), max(args.step, 1)):
        print(f"{years[i]:>8d} {exact[i]:>12d} {drift[i]:>8d}")
    print(f"max drift over {args.years} years: {int(np.abs(drift).max())} days")

    if args.plot:
        plt = _need_matplotlib()
        fig, ax = plt.subplots(figsize=(9, 4))
        ax.plot(years, drift, lw=1.2, color="0.15")
        ax.set_xlabel("year")
        ax.set_ylabel("exact - approximate (days)")
        ax.set_title(f"{args.calendar}: fixed-length year drift")
        ax.grid(True, alpha=0.3)
        fig.tight_layout()
        if args.out:
            fig.savefig(args.out, dpi=150)
        else:
            plt.show()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
