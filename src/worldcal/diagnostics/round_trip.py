from __future__ import annotations

import argparse
import random
from typing import List

import worldcal


def parse_calendars(s: str) -> List[str]:
    # "gregorian,harptos" -> ["gregorian", "harptos"]
    return [x.strip() for x in s.split(",") if x.strip()]


def roundtrip_test(
    name: str,
    N: int,
    start_year: int,
    end_year: int,
    seed: int,
    *,
    max_failures: int,
) -> int:
    """
    Draw random world times between the first second of ``start_year`` and
    the last second of ``end_year``; check date -> world time -> date and
    that consecutive days never go backwards.
    """
    eng = worldcal.preset(name)
    rng = random.Random(seed)
    spd = eng.get_calendar().time.seconds_per_day

    lo = eng.date_to_world_time(eng.days_to_date(eng.table.days_before_year(start_year)))
    hi = eng.date_to_world_time(eng.days_to_date(eng.table.days_before_year(end_year + 1))) - 1
    failures = 0

    for _ in range(N):
        wt = rng.randint(lo, hi)
        d = eng.world_time_to_date(wt)
        back = eng.date_to_world_time(d)

        if back != wt:
            failures += 1
            print("\nFAIL (round trip)")
            print("calendar:", name)
            print("world_time:", wt)
            print("date:", d)
            print("back:", back)
            print("explain:", eng.explain(wt))
            if failures >= max_failures:
                return failures

        nxt = eng.world_time_to_date(wt + spd)
        if eng.compare_dates(nxt, d) <= 0:
            failures += 1
            print("\nFAIL (monotonic)")
            print("calendar:", name)
            print("date:", d)
            print("next day:", nxt)
            if failures >= max_failures:
                return failures

    return failures


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Random round-trip tests: world time -> date -> world time.")
    p.add_argument("--calendars", type=str, default=",".join(worldcal.list_presets()),
                   help="Comma-separated preset list.")
    p.add_argument("--N", type=int, default=2000, help="Trials per calendar.")
    p.add_argument("--start-year", type=int, default=-500, help="First year of the sweep.")
    p.add_argument("--end-year", type=int, default=5000, help="Last year of the sweep.")
    p.add_argument("--seed", type=int, default=123, help="RNG seed.")
    p.add_argument("--max-failures", type=int, default=5, help="Stop after this many failures per calendar.")
    args = p.parse_args(argv)

    if args.end_year < args.start_year:
        raise SystemExit("--end-year must be >= --start-year")

    total_fail = 0
    for name in parse_calendars(args.calendars):
        print(f"Testing {name} ...")
        f = roundtrip_test(name, N=args.N, start_year=args.start_year, end_year=args.end_year,
                           seed=args.seed, max_failures=args.max_failures)
        total_fail += f

    if total_fail == 0:
        print("All round-trip tests passed.")
        return 0

    print(f"Round-trip failures: {total_fail}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
