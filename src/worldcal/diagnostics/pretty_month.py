from __future__ import annotations

import argparse

import worldcal
from worldcal.cli import add_calendar_args, engine_from_args


def dow_header(eng: worldcal.CalendarEngine, w: int) -> str:
    names = [wd.abbreviation or wd.name for wd in eng.get_calendar().weekdays]
    return " ".join(n[:w].ljust(w) for n in names)


def cell(text: str, w: int) -> str:
    return text[:w].rjust(w)


def month_grid(eng: worldcal.CalendarEngine, year: int, month: int, w: int = 4) -> list[str]:
    """Rows of day numbers, aligned on the weekday of the first day."""
    n = len(eng.get_calendar().weekdays)
    first = eng.calculate_weekday(year, month, 1)
    if not n or first is None:
        return [" ".join(str(d) for d in range(1, eng.get_month_length(month, year) + 1))]

    rows: list[str] = []
    wk: list[str] = [cell("", w)] * first
    for day in range(1, eng.get_month_length(month, year) + 1):
        wk.append(cell(str(day), w))
        if len(wk) == n:
            rows.append(" ".join(wk))
            wk = []
    if wk:
        rows.append(" ".join(wk))
    return rows


def intercalary_lines(eng: worldcal.CalendarEngine, year: int, month: int, position: str) -> list[str]:
    spans = (eng.get_intercalary_days_before_month(year, month) if position == "before"
             else eng.get_intercalary_days_after_month(year, month))
    out = []
    for ic in spans:
        d = eng.make_date(year, month, 1, intercalary=ic.name)
        tag = "" if ic.counts_for_weekdays else "  (no weekday)"
        out.append(f"  * {worldcal.date_label(eng, d)}  [{ic.days} day{'s' if ic.days != 1 else ''}]{tag}")
    return out


def print_month(eng: worldcal.CalendarEngine, year: int, month: int) -> None:
    cal = eng.get_calendar()
    w = 4
    title = f"{cal.name or cal.id}: {cal.months[month - 1].name} {cal.year.prefix}{year}{cal.year.suffix}"
    if eng.is_leap_year(year):
        title += "  (leap year)"
    print(title)
    for line in intercalary_lines(eng, year, month, "before"):
        print(line)
    header = dow_header(eng, w)
    print(header)
    print("-" * max(len(header), 1))
    for row in month_grid(eng, year, month, w):
        print(row)
    for line in intercalary_lines(eng, year, month, "after"):
        print(line)

    if cal.weeks is not None:
        seen = []
        for day in range(1, eng.get_month_length(month, year) + 1):
            info = eng.get_week_info(eng.make_date(year, month, day))
            if info is not None and info.name not in seen:
                seen.append(info.name)
        if seen:
            print("weeks: " + ", ".join(seen))
    print()


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Print a month grid with weekdays and intercalary days.")
    p.add_argument("year", type=int)
    p.add_argument("month", type=int, nargs="?", default=None, help="1-based month; omit for the whole year")
    add_calendar_args(p)
    args = p.parse_args(argv)

    eng = engine_from_args(args)
    n_months = len(eng.get_calendar().months)
    if args.month is not None and not 1 <= args.month <= n_months:
        raise SystemExit(f"month must be in 1..{n_months}")

    months = [args.month] if args.month is not None else range(1, n_months + 1)
    for m in months:
        print_month(eng, args.year, m)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
