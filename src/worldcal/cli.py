from __future__ import annotations

import argparse
import importlib
import inspect
import json
import logging
import re
import sys

from .config.logging import configure_logging
from .core.errors import WorldcalError
from .core.time import hours_to_hhmm

logger = logging.getLogger(__name__)

_HMS_RE = re.compile(r"^\d{1,2}:\d{2}(:\d{2})?$")


def _run_module_main(modpath: str, argv: list[str]) -> int:
    """
    Import module and run its main().

    Supports:
      - main(argv: list[str] | None = None) -> int|None
      - main() -> int|None
    """
    mod = importlib.import_module(modpath)
    if not hasattr(mod, "main"):
        raise SystemExit(f"Module {modpath} has no main()")
    fn = getattr(mod, "main")

    sig = inspect.signature(fn)
    if len(sig.parameters) == 0:
        rv = fn()
    else:
        rv = fn(argv)
    return int(rv or 0)


def add_calendar_args(p: argparse.ArgumentParser) -> None:
    g = p.add_mutually_exclusive_group()
    g.add_argument("--calendar", default="gregorian", help="built-in preset name (default: gregorian)")
    g.add_argument("--file", help="path to a calendar JSON document")


def engine_from_args(args: argparse.Namespace):
    import worldcal

    if getattr(args, "file", None):
        return worldcal.load_calendar_file(args.file)
    return worldcal.preset(args.calendar)


def _parse_hms(s: str):
    from .core.types import TimeOfDay

    if not _HMS_RE.match(s):
        raise argparse.ArgumentTypeError(f"Invalid time {s!r}. Expected HH:MM or HH:MM:SS")
    parts = [int(x) for x in s.split(":")]
    return TimeOfDay(*parts)


def cmd_date(argv: list[str]) -> int:
    import worldcal

    p = argparse.ArgumentParser(prog="worldcal date", description="World time (seconds) -> calendar date")
    p.add_argument("world_time", type=int, help="elapsed world seconds (may be negative)")
    add_calendar_args(p)
    p.add_argument("--debug", action="store_true", help="also print the internal position as JSON")
    args = p.parse_args(argv)

    eng = engine_from_args(args)
    d = eng.world_time_to_date(args.world_time)
    print(worldcal.date_label(eng, d))

    week = eng.get_week_info(d)
    if week is not None:
        print(f"  week     : {week.name}")
    season = eng.get_season(d)
    if season is not None:
        print(f"  season   : {season.name}")
    sun = eng.get_sun_times(d)
    mih = eng.get_calendar().time.minutes_in_hour
    print(f"  sun      : {hours_to_hhmm(sun.sunrise, mih)} - {hours_to_hhmm(sun.sunset, mih)}")
    hour = eng.canonical_hour_for(d)
    if hour is not None:
        print(f"  hour     : {hour.name}")
    for info in eng.get_moon_phase_info(d):
        print(f"  {info.moon.name:<9}: {info.phase.name} (day {info.day_in_phase + 1})")

    if args.debug:
        print(json.dumps(eng.explain(args.world_time), indent=2))
    return 0


def cmd_time(argv: list[str]) -> int:
    import worldcal

    p = argparse.ArgumentParser(prog="worldcal time", description="Calendar date -> world time (seconds)")
    p.add_argument("year", type=int)
    p.add_argument("month", type=int, help="1-based month (for intercalary days: the attached month)")
    p.add_argument("day", type=int)
    p.add_argument("time", nargs="?", type=_parse_hms, default=None, help="HH:MM[:SS]")
    p.add_argument("--intercalary", default=None, help="name of the intercalary span")
    add_calendar_args(p)
    args = p.parse_args(argv)

    eng = engine_from_args(args)
    d = eng.make_date(args.year, args.month, args.day, intercalary=args.intercalary, time=args.time)
    print(eng.date_to_world_time(d))
    return 0


def cmd_presets(argv: list[str]) -> int:
    import worldcal

    p = argparse.ArgumentParser(prog="worldcal presets", description="List built-in calendars")
    p.add_argument("--info", action="store_true", help="print engine info for each preset")
    args = p.parse_args(argv)

    for name in worldcal.list_presets():
        if args.info:
            print(json.dumps(worldcal.engine_info(worldcal.preset(name))))
        else:
            print(name)
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    p = argparse.ArgumentParser(prog="worldcal", description="Calendar arithmetic for fictional worlds.")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    p.add_argument("--log-json", action="store_true", help="log as JSON lines on stderr")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("date", help="World time -> calendar date", add_help=False)
    sub.add_parser("time", help="Calendar date -> world time", add_help=False)
    sub.add_parser("month", help="Print a month grid (diagnostics)", add_help=False)
    sub.add_parser("presets", help="List built-in calendars", add_help=False)

    p_diag = sub.add_parser("diag", help="Diagnostics tools")
    p_diag.add_argument("tool", choices=["round-trip", "year-drift"], help="Which diagnostic to run")

    args, rest = p.parse_known_args(argv)
    configure_logging(verbose=args.verbose, log_json=args.log_json)
    logger.debug("worldcal %s %s", args.cmd, rest)

    try:
        if args.cmd == "date":
            return cmd_date(rest)

        if args.cmd == "time":
            return cmd_time(rest)

        if args.cmd == "presets":
            return cmd_presets(rest)

        if args.cmd == "month":
            return _run_module_main("worldcal.diagnostics.pretty_month", rest)

        if args.cmd == "diag":
            tool_map = {
                "round-trip": "worldcal.diagnostics.round_trip",
                "year-drift": "worldcal.diagnostics.year_drift",
            }
            return _run_module_main(tool_map[args.tool], rest)
    except WorldcalError as e:
        print(f"worldcal: error: {e}", file=sys.stderr)
        return 2

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
