"""
worldcal.config.logging
-----------------------
structlog setup for the command-line tools.

Library modules only ever call ``logging.getLogger(__name__)``; nothing is
configured until a CLI entry point calls ``configure_logging``. Output goes to
stderr so that stdout stays clean for dates and tables:
- console (default): key/value lines, colored on a TTY
- JSON (--log-json): one JSON object per record

Fallback warnings from an engine's ``OnceLogger`` carry a ``cause`` attribute
(e.g. ``month-out-of-range:14``); it is lifted into the rendered record so
repeated runs can be grepped or grouped by cause.
"""

from __future__ import annotations

import logging
import sys

import structlog

PACKAGE_LOGGER = "worldcal"
FALLBACK_FIELDS = ("cause",)

# Third-party loggers pulled in by the diagnostics; kept at WARNING even with -v.
QUIET_LOGGERS = ("matplotlib", "PIL")


def _shared_processors(log_json: bool) -> list[structlog.types.Processor]:
    procs: list[structlog.types.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.ExtraAdder(allow=FALLBACK_FIELDS),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if log_json:
        procs.append(structlog.processors.format_exc_info)
    return procs


def _stderr_handler(shared: list[structlog.types.Processor], log_json: bool) -> logging.Handler:
    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer(sort_keys=True)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    return handler


def route_package_loggers(level: int) -> None:
    """``worldcal.*`` at ``level``; noisy dependencies stay at WARNING."""
    logging.getLogger(PACKAGE_LOGGER).setLevel(level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    shared = _shared_processors(log_json)

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(_stderr_handler(shared, log_json))
    root.setLevel(logging.WARNING)

    route_package_loggers(logging.DEBUG if verbose else logging.WARNING)
