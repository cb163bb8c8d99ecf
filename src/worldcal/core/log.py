from __future__ import annotations

import logging
from typing import Any, Hashable, Set


def cause_label(key: Hashable) -> str:
    """``("month-out-of-range", 14)`` -> ``"month-out-of-range:14"``."""
    if isinstance(key, tuple):
        return ":".join(str(k) for k in key)
    return str(key)


class OnceLogger:
    """
    Wraps a stdlib logger so that each distinct cause is reported only once.

    The cause key is chosen by the caller (e.g. ``("month-out-of-range", 14)``);
    repeated fallbacks in a UI update loop therefore never flood the log.
    """

    def __init__(self, logger: logging.Logger):
        self._logger = logger
        self._seen: Set[Hashable] = set()

    def _emit(self, level: int, key: Hashable, msg: str, *args: Any) -> bool:
        if key in self._seen:
            return False
        self._seen.add(key)
        self._logger.log(level, msg, *args, extra={"cause": cause_label(key)})
        return True

    def warning(self, key: Hashable, msg: str, *args: Any) -> bool:
        return self._emit(logging.WARNING, key, msg, *args)

    def reset(self) -> None:
        self._seen.clear()
