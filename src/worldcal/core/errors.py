class WorldcalError(Exception):
    """Base error."""

class UnknownCalendarError(WorldcalError, KeyError):
    """Raised when a preset or registered engine name is not known."""

    def __str__(self) -> str:
        # KeyError would repr() the message
        return str(self.args[0]) if self.args else ""

class CalendarLoadError(WorldcalError):
    """Raised when a calendar document cannot be read or decoded."""
