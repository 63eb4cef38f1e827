"""Exception types for TradeJournal."""


class JournalError(Exception):
    """Base class for all journal errors."""


class ParseError(JournalError, ValueError):
    """An input could not be parsed as a finite number."""

    def __init__(self, value: object, field: str = "value"):
        self.value = value
        self.field = field
        super().__init__(f"Cannot parse {field} {value!r} as a finite number")


class WriteError(JournalError):
    """The store rejected a write or delete."""


class ReadError(JournalError):
    """The store could not be read."""
