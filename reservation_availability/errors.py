"""
Error taxonomy for the availability engine.

Per-slot and per-booking problems are isolated by the engine (logged and skipped);
only StoreError is meant to reach the caller.
"""


class AvailabilityError(Exception):
    """Base class for availability engine errors."""


class MalformedTime(AvailabilityError, ValueError):
    """A time string in schedule or booking data could not be parsed."""

    def __init__(self, value: str, reason: str = "unparseable time"):
        self.value = value
        self.reason = reason
        super().__init__(f"{reason}: {value!r}")


class MalformedSchedule(AvailabilityError):
    """An open day template that cannot produce any slots."""


class StoreError(AvailabilityError):
    """The availability or booking store could not be read."""
