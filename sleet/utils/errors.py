"""Errors tailored for this project.

This module provides:
- InvalidConfigurationError: An error if a generator is built with ids or settings out of range
- ClockRolledBackError: An error if the clock went backwards since the last ID
- TimestampOutOfRangeError: An error if the clock doesn't fit the 41-bit timestamp field
- MalformedAddressError: An error if an IPv4 address can't be turned into an integer
"""


class InvalidConfigurationError(ValueError):
    """A data center id, machine id, or another setting is out of range."""


class ClockRolledBackError(RuntimeError):
    """The clock reported a time earlier than the last issued ID. Refusing to generate one."""

    def __init__(self, last_timestamp: int, timestamp: int):
        self.last_timestamp = last_timestamp
        self.timestamp = timestamp
        super().__init__(
            f"Clock moved backwards by {last_timestamp - timestamp}ms. Refusing to generate id"
        )


class TimestampOutOfRangeError(OverflowError):
    """The current time is before the epoch or past what 41 bits can hold."""


class MalformedAddressError(ValueError):
    """An address is empty or isn't four dot-separated numbers from 0 to 255."""
