"""A module for handling unique ID generation.

This module provides:
- IdGenerator: a class that spits out unique, time-ordered 64-bit IDs
- IdParts: a named tuple of the fields packed into an ID
- decompose_id: a function to unpack an ID into its fields
"""

import logging
from collections.abc import Callable, Iterator
from math import isfinite
from threading import Lock
from time import sleep, time
from typing import NamedTuple

from .constants import (
    DATA_CENTER_SHIFT,
    EPOCH,
    MACHINE_SHIFT,
    MAX_DATA_CENTER_ID,
    MAX_MACHINE_ID,
    MAX_SEQUENCE,
    MAX_TIMESTAMP,
    TIMESTAMP_SHIFT,
)
from .utils.errors import ClockRolledBackError, InvalidConfigurationError, TimestampOutOfRangeError
from .utils.network import resolve_default_data_center

logger = logging.getLogger(__name__)


def current_millis() -> int:
    """Returns the wall clock in milliseconds since the Unix epoch."""
    return int(time() * 1000)


class IdParts(NamedTuple):
    """The fields of an ID. ``timestamp`` is absolute, in milliseconds since the Unix epoch."""

    timestamp: int
    data_center_id: int
    machine_id: int
    sequence: int


def decompose_id(snowflake_id: int, epoch: int = EPOCH) -> IdParts:
    """Unpacks an ID into its fields.

    Args:
        snowflake_id (int): An ID made by an ``IdGenerator``
        epoch (int): The epoch the ID was made with

    Returns:
        IdParts: The timestamp, data center id, machine id and sequence

    Raises:
        ValueError: If the ID is negative or wider than 63 bits
    """
    if snowflake_id < 0 or snowflake_id >> (TIMESTAMP_SHIFT + MAX_TIMESTAMP.bit_length()):
        raise ValueError(f"Not a valid ID: {snowflake_id}")
    return IdParts(
        timestamp=(snowflake_id >> TIMESTAMP_SHIFT) + epoch,
        data_center_id=(snowflake_id >> DATA_CENTER_SHIFT) & MAX_DATA_CENTER_ID,
        machine_id=(snowflake_id >> MACHINE_SHIFT) & MAX_MACHINE_ID,
        sequence=snowflake_id & MAX_SEQUENCE,
    )


def _check_id(name: str, value, maximum: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidConfigurationError(f"{name} must be an integer, got {value!r}")
    if not 0 <= value <= maximum:
        raise InvalidConfigurationError(f"{name} must be between 0 and {maximum}, got {value}")


class IdGenerator:
    """A class that spits out unique IDs.

    One instance per worker. Each concurrently running instance needs its own
    ``(data_center_id, machine_id)`` pair, instances share nothing.
    """

    def __init__(
            self,
            data_center_id: int,
            machine_id: int,
            *,
            epoch: int = EPOCH,
            clock: Callable[[], int] | None = None,
            backoff: float = 0.0
    ):
        """Validates the worker identity and sets reference variables for enforcing uniqueness.

        Args:
            data_center_id (int): The data center this worker runs in, 0 to 31
            machine_id (int): This worker within its data center, 0 to 31
            epoch (int): Milliseconds since the Unix epoch that timestamps are counted from
            clock (Callable[[], int] | None): Returns the current time in milliseconds.
                Defaults to the wall clock
            backoff (float): Seconds to sleep between clock reads when a millisecond runs out of
                sequence numbers. 0 spins without sleeping

        Raises:
            InvalidConfigurationError: If any argument is out of range
        """
        _check_id("data_center_id", data_center_id, MAX_DATA_CENTER_ID)
        _check_id("machine_id", machine_id, MAX_MACHINE_ID)
        if isinstance(epoch, bool) or not isinstance(epoch, int) or epoch < 0:
            raise InvalidConfigurationError(f"epoch must be a non-negative integer, got {epoch!r}")
        if (
                isinstance(backoff, bool)
                or not isinstance(backoff, (int, float))
                or not isfinite(backoff)
                or backoff < 0
        ):
            raise InvalidConfigurationError(
                f"backoff must be a finite non-negative number, got {backoff!r}"
            )
        self._data_center_id = data_center_id
        self._machine_id = machine_id
        self.epoch = epoch
        self.clock = clock or current_millis
        self.backoff = backoff
        self.sequence = 0
        self.last_timestamp = -1
        self.lock = Lock()

    @classmethod
    def for_machine(
            cls,
            machine_id: int,
            resolver: Callable[[], int] = resolve_default_data_center,
            **kwargs
    ) -> "IdGenerator":
        """Builds a generator whose data center id is derived by ``resolver``.

        The default resolver maps the local address onto a data center id and may
        fall back to a random one, see ``sleet.utils.network``.
        """
        data_center_id = resolver()
        logger.info(f"Derived data center id {data_center_id} for machine {machine_id}")
        return cls(data_center_id, machine_id, **kwargs)

    @property
    def data_center_id(self) -> int:
        return self._data_center_id

    @property
    def machine_id(self) -> int:
        return self._machine_id

    def generate_id(self) -> int:
        """Generates a 64-bit Snowflake ID.

        Blocks while another call holds the lock, and when 4096 IDs were already
        issued this millisecond, until the clock moves on.

        Returns:
            int: The ID

        Raises:
            ClockRolledBackError: If the clock is behind the last issued ID
            TimestampOutOfRangeError: If the clock is before the epoch or too far past it
        """
        with self.lock:
            timestamp = self.clock()
            if timestamp < self.last_timestamp:
                logger.warning(
                    f"Clock moved backwards from {self.last_timestamp} to {timestamp}, refusing to generate id"
                )
                raise ClockRolledBackError(self.last_timestamp, timestamp)
            if timestamp == self.last_timestamp:
                sequence = (self.sequence + 1) & MAX_SEQUENCE
                if sequence == 0:
                    logger.debug(f"Sequence exhausted at {timestamp}, waiting for the next millisecond")
                    timestamp = self._wait_next_millis()
            else:
                sequence = 0
            offset = timestamp - self.epoch
            if not 0 <= offset <= MAX_TIMESTAMP:
                raise TimestampOutOfRangeError(
                    f"Timestamp {timestamp} is outside the 41-bit range of epoch {self.epoch}"
                )
            self.sequence = sequence
            self.last_timestamp = timestamp
            return (
                (offset << TIMESTAMP_SHIFT)
                | (self._data_center_id << DATA_CENTER_SHIFT)
                | (self._machine_id << MACHINE_SHIFT)
                | sequence
            )

    def _wait_next_millis(self) -> int:
        timestamp = self.clock()
        while timestamp <= self.last_timestamp:
            if self.backoff:
                sleep(self.backoff)
            timestamp = self.clock()
        return timestamp

    def decompose(self, snowflake_id: int) -> IdParts:
        """Unpacks an ID made with this generator's epoch."""
        return decompose_id(snowflake_id, self.epoch)

    def __iter__(self) -> Iterator[int]:
        return self

    def __next__(self) -> int:
        return self.generate_id()

    def __repr__(self) -> str:
        return f"IdGenerator(data_center_id={self._data_center_id}, machine_id={self._machine_id})"
