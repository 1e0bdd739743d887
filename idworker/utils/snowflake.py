"""
Snowflake ID Generator Module

A Python implementation of Twitter's Snowflake algorithm for generating unique,
distributed, and time-ordered 64-bit identifiers. Each generator instance is
identified by a (datacenter id, worker id) pair handed to it from outside; as
long as no two running instances share a pair, they never mint the same ID.

Algorithm Overview:
    The Snowflake algorithm generates 64-bit IDs with the following structure:

    |1 bit|         41 bits          |   5 bits   |  5 bits   |  12 bits  |
    |sign |        timestamp         | datacenter |  worker   | sequence  |
    | 0   | ms since custom epoch    |    0-31    |   0-31    |  0-4095   |

    - Sign bit: Always 0 (positive number)
    - Timestamp: 41 bits = ~69 years of milliseconds from CUSTOM_EPOCH
    - Datacenter ID: 5 bits = 32 datacenters
    - Worker ID: 5 bits = 32 workers per datacenter
    - Sequence: 12 bits = 4096 IDs per millisecond per generator

Thread Safety:
    - Uses threading.Lock() around the whole mint operation
    - Two threads sharing one generator never observe the same sequence value

Clock Considerations:
    - Same-millisecond calls are told apart by the sequence counter
    - When the counter wraps, the generator spins on the time source until the
      next millisecond; there is no timeout
    - Backwards clock movement is refused with ClockMovedBackwardsError and left
      to the caller to handle

Based on: Twitter's Snowflake algorithm
"""

import sys
import threading
from datetime import datetime, timezone
from typing import Callable, NamedTuple, Optional

from idworker.core.exceptions import (
    ClockMovedBackwardsError,
    InvalidIdentityError,
    PlatformUnsupportedError,
)
from idworker.utils.clock import current_millis

WORKER_ID_BITS = 5
DATACENTER_ID_BITS = 5
SEQUENCE_BITS = 12
TIMESTAMP_BITS = 41

# Must never change once IDs have been issued.
CUSTOM_EPOCH = 1288834974657

MAX_WORKER_ID = -1 ^ (-1 << WORKER_ID_BITS)
MAX_DATACENTER_ID = -1 ^ (-1 << DATACENTER_ID_BITS)
MAX_TIMESTAMP = -1 ^ (-1 << TIMESTAMP_BITS)
SEQUENCE_MASK = -1 ^ (-1 << SEQUENCE_BITS)

WORKER_ID_SHIFT = SEQUENCE_BITS
DATACENTER_ID_SHIFT = SEQUENCE_BITS + WORKER_ID_BITS
TIMESTAMP_LEFT_SHIFT = SEQUENCE_BITS + WORKER_ID_BITS + DATACENTER_ID_BITS

ID_BITS = TIMESTAMP_LEFT_SHIFT + TIMESTAMP_BITS

# Width of the interpreter's native signed integer, sign bit included.
NATIVE_INT_BITS = sys.maxsize.bit_length() + 1


class SnowflakeParts(NamedTuple):
    """The fields packed into a Snowflake ID.

    Attributes:
        timestamp: Milliseconds since the Unix epoch (CUSTOM_EPOCH added back).
        datacenter_id: The datacenter the ID was minted in.
        worker_id: The worker that minted the ID.
        sequence: Position of the ID within its millisecond.
    """

    timestamp: int
    datacenter_id: int
    worker_id: int
    sequence: int

    @property
    def created_at(self) -> datetime:
        return datetime.fromtimestamp(self.timestamp / 1000, tz=timezone.utc)


def parse_id(snowflake_id: int) -> SnowflakeParts:
    """Splits a Snowflake ID back into its fields.

    Args:
        snowflake_id: An ID produced by IdGenerator.next_id().

    Returns:
        The decoded SnowflakeParts.

    Raises:
        ValueError: If the value is negative or wider than 63 bits.
    """
    if snowflake_id < 0 or snowflake_id.bit_length() > ID_BITS:
        raise ValueError(f"{snowflake_id} is not a valid Snowflake ID")

    return SnowflakeParts(
        timestamp=(snowflake_id >> TIMESTAMP_LEFT_SHIFT) + CUSTOM_EPOCH,
        datacenter_id=(snowflake_id >> DATACENTER_ID_SHIFT) & MAX_DATACENTER_ID,
        worker_id=(snowflake_id >> WORKER_ID_SHIFT) & MAX_WORKER_ID,
        sequence=snowflake_id & SEQUENCE_MASK,
    )


def timestamp_of(snowflake_id: int) -> int:
    """Returns the Unix millisecond timestamp embedded in a Snowflake ID."""
    return parse_id(snowflake_id).timestamp


def _validate_identity(name: str, value: int, max_value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidIdentityError(f"{name} must be an integer, got {value!r}")
    if value > max_value or value < 0:
        raise InvalidIdentityError(
            f"{name} can't be greater than {max_value} or less than 0"
        )
    return value


class IdGenerator:
    """A thread-safe Snowflake ID generator for creating unique identifiers.

    Attributes:
        worker_id: The worker ID of this generator instance (0-31).
        datacenter_id: The datacenter ID of this generator instance (0-31).
        sequence: The current value of the per-millisecond counter.
        last_timestamp: The millisecond of the last issued ID, -1 before the first.
    """

    def __init__(
        self,
        worker_id: int,
        datacenter_id: int,
        sequence: int = 0,
        time_source: Optional[Callable[[], int]] = None,
    ):
        """Initializes a new Snowflake ID generator instance.

        Args:
            worker_id: A unique worker identifier within the datacenter (0-31).
            datacenter_id: The datacenter identifier (0-31).
            sequence: Seed for the sequence counter. Masked to 12 bits on use.
            time_source: Zero-argument callable returning Unix milliseconds.
                Defaults to the system wall clock.

        Raises:
            InvalidIdentityError: If either ID is outside its valid range.
        """
        self._worker_id = _validate_identity("worker id", worker_id, MAX_WORKER_ID)
        self._datacenter_id = _validate_identity(
            "datacenter id", datacenter_id, MAX_DATACENTER_ID
        )
        self._sequence = sequence
        self._last_timestamp = -1
        self._time_source = time_source or current_millis
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(worker_id={self._worker_id}, "
            f"datacenter_id={self._datacenter_id})"
        )

    @property
    def worker_id(self) -> int:
        return self._worker_id

    @property
    def datacenter_id(self) -> int:
        return self._datacenter_id

    @property
    def sequence(self) -> int:
        return self._sequence

    @property
    def last_timestamp(self) -> int:
        return self._last_timestamp

    def get_worker_id(self) -> int:
        return self._worker_id

    def get_datacenter_id(self) -> int:
        return self._datacenter_id

    def get_sequence(self) -> int:
        return self._sequence

    parse = staticmethod(parse_id)

    def _wait_for_next_millis(self, last_timestamp: int) -> int:
        """Spins on the time source until it passes last_timestamp.

        Args:
            last_timestamp: The timestamp of the last generated ID.

        Returns:
            The next millisecond timestamp.
        """
        timestamp = self._time_source()
        while timestamp <= last_timestamp:
            timestamp = self._time_source()
        return timestamp

    def next_id(self) -> int:
        """Generates a new unique Snowflake ID.

        Returns:
            A positive integer that fits in 63 bits.

        Raises:
            ClockMovedBackwardsError: If the time source reports a time earlier
                than the last issued ID. No ID is issued and the state is kept.
            PlatformUnsupportedError: If the interpreter has no native 64-bit
                integers.
            OverflowError: If the timestamp no longer fits in 41 bits.
        """
        if NATIVE_INT_BITS < 64:
            raise PlatformUnsupportedError(
                f"Snowflake IDs need 64-bit integers, this platform has {NATIVE_INT_BITS}"
            )

        with self._lock:
            timestamp = self._time_source()

            if timestamp < self._last_timestamp:
                raise ClockMovedBackwardsError(self._last_timestamp - timestamp)

            if timestamp == self._last_timestamp:
                self._sequence = (self._sequence + 1) & SEQUENCE_MASK
                # sequence rollover, wait til next millisecond
                if self._sequence == 0:
                    timestamp = self._wait_for_next_millis(self._last_timestamp)
            else:
                self._sequence = 0

            self._last_timestamp = timestamp

            elapsed = timestamp - CUSTOM_EPOCH
            if elapsed > MAX_TIMESTAMP:
                raise OverflowError("Timestamp no longer fits in 41 bits")

            return (
                (elapsed << TIMESTAMP_LEFT_SHIFT)
                | (self._datacenter_id << DATACENTER_ID_SHIFT)
                | (self._worker_id << WORKER_ID_SHIFT)
                | self._sequence
            )
