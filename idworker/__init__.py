from idworker.core.exceptions import (
    ClockMovedBackwardsError,
    IdWorkerError,
    InvalidIdentityError,
    PlatformUnsupportedError,
)
from idworker.utils.snowflake import (
    CUSTOM_EPOCH,
    DATACENTER_ID_BITS,
    SEQUENCE_BITS,
    WORKER_ID_BITS,
    IdGenerator,
    SnowflakeParts,
    parse_id,
    timestamp_of,
)

__all__ = [
    "CUSTOM_EPOCH",
    "DATACENTER_ID_BITS",
    "SEQUENCE_BITS",
    "WORKER_ID_BITS",
    "ClockMovedBackwardsError",
    "IdGenerator",
    "IdWorkerError",
    "InvalidIdentityError",
    "PlatformUnsupportedError",
    "SnowflakeParts",
    "parse_id",
    "timestamp_of",
]
