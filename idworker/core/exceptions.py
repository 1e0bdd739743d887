class IdWorkerError(Exception):
    """Base class for errors raised while minting Snowflake IDs."""

    pass


class InvalidIdentityError(IdWorkerError, ValueError):
    """Raised when a worker or datacenter id falls outside its bit range."""

    pass


class ClockMovedBackwardsError(IdWorkerError):
    """Raised when the time source reports a time before the last issued ID.

    Attributes:
        offset_ms: How far, in milliseconds, the clock moved backwards.
    """

    def __init__(self, offset_ms: int):
        self.offset_ms = offset_ms
        super().__init__(
            f"Clock moved backwards. Refusing to generate id for {offset_ms} milliseconds"
        )


class PlatformUnsupportedError(IdWorkerError):
    """Raised when the interpreter cannot hold a 64-bit integer natively."""

    pass
