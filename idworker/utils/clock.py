import time


def current_millis() -> int:
    """Returns the current wall-clock time in milliseconds since the Unix epoch."""
    return int(time.time() * 1000)
