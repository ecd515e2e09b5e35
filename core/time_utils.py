import time

NANOS_PER_SECOND = 1_000_000_000


def now_ns() -> int:
    """Wall-clock time in nanoseconds since the Unix epoch."""
    return time.time_ns()
