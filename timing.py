"""
Monotonic clock helpers.
Media time is kept in integer *milliseconds* throughout, measured from
an origin the playback controller re-anchors on every play().
"""

import time


def uptime_ms() -> int:
    """
    Milliseconds on a monotonic clock (unaffected by wall-clock jumps).
    Only differences between two readings are meaningful.
    """
    return int(time.monotonic() * 1000)


def media_time(elapsed_ms: int, duration_ms: int, *, loop: bool) -> int:
    """
    Map time elapsed since the media origin onto the media timeline.

    loop=True wraps into [0, duration).  A zero-length media always maps
    to 0.  loop=False returns the elapsed time unchanged, so callers can
    detect the run past the end themselves.
    """
    elapsed_ms = max(0, int(elapsed_ms))
    if not loop:
        return elapsed_ms
    if duration_ms <= 0:
        return 0
    return elapsed_ms % duration_ms


def past_end(rel_ms: int, duration_ms: int) -> bool:
    """True once a single-shot run has gone beyond the last timestamp."""
    return rel_ms > duration_ms
