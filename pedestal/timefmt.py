"""Human readable durations."""

from __future__ import annotations

# Seconds from the Unix epoch to 0001-01-01T00:00:00Z, the zero time value.
_ZERO_TIME = -62135596800


def time_spent(start: int, stop: int) -> str:
    """Elapsed time between two Unix timestamps, as hours, minutes and seconds."""
    if start == _ZERO_TIME or stop == _ZERO_TIME:
        return ""
    if start > stop:
        start, stop = stop, start
    duration = stop - start
    hours = duration // 3600
    minutes = (duration // 60) % 60
    seconds = duration % 60

    parts = []
    if hours > 0:
        parts.append(f"{hours}时")
    if minutes > 0:
        parts.append(f"{minutes}分")
    if seconds > 0 or not parts:
        parts.append(f"{seconds}秒")
    return "".join(parts)