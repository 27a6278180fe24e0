"""
Duration formatting and millisecond value checks.
"""

import math

_UNITS = (
    ("d", 24 * 60 * 60 * 1000),
    ("h", 60 * 60 * 1000),
    ("m", 60 * 1000),
    ("s", 1000),
)


def as_milliseconds(value) -> int:
    """
    Coerce a stored time value to int milliseconds.

    Anything that is not a finite number (strings, None, booleans, NaN,
    infinities) counts as 0.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    if isinstance(value, float) and not math.isfinite(value):
        return 0
    return int(value)


def ms_to_string(ms: int, include_seconds: bool = False) -> str:
    """
    Render milliseconds as a compact duration, e.g. "1h 30m".

    Seconds are only shown when ``include_seconds`` is set or when the
    duration is shorter than a minute.
    """
    remaining = max(int(ms or 0), 0)
    parts = []
    for unit, size in _UNITS:
        if unit == "s" and parts and not include_seconds:
            break
        amount, remaining = divmod(remaining, size)
        if amount:
            parts.append(f"{amount}{unit}")

    return " ".join(parts) if parts else "0s"
