"""
durations.py

Convert `time.busy` / `time.idle` tokens such as "1.2ms" or "450µs" to
microseconds, and microseconds back to human-friendly text.
"""
import re

_DURATION_RE = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|µs|us|ms|s)")


def parse_duration(text: str) -> float:
    """Parse a duration token to microseconds. Unrecognised text yields 0."""
    if not isinstance(text, str):
        return 0
    match = _DURATION_RE.fullmatch(text)
    if not match:
        return 0
    value = float(match.group(1))
    unit = match.group(2)
    if unit == "ns":
        return value / 1_000
    elif unit == "ms":
        return value * 1_000
    elif unit == "s":
        return value * 1_000_000
    # µs / us
    return value


def format_duration(us: float) -> str:
    """Convert microseconds to a human-friendly string."""
    if us < 1:
        return f"{us * 1_000:.0f}ns"
    elif us < 1_000:
        return f"{us:.2f}µs"
    elif us < 1_000_000:
        return f"{us / 1_000:.2f}ms"
    else:
        return f"{us / 1_000_000:.2f}s"
