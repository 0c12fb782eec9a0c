"""
filters.py

Decide which events count toward aggregation, and which span names are
suppressed as transport/framing noise.
"""
import json
import re

from span_table.errors import NoiseConfigError


class NoiseFilter:
    """Denylist of span names hidden unless explicitly requested."""

    def __init__(self, exact=(), prefixes=()):
        self.exact = frozenset(exact)
        self.prefixes = tuple(prefixes)

    def matches(self, name: str) -> bool:
        return name in self.exact or name.startswith(self.prefixes)

    def to_dict(self) -> dict:
        return {"exact": sorted(self.exact), "prefixes": list(self.prefixes)}

    def __eq__(self, other):
        if not isinstance(other, NoiseFilter):
            return NotImplemented
        return self.exact == other.exact and self.prefixes == other.prefixes

    def __repr__(self):
        return f"NoiseFilter(exact={sorted(self.exact)!r}, prefixes={list(self.prefixes)!r})"


DEFAULT_NOISE = NoiseFilter(
    exact=("poll", "poll_ready", "Connection"),
    prefixes=(
        "FramedRead::",
        "FramedWrite::",
        "Prioritize::",
        "assign_",
        "reserve_",
        "try_",
        "send_",
        "pop_",
    ),
)


def load_noise_config(path: str) -> NoiseFilter:
    """
    Load a denylist from a JSON file of the form
    {"exact": [...], "prefixes": [...]}. Missing keys mean an empty list.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as exc:
        raise NoiseConfigError(f"cannot read {path}: {exc}") from exc
    except ValueError as exc:
        raise NoiseConfigError(f"invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise NoiseConfigError(f"{path}: expected a JSON object")
    exact = data.get("exact", [])
    prefixes = data.get("prefixes", [])
    for key, value in (("exact", exact), ("prefixes", prefixes)):
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise NoiseConfigError(f"{path}: {key!r} must be a list of strings")
    return NoiseFilter(exact=exact, prefixes=prefixes)


def is_close_event(event) -> bool:
    """A close event with a span name and a busy duration."""
    return event.message == "close" and bool(event.name) and bool(event.busy)


class Selection:
    """
    The eligibility policy for one run: an optional name pattern plus the
    noise denylist, which only applies when nothing was asked for by name.
    """

    def __init__(self, pattern=None, show_all=False, detail=None, noise=DEFAULT_NOISE):
        if isinstance(pattern, str):
            pattern = re.compile(pattern)
        self.pattern = pattern
        self.show_all = show_all
        self.detail = detail
        self.noise = noise

    @property
    def suppress_noise(self) -> bool:
        return not (self.show_all or self.pattern is not None or self.detail is not None)

    def accepts_name(self, name: str) -> bool:
        if self.pattern is not None and not self.pattern.search(name):
            return False
        if self.suppress_noise and self.noise.matches(name):
            return False
        return True

    def accepts(self, event) -> bool:
        return is_close_event(event) and self.accepts_name(event.name)
