"""
aggregate.py

Group eligible close events by span name into running statistics.
"""
import logging

from span_table.durations import parse_duration

logger = logging.getLogger(__name__)

# Parent tally key for spans recorded with no ancestors.
ROOT = "__root__"


class CallSample:
    """Busy and idle time (microseconds) of one call. `idle` is None when absent."""

    __slots__ = ("busy", "idle")

    def __init__(self, busy: float, idle=None):
        self.busy = busy
        self.idle = idle

    @property
    def wall(self) -> float:
        return self.busy + (self.idle or 0)

    def __eq__(self, other):
        if not isinstance(other, CallSample):
            return NotImplemented
        return (self.busy, self.idle) == (other.busy, other.idle)

    def __repr__(self):
        return f"CallSample(busy={self.busy!r}, idle={self.idle!r})"


class SpanStats:
    def __init__(self, name: str):
        self.name = name
        self.calls = 0
        self.samples = []
        # parent name -> occurrences, in first-seen order
        self.parent_counts = {}

    def record(self, busy: float, idle=None, parent=ROOT):
        self.calls += 1
        self.samples.append(CallSample(busy, idle))
        self.parent_counts[parent] = self.parent_counts.get(parent, 0) + 1

    @property
    def busy_samples(self) -> list:
        return [s.busy for s in self.samples]

    @property
    def idle_samples(self) -> list:
        """Idle times of the calls that reported one."""
        return [s.idle for s in self.samples if s.idle is not None]

    @property
    def wall_samples(self) -> list:
        return [s.wall for s in self.samples]

    def __repr__(self):
        return f"SpanStats(name={self.name!r}, calls={self.calls})"


def aggregate(events, selection) -> dict:
    """
    Build one SpanStats per span name from the events `selection` accepts.
    The returned dict keeps first-seen order; it is empty when nothing matched.
    """
    spans = {}
    for event in events:
        if not selection.accepts(event):
            continue
        name = event.name
        stats = spans.get(name)
        if stats is None:
            stats = spans[name] = SpanStats(name)
        idle = parse_duration(event.idle) if event.idle else None
        stats.record(
            parse_duration(event.busy),
            idle,
            parent=event.parent or ROOT,
        )
    logger.debug("aggregated %d span names", len(spans))
    return spans
