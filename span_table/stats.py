"""
stats.py

Derive per-span latency statistics and the dominant parent used to place
each span in the report hierarchy.
"""
import math
from typing import NamedTuple

from span_table.aggregate import ROOT


class ComputedResult(NamedTuple):
    name: str
    calls: int
    total: float
    avg: float
    min: float
    max: float
    p50: float
    p99: float
    avg_wall: float
    p50_wall: float
    p99_wall: float
    parent: str


def percentile(samples, p: float) -> float:
    """Nearest-rank percentile: the sample at floor(p * n), clamped to the last."""
    if not samples:
        return 0
    ordered = sorted(samples)
    idx = math.floor(len(ordered) * p)
    return ordered[min(idx, len(ordered) - 1)]


def dominant_parent(parent_counts: dict) -> str:
    """
    Most frequent immediate parent. On a tie the parent seen first wins,
    since a later parent must have a strictly greater count to replace it.
    """
    best, best_count = ROOT, 0
    for parent, count in parent_counts.items():
        if count > best_count:
            best, best_count = parent, count
    return best


def compute_result(stats) -> ComputedResult:
    busy = stats.busy_samples
    wall = stats.wall_samples
    total = sum(busy)
    return ComputedResult(
        name=stats.name,
        calls=stats.calls,
        total=total,
        avg=total / stats.calls,
        min=min(busy),
        max=max(busy),
        p50=percentile(busy, 0.5),
        p99=percentile(busy, 0.99),
        avg_wall=sum(wall) / stats.calls,
        p50_wall=percentile(wall, 0.5),
        p99_wall=percentile(wall, 0.99),
        parent=dominant_parent(stats.parent_counts),
    )


def compute_results(spans: dict) -> list:
    """Results in aggregation order."""
    return [compute_result(stats) for stats in spans.values()]
