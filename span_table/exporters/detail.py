"""
detail.py

Drill-down report listing every call of a single span name.
"""
import json
from typing import NamedTuple

from span_table.durations import format_duration, parse_duration
from span_table.errors import EmptyResultError
from span_table.filters import is_close_event
from span_table.stats import percentile

RULE_WIDTH = 110


class DetailCall(NamedTuple):
    timestamp: str
    busy: float
    idle: float
    fields: dict
    parents: list

    @property
    def wall(self) -> float:
        return self.busy + self.idle


def collect_detail(events, name: str) -> list:
    """
    Every close event for `name`, in arrival order. The noise denylist and
    name pattern do not apply here since the span was asked for by name.
    """
    calls = []
    for event in events:
        if not is_close_event(event) or event.name != name:
            continue
        calls.append(
            DetailCall(
                timestamp=event.timestamp,
                busy=parse_duration(event.busy),
                idle=parse_duration(event.idle) if event.idle else 0,
                fields=event.span_fields,
                parents=event.parent_names,
            )
        )
    if not calls:
        raise EmptyResultError(f'No events found for span "{name}"')
    return calls


def _summary(label: str, samples: list) -> str:
    avg = sum(samples) / len(samples)
    return (
        f"  {label}: avg={format_duration(avg)}, "
        f"min={format_duration(min(samples))}, "
        f"max={format_duration(max(samples))}, "
        f"p50={format_duration(percentile(samples, 0.5))}, "
        f"p99={format_duration(percentile(samples, 0.99))}"
    )


def render_detail(name: str, calls: list) -> list:
    lines = [
        "",
        f"Individual calls for: {name}",
        "-" * RULE_WIDTH,
        "#".rjust(4) + "Wall".rjust(12) + "Busy".rjust(12) + "Idle".rjust(12) + "  Fields",
        "-" * RULE_WIDTH,
    ]
    for idx, call in enumerate(calls, start=1):
        fields = json.dumps(call.fields, separators=(",", ":"), ensure_ascii=False, default=str) if call.fields else ""
        lines.append(
            str(idx).rjust(4)
            + format_duration(call.wall).rjust(12)
            + format_duration(call.busy).rjust(12)
            + format_duration(call.idle).rjust(12)
            + "  "
            + fields
        )
    lines.append("")
    lines.append(f"Summary: {len(calls)} calls")
    lines.append(_summary("Wall", [c.wall for c in calls]))
    lines.append(_summary("Busy", [c.busy for c in calls]))
    return lines
