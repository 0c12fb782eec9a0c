"""
ingest.py

Load newline-delimited JSON records emitted by a `tracing` JSON subscriber
and wrap each one in an `Event`.

Lines that are not valid JSON objects are skipped: capture logs are often
truncated or interleaved with plain text output.
"""
import json
import logging
import sys

logger = logging.getLogger(__name__)


class Event:
    """One parsed log record."""

    def __init__(self, record: dict):
        fields = record.get("fields")
        if not isinstance(fields, dict):
            fields = {}
        span = record.get("span")
        ancestors = record.get("spans")

        self.timestamp = record.get("timestamp")
        self.level = record.get("level")
        self.target = record.get("target")
        self.message = fields.get("message")
        self.busy = fields.get("time.busy")
        self.idle = fields.get("time.idle")
        self.span = span if isinstance(span, dict) else None
        self.ancestors = ancestors if isinstance(ancestors, list) else []

    @property
    def name(self):
        if self.span is None:
            return None
        name = self.span.get("name")
        return name if isinstance(name, str) else None

    @property
    def span_fields(self) -> dict:
        """Span descriptor fields other than its name."""
        if self.span is None:
            return {}
        return {k: v for k, v in self.span.items() if k != "name"}

    @property
    def parent_names(self) -> list:
        """Ancestor span names, outermost first."""
        names = []
        for ancestor in self.ancestors:
            name = ancestor.get("name") if isinstance(ancestor, dict) else None
            names.append(name if isinstance(name, str) else None)
        return names

    @property
    def parent(self):
        """Immediate parent span name, or None at the root."""
        if not self.ancestors:
            return None
        return self.parent_names[-1]

    def __repr__(self):
        return f"Event(message={self.message!r}, name={self.name!r})"


def parse_line(line: str):
    """Parse a single line, returning None when it is not a JSON object."""
    try:
        record = json.loads(line)
    except ValueError:
        return None
    if not isinstance(record, dict):
        return None
    return Event(record)


def parse_json_lines(content: str) -> list:
    events = []
    # JSON strings may hold raw U+2028 and friends, so only "\n" ends a record
    for line in content.split("\n"):
        if not line.strip():
            continue
        event = parse_line(line)
        if event is not None:
            events.append(event)
    return events


def _read_source(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        return f.read()


def load_events(paths) -> list:
    """
    Read every source in order and concatenate their events.
    Raises OSError if any source cannot be read.
    """
    events = []
    for path in paths:
        content = _read_source(path)
        parsed = parse_json_lines(content)
        logger.debug("loaded %d events from %s", len(parsed), path)
        events.extend(parsed)
    return events
