"""Shared fixtures for span-table tests."""
import json

import pytest

from span_table.ingest import Event


def close_record(name, busy="1ms", idle=None, parents=(), **span_fields):
    """A `tracing` JSON close record for span `name`."""
    fields = {"message": "close"}
    if busy is not None:
        fields["time.busy"] = busy
    if idle is not None:
        fields["time.idle"] = idle
    record = {
        "timestamp": "2026-10-19T12:00:00.000000Z",
        "level": "INFO",
        "fields": fields,
        "target": "atuin::search",
        "span": dict(span_fields, name=name),
    }
    if parents:
        record["spans"] = [{"name": p} for p in parents]
    return record


def close_event(name, busy="1ms", idle=None, parents=(), **span_fields):
    return Event(close_record(name, busy, idle, parents, **span_fields))


@pytest.fixture
def write_log(tmp_path):
    """Write records (dicts or raw strings) as a newline-delimited log file."""
    counter = {"n": 0}

    def _write(*records):
        counter["n"] += 1
        path = tmp_path / f"trace{counter['n']}.json"
        lines = [r if isinstance(r, str) else json.dumps(r, ensure_ascii=False) for r in records]
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return str(path)

    return _write
