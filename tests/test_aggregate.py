from span_table.aggregate import ROOT, CallSample, aggregate
from span_table.filters import Selection
from span_table.ingest import Event
from tests.conftest import close_event, close_record


def test_aggregate_groups_by_name_in_first_seen_order():
    events = [
        close_event("b", busy="2ms"),
        close_event("a", busy="1ms"),
        close_event("b", busy="3ms"),
    ]
    spans = aggregate(events, Selection())

    assert list(spans) == ["b", "a"]
    assert spans["b"].calls == 2
    assert spans["b"].busy_samples == [2000, 3000]
    assert spans["a"].calls == 1


def test_aggregate_pairs_busy_and_idle_per_call():
    events = [
        close_event("q", busy="100µs", idle="50µs"),
        close_event("q", busy="200µs"),
        close_event("q", busy="300µs", idle="10µs"),
    ]
    stats = aggregate(events, Selection())["q"]

    assert stats.samples == [CallSample(100, 50), CallSample(200, None), CallSample(300, 10)]
    assert stats.idle_samples == [50, 10]
    assert stats.wall_samples == [150, 200, 310]


def test_aggregate_tallies_immediate_parents():
    events = [
        close_event("hydrate", parents=["search"]),
        close_event("hydrate", parents=["outer", "sync"]),
        close_event("hydrate"),
        close_event("hydrate", parents=["search"]),
    ]
    stats = aggregate(events, Selection())["hydrate"]

    assert stats.parent_counts == {"search": 2, "sync": 1, ROOT: 1}
    assert list(stats.parent_counts) == ["search", "sync", ROOT]


def test_aggregate_skips_ineligible_and_filtered_events():
    not_close = close_record("a")
    not_close["fields"]["message"] = "enter"
    events = [
        Event(not_close),
        close_event("a", busy=None),
        close_event("poll"),
        close_event("a"),
    ]
    spans = aggregate(events, Selection())

    assert list(spans) == ["a"]
    assert spans["a"].calls == 1


def test_aggregate_empty_result():
    assert aggregate([close_event("poll")], Selection()) == {}
    assert aggregate([], Selection()) == {}


def test_aggregate_unhashable_parent_name_counts_as_root():
    record = close_record("hydrate")
    record["spans"] = [{"name": ["weird"]}]
    spans = aggregate([Event(record), close_event("hydrate", parents=["search"])], Selection())

    assert spans["hydrate"].parent_counts == {ROOT: 1, "search": 1}
