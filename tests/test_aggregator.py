"""Tests for the aggregator (filter -> entry -> store)."""

from datetime import datetime

from logspace.aggregator import Aggregator
from logspace.config import Config
from logspace.filter import EventFilter
from logspace.models import RawEvent
from logspace.severity import EventKind, Severity
from logspace.store import RetentionStore

_NOW = datetime(2025, 5, 14, 10, 23, 45)


def _make(categories=None, minimum=Severity.INFO, capacity=100):
    config = Config(
        categories=frozenset(categories) if categories is not None else None,
        minimum_severity=minimum,
        general_capacity=capacity,
    )
    store = RetentionStore(capacity)
    return Aggregator(EventFilter(config), store, clock=lambda: _NOW), store


class TestAggregator:
    def test_accepted_event_is_recorded(self):
        agg, store = _make({"Gameplay"})
        entry = agg.handle(RawEvent(EventKind.LOG, "[Gameplay] hello"))

        assert entry.timestamp == _NOW
        assert entry.severity == Severity.INFO
        assert entry.category == "Gameplay"
        assert entry.message == "hello"
        assert store.counts() == (0, 1)
        assert agg.accepted == 1

    def test_rejected_event_has_no_side_effect(self):
        agg, store = _make({"Gameplay"})
        assert agg.handle(RawEvent(EventKind.LOG, "[Other] hi")) is None
        assert agg.handle(RawEvent(EventKind.LOG, "plain text")) is None
        assert store.counts() == (0, 0)
        assert agg.rejected == 2

    def test_error_routed_to_error_partition(self):
        agg, store = _make({"System"}, capacity=1)
        agg.handle(RawEvent(EventKind.LOG, "[System] fill"))
        entry = agg.handle(RawEvent(EventKind.ERROR, "[System] crash", "at main()"))

        assert entry.stack_trace == "at main()"
        errors, general = store.snapshot()
        assert [e.message for e in errors] == ["crash"]
        assert [e.message for e in general] == ["fill"]

    def test_assert_and_exception_are_errors(self):
        agg, store = _make()
        agg.handle(RawEvent(EventKind.ASSERT, "[Core] assertion failed"))
        agg.handle(RawEvent(EventKind.EXCEPTION, "[Core] unhandled"))
        assert store.counts() == (2, 0)

    def test_stack_trace_dropped_for_general_entries(self):
        agg, _ = _make()
        entry = agg.handle(RawEvent(EventKind.WARNING, "[Core] w", "ignored trace"))
        assert entry.stack_trace is None
