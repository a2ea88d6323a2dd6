"""Unit tests for Event and EventStore."""

import pytest

from freightsim.core.errors import (
    DuplicateActorError,
    InvalidScheduleError,
    UnknownLocationError,
)
from freightsim.core.events import Event, EventStore
from freightsim.network.models import Shipment


class TestEvent:
    """Tests for the Event record."""

    def test_return_without_cargo(self):
        event = Event(location="factory", carrier="truck-1", time=2)
        assert event.is_return
        assert event.cargo is None

    def test_arrival_with_cargo(self):
        shipment = Shipment(destination="a")
        event = Event(location="port", carrier="truck-1", time=1, cargo=shipment)
        assert not event.is_return
        assert event.cargo is shipment

    def test_immutable(self):
        event = Event(location="port", carrier="truck-1", time=1)
        with pytest.raises(AttributeError):
            event.time = 5


class TestEventStore:
    """Tests for EventStore."""

    def test_empty_query(self, store):
        assert store.events_at(0) == []
        assert store.events_at(42) == []
        assert len(store) == 0

    def test_events_at_exact_tick_only(self, store):
        event = Event(location="b", carrier="truck-1", time=5)
        store.schedule(event)

        assert store.events_at(5) == [event]
        for tick in (0, 4, 6, 10):
            assert store.events_at(tick) == []

    def test_insertion_order_preserved(self, store):
        first = Event(location="b", carrier="truck-2", time=3)
        other = Event(location="b", carrier="truck-9", time=4)
        second = Event(location="port", carrier="truck-1", time=3)
        store.schedule(first)
        store.schedule(other)
        store.schedule(second)

        assert store.events_at(3) == [first, second]
        assert store.all_events() == [first, other, second]

    def test_query_is_idempotent(self, store):
        store.schedule(Event(location="b", carrier="truck-1", time=2))
        store.schedule(Event(location="a", carrier="truck-2", time=2))

        assert store.events_at(2) == store.events_at(2)
        assert len(store) == 2

    def test_returned_list_does_not_alias_store(self, store):
        store.schedule(Event(location="b", carrier="truck-1", time=2))
        store.events_at(2).clear()
        assert len(store.events_at(2)) == 1

    def test_no_deduplication(self, store):
        event = Event(location="b", carrier="truck-1", time=2)
        store.schedule(event)
        store.schedule(event)
        assert store.events_at(2) == [event, event]

    def test_event_scheduled_during_reaction_visible_at_its_tick(self, clock, store):
        def react():
            if clock.current_tick == 1:
                store.schedule(Event(location="b", carrier="truck-1", time=2))

        clock.subscribe(react)
        clock.advance()
        assert store.events_at(1) == []
        clock.advance()
        assert len(store.events_at(2)) == 1

    def test_pending(self, store):
        for t in (1, 3, 3, 7):
            store.schedule(Event(location="b", carrier="truck-1", time=t))
        assert store.pending(0) == 4
        assert store.pending(3) == 1
        assert store.pending(7) == 0

    def test_lenient_accepts_past_and_unknown(self, clock, store):
        clock.advance()
        clock.advance()
        store.schedule(Event(location="nowhere", carrier="ship-1", time=0))
        assert len(store.events_at(0)) == 1

    def test_lenient_allows_current_tick(self, clock, store):
        clock.advance()
        store.register_location("b")
        store.schedule(Event(location="b", carrier="truck-1", time=1))
        assert len(store.events_at(1)) == 1


class TestStrictScheduling:
    """Tests for the strict-mode checks."""

    def test_rejects_past_event(self, clock, strict_store):
        strict_store.register_location("b")
        clock.advance()
        clock.advance()

        with pytest.raises(InvalidScheduleError) as exc:
            strict_store.schedule(Event(location="b", carrier="truck-1", time=1))

        assert exc.value.current_tick == 2
        assert exc.value.event.time == 1
        assert len(strict_store) == 0

    def test_accepts_current_tick(self, clock, strict_store):
        strict_store.register_location("b")
        clock.advance()
        strict_store.schedule(Event(location="b", carrier="truck-1", time=1))
        assert len(strict_store) == 1

    def test_rejects_unknown_location(self, strict_store):
        strict_store.register_location("a")
        strict_store.register_location("b")

        with pytest.raises(UnknownLocationError) as exc:
            strict_store.schedule(Event(location="A", carrier="ship-1", time=4))

        assert exc.value.known_locations == ["a", "b"]
        assert "'A'" in str(exc.value)
        assert len(strict_store) == 0

    def test_duplicate_location(self, store):
        store.register_location("port")
        with pytest.raises(DuplicateActorError):
            store.register_location("port")
        assert store.locations == frozenset({"port"})

    def test_validate_does_not_store(self, strict_store):
        strict_store.register_location("b")
        strict_store.validate(Event(location="b", carrier="truck-1", time=3))
        with pytest.raises(UnknownLocationError):
            strict_store.validate(Event(location="A", carrier="ship-1", time=3))
        assert len(strict_store) == 0

    def test_validate_lenient_accepts_anything(self, store):
        store.validate(Event(location="nowhere", carrier="ship-1", time=0))
        assert len(store) == 0

    def test_strict_without_clock_skips_time_check(self):
        store = EventStore(strict=True)
        store.register_location("b")
        store.schedule(Event(location="b", carrier="truck-1", time=0))
        assert store.strict
        assert len(store) == 1
