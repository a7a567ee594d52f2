"""Tests for timelog.resolver."""

import pytest

from timelog import resolver
from timelog.core.types import Position, Timestamp
from timelog.store import EventStore


class TestEmptyStore:
    def test_nothing_resolves(self):
        store = EventStore()
        assert resolver.to_timestamp(Position(0), store) is None
        assert resolver.to_position(Timestamp(0), store) is None
        assert not resolver.exists(Position(0), store)


class TestResolution:
    def test_positions_count_from_newest(self, timeline):
        assert resolver.to_timestamp(Position(0), timeline) == 125
        assert resolver.to_timestamp(Position(1), timeline) == 110
        assert resolver.to_timestamp(Position(2), timeline) == 100
        assert resolver.to_timestamp(Position(3), timeline) is None

    def test_negative_position(self, timeline):
        assert resolver.to_timestamp(Position(-1), timeline) is None
        assert resolver.to_position(Position(-1), timeline) is None

    def test_timestamp_to_position(self, timeline):
        assert resolver.to_position(Timestamp(125), timeline) == 0
        assert resolver.to_position(Timestamp(100), timeline) == 2
        assert resolver.to_position(Timestamp(105), timeline) is None

    def test_timestamp_must_exist(self, timeline):
        assert resolver.to_timestamp(Timestamp(110), timeline) == 110
        assert resolver.to_timestamp(Timestamp(111), timeline) is None

    def test_position_identity(self, timeline):
        assert resolver.to_position(Position(1), timeline) == 1
        assert resolver.to_position(Position(3), timeline) is None

    def test_exists(self, timeline):
        assert resolver.exists(Timestamp(100), timeline)
        assert resolver.exists(Position(2), timeline)
        assert not resolver.exists(Timestamp(99), timeline)

    def test_rejects_other_types(self, timeline):
        with pytest.raises(TypeError):
            resolver.to_timestamp(0, timeline)


class TestEquivalence:
    def _assert_roundtrip(self, store):
        for t in store.timestamps():
            p = resolver.to_position(Timestamp(t), store)
            assert resolver.to_timestamp(Position(p), store) == t

    def test_roundtrip(self, timeline):
        self._assert_roundtrip(timeline)

    def test_roundtrip_after_mutation(self, timeline):
        timeline.add_entry(50, "older", [])
        timeline.add_entry(200, "newer", [])
        self._assert_roundtrip(timeline)
        assert resolver.to_position(Timestamp(125), timeline) == 1

        timeline.remove_entry(Position(0))
        self._assert_roundtrip(timeline)
        assert resolver.to_position(Timestamp(125), timeline) == 0
        assert resolver.to_timestamp(Position(3), timeline) == 50
