"""Tests for timelog.duration."""

import pytest

from timelog import duration
from timelog.core.errors import InvalidInputError
from timelog.core.types import Position, Timestamp
from timelog.store import EventStore


class TestDuration:
    def test_newest(self, timeline):
        assert duration.duration(Timestamp(125), timeline) == 15

    def test_middle_by_position(self, timeline):
        assert duration.duration(Position(1), timeline) == 10

    def test_oldest_has_none(self, timeline):
        assert duration.duration(Timestamp(100), timeline) is None
        assert duration.duration(Position(2), timeline) is None

    def test_nonexistent(self, timeline):
        assert duration.duration(Timestamp(999), timeline) is None
        assert duration.duration(Position(7), timeline) is None

    def test_single_entry(self):
        store = EventStore()
        store.add_entry(5, "only")
        assert duration.duration(Position(0), store) is None

    def test_follows_removal(self, timeline):
        timeline.remove_entry(Timestamp(110))
        assert duration.duration(Timestamp(125), timeline) == 25


class TestLogBetween:
    def test_bounds_are_exclusive(self, timeline):
        records = duration.get_log_between(100, 125, timeline)
        assert [r.timestamp for r in records] == [110]
        assert records[0].position == 1
        assert records[0].duration == 10

    def test_bounds_in_any_order(self, timeline):
        records = duration.get_log_between(126, 99, timeline)
        assert [r.timestamp for r in records] == [125, 110, 100]
        assert [r.position for r in records] == [0, 1, 2]
        assert [r.duration for r in records] == [15, 10, None]

    def test_empty_range(self, timeline):
        assert duration.get_log_between(111, 124, timeline) == []
        assert duration.get_log_between(110, 110, timeline) == []

    def test_records_hold_copies(self, timeline):
        record = duration.get_log_between(0, 1000, timeline)[0]
        record.entry.label_ids.clear()
        assert timeline.get_entry(Timestamp(125)).label_ids != []

    def test_malformed_bounds(self, timeline):
        with pytest.raises(InvalidInputError, match="integer"):
            duration.get_log_between("100", 200, timeline)
        with pytest.raises(InvalidInputError):
            duration.get_log_between(100, True, timeline)


class TestGetLog:
    def test_all(self, timeline):
        assert [r.timestamp for r in duration.get_log(timeline)] == [125, 110, 100]

    def test_limit(self, timeline):
        records = duration.get_log(timeline, limit=2)
        assert [r.timestamp for r in records] == [125, 110]
        assert duration.get_log(timeline, limit=10)[-1].duration is None

    def test_bad_limit(self, timeline):
        with pytest.raises(InvalidInputError):
            duration.get_log(timeline, limit=-1)
