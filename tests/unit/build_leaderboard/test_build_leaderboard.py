"""Tests for build_leaderboard.build_leaderboard module."""

import pytest

from build_leaderboard.build_leaderboard import (
    fold_incidents,
    merge_location_stats,
    rank_locations,
    top_entries,
)
from build_leaderboard.classify import default_classifiers
from build_leaderboard.models import LeaderboardEntry, LocationStats
from extract_incidents.models import IncidentRecord

CLASSIFIERS = default_classifiers()


def _record(incident_type: str, location: str) -> IncidentRecord:
    return IncidentRecord(incident_type=incident_type, location=location, notes="")


class TestFoldIncidents:
    def test_single_fire_alarm(self) -> None:
        stats = fold_incidents([IncidentRecord("Fire Alarm", "Tower Hall", "smoke detected")], CLASSIFIERS)
        assert stats == {"Tower Hall": LocationStats("Tower Hall", fire_alarms=1, entrapments=0)}

    def test_counts_per_location(self) -> None:
        records = [
            _record("Fire Alarm", "Tower Hall"),
            _record("Entrapment", "Library"),
            _record("Fire Alarm", "Tower Hall"),
            _record("Elevator Entrapment", "Tower Hall"),
        ]

        stats = fold_incidents(records, CLASSIFIERS)

        assert stats["Tower Hall"] == LocationStats("Tower Hall", 2, 1)
        assert stats["Library"] == LocationStats("Library", 0, 1)

    def test_record_matching_both_increments_both(self) -> None:
        stats = fold_incidents([_record("Fire alarm and entrapment", "Gym")], CLASSIFIERS)
        assert stats["Gym"] == LocationStats("Gym", 1, 1)

    def test_unmatched_records_keep_location_with_zero_counts(self) -> None:
        stats = fold_incidents([_record("Theft", "Library")], CLASSIFIERS)
        assert stats == {"Library": LocationStats("Library", 0, 0)}

    def test_first_encounter_order(self) -> None:
        records = [_record("Theft", "B"), _record("Fire Alarm", "A"), _record("Fire Alarm", "B")]
        assert list(fold_incidents(records, CLASSIFIERS)) == ["B", "A"]

    def test_empty_location_skipped(self) -> None:
        assert fold_incidents([_record("Fire Alarm", "")], CLASSIFIERS) == {}


class TestMergeLocationStats:
    def test_adds_counters(self) -> None:
        left = {"A": LocationStats("A", 1, 2)}
        right = {"A": LocationStats("A", 3, 0), "B": LocationStats("B", 0, 1)}

        merged = merge_location_stats(left, right)

        assert merged == {"A": LocationStats("A", 4, 2), "B": LocationStats("B", 0, 1)}

    def test_commutative_and_associative(self) -> None:
        a = {"X": LocationStats("X", 1, 0), "Y": LocationStats("Y", 0, 2)}
        b = {"Y": LocationStats("Y", 3, 1)}
        c = {"X": LocationStats("X", 0, 5), "Z": LocationStats("Z", 1, 1)}

        assert merge_location_stats(a, b) == merge_location_stats(b, a)
        assert merge_location_stats(merge_location_stats(a, b), c) == merge_location_stats(a, merge_location_stats(b, c))

    def test_matches_sequential_fold(self) -> None:
        records = [
            _record("Fire Alarm", "A"),
            _record("Entrapment", "B"),
            _record("Fire Alarm", "B"),
            _record("Entrapment", "A"),
            _record("Fire Alarm", "C"),
        ]
        halves = merge_location_stats(fold_incidents(records[:2], CLASSIFIERS), fold_incidents(records[2:], CLASSIFIERS))
        assert halves == fold_incidents(records, CLASSIFIERS)

    def test_inputs_not_modified(self) -> None:
        left = {"A": LocationStats("A", 1, 1)}
        merge_location_stats(left, {"A": LocationStats("A", 1, 1)})
        assert left == {"A": LocationStats("A", 1, 1)}


class TestRankLocations:
    def test_sorted_by_total_descending(self) -> None:
        stats = {
            "A": LocationStats("A", 1, 0),
            "B": LocationStats("B", 2, 3),
            "C": LocationStats("C", 0, 2),
        }

        entries = rank_locations(stats)

        assert [entry.location for entry in entries] == ["B", "C", "A"]
        assert entries[0] == LeaderboardEntry("B", fire_alarms=2, entrapments=3, total=5)
        assert all(left.total >= right.total for left, right in zip(entries, entries[1:]))

    def test_ties_keep_encounter_order(self) -> None:
        stats = {
            "First": LocationStats("First", 1, 1),
            "Second": LocationStats("Second", 2, 0),
            "Third": LocationStats("Third", 0, 2),
        }
        assert [entry.location for entry in rank_locations(stats)] == ["First", "Second", "Third"]

    def test_empty(self) -> None:
        assert rank_locations({}) == []


class TestTopEntries:
    def _entries(self, count: int) -> list[LeaderboardEntry]:
        return [LeaderboardEntry(f"L{index}", count - index, 0, count - index) for index in range(count)]

    def test_fewer_entries_than_k(self) -> None:
        assert len(top_entries(self._entries(3), k=10)) == 3

    def test_truncates_to_k(self) -> None:
        result = top_entries(self._entries(15))
        assert [entry.location for entry in result] == [f"L{index}" for index in range(10)]

    def test_zero_k(self) -> None:
        assert top_entries(self._entries(3), k=0) == []

    def test_negative_k_rejected(self) -> None:
        with pytest.raises(ValueError):
            top_entries(self._entries(3), k=-1)
