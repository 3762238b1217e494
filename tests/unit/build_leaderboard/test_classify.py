"""Tests for build_leaderboard.classify module."""

from build_leaderboard.classify import classify_incident, default_classifiers
from extract_incidents.models import IncidentRecord

CLASSIFIERS = default_classifiers()


def _record(incident_type: str) -> IncidentRecord:
    return IncidentRecord(incident_type=incident_type, location="Tower Hall", notes="")


class TestClassifyIncident:
    def test_fire_alarm_only(self) -> None:
        assert classify_incident(_record("Fire Alarm"), CLASSIFIERS) == (True, False)

    def test_entrapment_only(self) -> None:
        assert classify_incident(_record("Elevator Entrapment"), CLASSIFIERS) == (False, True)

    def test_both_match(self) -> None:
        assert classify_incident(_record("Fire alarm / persons entrapped"), CLASSIFIERS) == (True, True)

    def test_neither_matches(self) -> None:
        assert classify_incident(_record("Theft"), CLASSIFIERS) == (False, False)

    def test_case_insensitive(self) -> None:
        assert classify_incident(_record("FIRE ALARM - ACCIDENTAL"), CLASSIFIERS) == (True, False)
        assert classify_incident(_record("ENTRAPMENT"), CLASSIFIERS) == (False, True)

    def test_fire_without_alarm_does_not_match(self) -> None:
        assert classify_incident(_record("Fire"), CLASSIFIERS) == (False, False)

    def test_only_incident_type_is_inspected(self) -> None:
        record = IncidentRecord(incident_type="Theft", location="Fire Alarm Panel", notes="entrapment drill")
        assert classify_incident(record, CLASSIFIERS) == (False, False)
