"""Keyword classification of incident types."""

import re

from build_leaderboard.models import Classifiers
from extract_incidents.models import IncidentRecord

FIRE_ALARM_PATTERN = r"fire\s*alarm"
# Matches "entrapment" as well as "entrapped"
ENTRAPMENT_PATTERN = r"entrap"


def default_classifiers() -> Classifiers:
    """Compile the fire alarm and entrapment matchers."""
    return Classifiers(
        fire_alarm=re.compile(FIRE_ALARM_PATTERN, re.IGNORECASE),
        entrapment=re.compile(ENTRAPMENT_PATTERN, re.IGNORECASE),
    )


def classify_incident(record: IncidentRecord, classifiers: Classifiers) -> tuple[bool, bool]:
    """Return (is_fire_alarm, is_entrapment). The two tests are independent."""
    return (
        classifiers.fire_alarm.search(record.incident_type) is not None,
        classifiers.entrapment.search(record.incident_type) is not None,
    )
