"""Fold classified incidents into per-location counts and rank them."""

from __future__ import annotations

import logging
from typing import Iterable, Mapping

from build_leaderboard.classify import classify_incident
from build_leaderboard.models import Classifiers, LeaderboardEntry, LocationStats
from extract_incidents.models import IncidentRecord

logger = logging.getLogger(__name__)

DEFAULT_TOP_K = 10


def fold_incidents(
    records: Iterable[IncidentRecord],
    classifiers: Classifiers,
) -> dict[str, LocationStats]:
    """Count fire alarms and entrapments per location.

    Locations appear in first-encounter order, including ones whose
    incidents matched neither keyword. Records without a location are skipped.
    """
    stats: dict[str, LocationStats] = {}
    skipped = 0
    for record in records:
        if not record.location:
            skipped += 1
            continue
        is_fire_alarm, is_entrapment = classify_incident(record, classifiers)
        entry = stats.setdefault(record.location, LocationStats(location=record.location))
        if is_fire_alarm:
            entry.fire_alarms += 1
        if is_entrapment:
            entry.entrapments += 1

    if skipped:
        logger.warning("Skipped %d incidents with no location", skipped)
    return stats


def merge_location_stats(
    left: Mapping[str, LocationStats],
    right: Mapping[str, LocationStats],
) -> dict[str, LocationStats]:
    """Add two sets of per-location counts. Neither input is modified."""
    merged = {
        location: LocationStats(location, stats.fire_alarms, stats.entrapments)
        for location, stats in left.items()
    }
    for location, stats in right.items():
        entry = merged.setdefault(location, LocationStats(location=location))
        entry.fire_alarms += stats.fire_alarms
        entry.entrapments += stats.entrapments
    return merged


def rank_locations(stats: Mapping[str, LocationStats]) -> list[LeaderboardEntry]:
    """Order locations by total incidents, highest first.

    Ties keep the order in which locations were first seen.
    """
    entries = [
        LeaderboardEntry(
            location=item.location,
            fire_alarms=item.fire_alarms,
            entrapments=item.entrapments,
            total=item.total,
        )
        for item in stats.values()
    ]
    return sorted(entries, key=lambda entry: entry.total, reverse=True)


def top_entries(entries: list[LeaderboardEntry], k: int = DEFAULT_TOP_K) -> list[LeaderboardEntry]:
    """Return at most the first `k` entries."""
    if k < 0:
        raise ValueError("k must be >= 0.")
    return entries[: min(k, len(entries))]
