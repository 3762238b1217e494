"""Run the full fetch, merge, extract and rank pipeline."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from functools import reduce

from build_leaderboard.build_leaderboard import fold_incidents, merge_location_stats, rank_locations, top_entries
from build_leaderboard.classify import default_classifiers
from build_leaderboard.models import LeaderboardEntry
from extract_incidents.extract_incidents import default_extraction_patterns, extract_batches
from ingest_reports.ingest_reports import ingest_reports
from ingest_reports.models import FetchFailure
from score_incidents.config import Config

logger = logging.getLogger(__name__)


@dataclass
class RunSummary:
    """What a pipeline run did, for logging and the exit code."""
    planned_dates: list[date]
    fetched: int
    documents: int
    incidents: int
    failures: list[FetchFailure] = field(default_factory=list)
    leaderboard: list[LeaderboardEntry] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def score_incidents(config: Config, start: date, end: date | None = None) -> RunSummary:
    """Update the report collection for [start, end] and rank locations.

    Raises:
        PersistenceError: If the state file cannot be read or written.
    """
    ingested = ingest_reports(start, end, config.fetch, config.state)

    patterns = default_extraction_patterns()
    batches = extract_batches(ingested.documents, patterns, max_workers=config.extract_workers)

    # Per-report counts are summed in document order so ties rank by first sighting
    classifiers = default_classifiers()
    stats = reduce(merge_location_stats, (fold_incidents(batch, classifiers) for batch in batches), {})
    leaderboard = top_entries(rank_locations(stats), config.output.top_k)

    return RunSummary(
        planned_dates=ingested.planned_dates,
        fetched=ingested.fetched,
        documents=len(ingested.documents),
        incidents=sum(len(batch) for batch in batches),
        failures=ingested.failures,
        leaderboard=leaderboard,
    )


def log_summary(summary: RunSummary) -> None:
    logger.info(
        "Fetched %d of %d planned reports; %d reports, %d incidents, %d leaderboard rows",
        summary.fetched,
        len(summary.planned_dates),
        summary.documents,
        summary.incidents,
        len(summary.leaderboard),
    )
    if summary.failures:
        logger.warning(
            "%d dates failed: %s",
            len(summary.failures),
            ", ".join(failure.day.isoformat() for failure in summary.failures),
        )
