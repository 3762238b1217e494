"""Work out which report dates still need fetching."""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Iterable

from ingest_reports.models import Document

logger = logging.getLogger(__name__)


def latest_report_date(documents: Iterable[Document]) -> date | None:
    """Return the most recent publish date in a collection, or None if it is empty."""
    return max((doc.published_at.date() for doc in documents), default=None)


def plan_dates(
    start: date,
    end: date | None = None,
    persisted_max: date | None = None,
) -> list[date]:
    """Return the inclusive, ascending list of dates to fetch.

    Dates up to and including `persisted_max` are already covered by the
    state file and are skipped. `end` defaults to today.
    """
    if end is None:
        end = date.today()

    effective_start = start
    if persisted_max is not None:
        effective_start = max(start, persisted_max + timedelta(days=1))

    if effective_start > end:
        logger.info("Nothing to fetch: %s is after %s", effective_start, end)
        return []

    days = (end - effective_start).days + 1
    return [effective_start + timedelta(days=offset) for offset in range(days)]
