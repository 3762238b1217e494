"""Fetch new daily reports and merge them into the persisted collection."""

from __future__ import annotations

import logging
from datetime import date

from ingest_reports.fetch_reports.fetch_reports import fetch_reports
from ingest_reports.merge_reports.merge import merge_documents
from ingest_reports.models import FetchConfig, IngestResult, StateConfig
from ingest_reports.plan_dates import latest_report_date, plan_dates
from ingest_reports.report_store import load_documents, save_documents

logger = logging.getLogger(__name__)


def ingest_reports(
    start: date,
    end: date | None,
    fetch_config: FetchConfig,
    state_config: StateConfig,
) -> IngestResult:
    """Bring the persisted report collection up to date for [start, end].

    The merged collection is saved before returning, so later stages can
    fail without losing fetched reports.

    Raises:
        PersistenceError: If the state file cannot be read or written.
    """
    persisted = load_documents(state_config.path)
    persisted_max = latest_report_date(persisted)
    if persisted_max is not None:
        logger.info("State covers reports up to %s", persisted_max)

    days = plan_dates(start, end, persisted_max)
    if days:
        logger.info("Planned %d dates: %s to %s", len(days), days[0], days[-1])

    fetched = fetch_reports(days, fetch_config)
    documents = merge_documents(persisted, fetched.documents)

    if state_config.path is not None:
        save_documents(state_config.path, documents, title=state_config.channel_title)
    else:
        logger.warning("No state path configured, merged reports will not be persisted")

    return IngestResult(
        planned_dates=days,
        documents=documents,
        failures=fetched.failures,
        fetched=len(fetched.documents),
    )
