"""Daily report feed fetching."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from concurrent.futures import TimeoutError as FuturesTimeoutError
from datetime import date

import feedparser
import requests

from common.datetime import start_of_day
from ingest_reports.errors import RetrievalError
from ingest_reports.models import Document, FetchConfig, FetchFailure, FetchResult

logger = logging.getLogger(__name__)


def build_report_url(url_template: str, day: date) -> str:
    """Fill a URL template's {year}, {month} and {day} fields."""
    return url_template.format(year=day.year, month=day.month, day=day.day)


def fetch_report(day: date, config: FetchConfig) -> Document:
    """Fetch the report feed for one date and fold its entries into a Document."""
    url = build_report_url(config.url_template, day)
    response = requests.get(
        url,
        timeout=config.request_timeout,
        headers={"User-Agent": config.user_agent},
    )
    response.raise_for_status()

    feed = feedparser.parse(response.content)
    if not feed.entries:
        raise RetrievalError(day, f"no entries in feed at {url}")

    first = feed.entries[0]
    body = "\n".join(_entry_body(entry) for entry in feed.entries)

    # Keyed to the requested date, which the planner resumes from
    return Document(
        guid=first.get("id") or first.get("link") or url,
        title=first.get("title", "").strip(),
        link=first.get("link") or url,
        published_at=start_of_day(day),
        body=body,
    )


def fetch_reports(days: list[date], config: FetchConfig) -> FetchResult:
    """Fetch one report per date with at most `config.concurrency` requests in flight.

    A failure for one date is recorded in the result and never cancels the
    others. Documents come back in completion order. When `config.run_timeout`
    expires the call returns at once; fetches still running are abandoned and
    their dates recorded as failures.
    """
    if config.concurrency < 1:
        raise ValueError("concurrency must be >= 1.")
    if not days:
        return FetchResult()

    worker_count = min(config.concurrency, len(days))
    result = FetchResult()
    logger.info("Fetching %d reports with %d workers", len(days), worker_count)

    executor = ThreadPoolExecutor(max_workers=worker_count)
    future_map = {executor.submit(fetch_report, day, config): day for day in days}
    pending = set(future_map)
    timed_out = False
    try:
        for future in as_completed(future_map, timeout=config.run_timeout):
            pending.discard(future)
            _collect(future, future_map[future], config, result)
    except FuturesTimeoutError:
        timed_out = True
        for future in pending:
            day = future_map[future]
            if future.done():
                _collect(future, day, config, result)
                continue
            future.cancel()
            logger.warning("Gave up on report for %s after %ss", day, config.run_timeout)
            result.failures.append(
                FetchFailure(
                    day=day,
                    url=build_report_url(config.url_template, day),
                    error=f"run timeout of {config.run_timeout}s exceeded",
                )
            )
    finally:
        executor.shutdown(wait=not timed_out, cancel_futures=timed_out)

    result.failures.sort(key=lambda failure: failure.day)
    logger.info("Fetched %d reports (%d failed)", len(result.documents), len(result.failures))
    return result


def _collect(future, day: date, config: FetchConfig, result: FetchResult) -> None:
    """Record a finished fetch as a document or a failure."""
    try:
        result.documents.append(future.result())
    except Exception as e:
        logger.warning("Failed to fetch report for %s: %s", day, e)
        result.failures.append(
            FetchFailure(day=day, url=build_report_url(config.url_template, day), error=str(e))
        )


def _entry_body(entry) -> str:
    """Return the richest body available on a feed entry."""
    content = entry.get("content")
    if content:
        return "\n".join(part.get("value", "") for part in content)
    return entry.get("summary", "")
