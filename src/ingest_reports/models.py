"""Data models for ingest_reports pipeline stage."""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

DEFAULT_USER_AGENT = "incident-scoreboard/1.0 (daily report reader)"


@dataclass(frozen=True)
class Document:
    """One daily report as retrieved from its feed."""
    guid: str
    title: str
    link: str
    published_at: datetime
    body: str


@dataclass
class FetchFailure:
    """A date whose report could not be retrieved."""
    day: date
    url: str
    error: str


@dataclass
class FetchResult:
    """Documents retrieved by a fetch batch, plus the dates that failed."""
    documents: list[Document] = field(default_factory=list)
    failures: list[FetchFailure] = field(default_factory=list)


@dataclass
class IngestResult:
    """Outcome of the ingest stage: the merged, persisted collection."""
    planned_dates: list[date]
    documents: list[Document]
    failures: list[FetchFailure]
    fetched: int = 0


@dataclass
class FetchConfig:
    url_template: str
    concurrency: int = 4
    request_timeout: int = 30
    run_timeout: Optional[float] = None
    user_agent: str = DEFAULT_USER_AGENT


@dataclass
class StateConfig:
    path: Optional[str] = "output/daily_reports.xml"
    channel_title: str = "Daily incident reports"
