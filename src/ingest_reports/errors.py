"""Errors raised by the ingest_reports stage."""

from __future__ import annotations

from datetime import date
from pathlib import Path


class RetrievalError(Exception):
    """A single date's report could not be retrieved or parsed."""

    def __init__(self, day: date, message: str):
        super().__init__(f"{day.isoformat()}: {message}")
        self.day = day
        self.message = message


class PersistenceError(Exception):
    """The report state file could not be read or written."""

    def __init__(self, path: Path, message: str):
        super().__init__(f"{path}: {message}")
        self.path = path
        self.message = message
