"""Write the leaderboard as CSV records."""

from __future__ import annotations

import csv
import io
import logging
from pathlib import Path
from typing import Iterable, TextIO

from build_leaderboard.models import LeaderboardEntry
from common.local_io import atomic_write_text

logger = logging.getLogger(__name__)

LEADERBOARD_FIELDS = ["location", "fire_alarms", "entrapments"]


def write_leaderboard_csv(entries: Iterable[LeaderboardEntry], stream: TextIO) -> int:
    """Write entries to `stream` and return how many rows were written."""
    writer = csv.writer(stream)
    writer.writerow(LEADERBOARD_FIELDS)
    rows = 0
    for entry in entries:
        writer.writerow([entry.location, entry.fire_alarms, entry.entrapments])
        rows += 1
    return rows


def save_leaderboard_csv(entries: Iterable[LeaderboardEntry], path: Path) -> None:
    """Atomically write the leaderboard CSV to `path`."""
    buffer = io.StringIO()
    rows = write_leaderboard_csv(entries, buffer)
    atomic_write_text(Path(path), buffer.getvalue())
    logger.info("Saved %d leaderboard rows to %s", rows, path)
