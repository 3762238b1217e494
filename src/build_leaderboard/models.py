"""Data models for build_leaderboard pipeline stage."""

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class Classifiers:
    """Compiled keyword matchers applied to an incident's type."""
    fire_alarm: re.Pattern
    entrapment: re.Pattern


@dataclass
class LocationStats:
    """Running incident counts for one location."""
    location: str
    fire_alarms: int = 0
    entrapments: int = 0

    @property
    def total(self) -> int:
        return self.fire_alarms + self.entrapments


@dataclass(frozen=True)
class LeaderboardEntry:
    location: str
    fire_alarms: int
    entrapments: int
    total: int
