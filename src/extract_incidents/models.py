"""Data models for extract_incidents pipeline stage."""

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class IncidentRecord:
    """One templated incident block pulled out of a daily report."""
    incident_type: str
    location: str
    notes: str


@dataclass(frozen=True)
class ExtractionPatterns:
    """Compiled patterns shared read-only by extraction workers."""
    incident: re.Pattern
