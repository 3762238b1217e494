"""Pull templated incident blocks out of daily report text.

Each report lists incidents in a fixed layout:

    Incident Type: Fire Alarm
    Location: Residence Halls: Tower Hall
    Date/Time Occurred: ...
    Notes: Smoke detected, no fire found

Only the type, location and notes fields are kept. Reports that do not
follow the layout simply produce no records.
"""

from __future__ import annotations

import logging
import re
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable

from extract_incidents.models import ExtractionPatterns, IncidentRecord
from extract_incidents.normalize_text import html_to_text
from ingest_reports.models import Document

logger = logging.getLogger(__name__)

INCIDENT_PATTERN = (
    r"\bincident[ \t]+type[ \t]*:(?P<incident_type>[^\n]*)\n"
    r"\s*location[ \t]*:(?P<location>[^\n]*)\n"
    # Anything up to Notes, as long as it does not run into the next block
    r"(?:(?!\bincident[ \t]+type[ \t]*:).)*?"
    r"\bnotes[ \t]*:(?P<notes>[^\n]*)"
)


def default_extraction_patterns() -> ExtractionPatterns:
    """Compile the incident layout pattern."""
    return ExtractionPatterns(
        incident=re.compile(INCIDENT_PATTERN, re.IGNORECASE | re.DOTALL),
    )


def normalize_location(value: str) -> str:
    """Drop category prefixes such as "Residence Halls:" from a location."""
    return value.rsplit(":", 1)[-1].strip()


def extract_incidents(text: str, patterns: ExtractionPatterns) -> list[IncidentRecord]:
    """Return one IncidentRecord per templated block in `text`, in order."""
    return [
        IncidentRecord(
            incident_type=match.group("incident_type").strip(),
            location=normalize_location(match.group("location")),
            notes=match.group("notes").strip(),
        )
        for match in patterns.incident.finditer(text)
    ]


def extract_document_incidents(document: Document, patterns: ExtractionPatterns) -> list[IncidentRecord]:
    """Normalize a document's body and extract its incidents."""
    records = extract_incidents(html_to_text(document.body), patterns)
    if not records:
        logger.debug("No incidents found in report %s", document.guid)
    return records


def extract_batches(
    documents: Iterable[Document],
    patterns: ExtractionPatterns,
    max_workers: int = 4,
) -> list[list[IncidentRecord]]:
    """Extract incidents per document, one list per document in document order."""
    documents = list(documents)
    if not documents:
        return []
    if max_workers < 1:
        raise ValueError("max_workers must be >= 1.")

    worker_count = min(max_workers, len(documents))
    with ThreadPoolExecutor(max_workers=worker_count) as executor:
        batches = list(executor.map(lambda doc: extract_document_incidents(doc, patterns), documents))

    logger.info("Extracted %d incidents from %d reports", sum(len(batch) for batch in batches), len(documents))
    return batches


def extract_all(
    documents: Iterable[Document],
    patterns: ExtractionPatterns,
    max_workers: int = 4,
) -> list[IncidentRecord]:
    """Extract incidents from every document, keeping document order."""
    return [record for batch in extract_batches(documents, patterns, max_workers) for record in batch]
