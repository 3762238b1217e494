"""Read and write the report collection as an RSS 2.0 file.

The state file uses the same feed format the reports are published in, so a
previous run's output can be inspected with any feed reader and is parsed
back with the same library used for fetching.
"""

from __future__ import annotations

import logging
from email.utils import format_datetime
from pathlib import Path

import feedparser
from lxml import etree

from common.datetime import parse_datetime
from common.local_io import atomic_write_bytes
from ingest_reports.errors import PersistenceError
from ingest_reports.models import Document

logger = logging.getLogger(__name__)


def load_documents(path: Path | str | None) -> list[Document]:
    """Load a persisted collection. A missing or unset path means an empty one.

    Raises:
        PersistenceError: If the file exists but cannot be read or parsed.
    """
    if path is None:
        return []
    path = Path(path)
    if not path.exists():
        logger.info("No state file at %s, starting empty", path)
        return []

    try:
        raw = path.read_bytes()
    except OSError as e:
        raise PersistenceError(path, f"cannot read state file: {e}") from e

    feed = feedparser.parse(raw)
    if feed.bozo and not feed.entries and raw.strip():
        raise PersistenceError(path, f"cannot parse state file: {feed.get('bozo_exception')}")

    documents = []
    for entry in feed.entries:
        published_at = parse_datetime(entry.get("published"))
        if published_at is None:
            raise PersistenceError(path, f"entry {entry.get('id')!r} has no valid pubDate")
        documents.append(
            Document(
                guid=entry.get("id") or entry.get("link", ""),
                title=entry.get("title", ""),
                link=entry.get("link", ""),
                published_at=published_at,
                body=entry.get("summary", ""),
            )
        )

    logger.info("Loaded %d reports from %s", len(documents), path)
    return documents


def save_documents(path: Path | str, documents: list[Document], title: str = "Daily incident reports") -> None:
    """Atomically replace the state file with `documents`.

    Raises:
        PersistenceError: If the file cannot be written. The previous file is left untouched.
    """
    path = Path(path)
    try:
        data = serialize_documents(documents, title)
    except ValueError as e:
        # lxml rejects control characters that XML cannot carry
        raise PersistenceError(path, f"cannot serialize reports: {e}") from e
    try:
        atomic_write_bytes(path, data)
    except OSError as e:
        raise PersistenceError(path, f"cannot write state file: {e}") from e
    logger.info("Saved %d reports to %s", len(documents), path)


def serialize_documents(documents: list[Document], title: str) -> bytes:
    rss = etree.Element("rss", version="2.0")
    channel = etree.SubElement(rss, "channel")
    etree.SubElement(channel, "title").text = title
    etree.SubElement(channel, "description").text = title

    for doc in documents:
        item = etree.SubElement(channel, "item")
        etree.SubElement(item, "title").text = doc.title
        if doc.link:
            etree.SubElement(item, "link").text = doc.link
        etree.SubElement(item, "guid", isPermaLink="false").text = doc.guid
        etree.SubElement(item, "pubDate").text = format_datetime(doc.published_at)
        etree.SubElement(item, "description").text = doc.body

    return etree.tostring(rss, xml_declaration=True, encoding="utf-8", pretty_print=True)
