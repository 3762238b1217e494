"""Merge newly fetched reports into the persisted collection."""

import logging
from typing import Iterable

from ingest_reports.models import Document

logger = logging.getLogger(__name__)


def merge_documents(persisted: Iterable[Document], fetched: Iterable[Document]) -> list[Document]:
    """Combine persisted and fetched documents, ordered by publish time.

    Documents sharing a guid are collapsed; the fetched copy wins. The sort
    is stable, so documents with equal timestamps keep persisted-then-fetched
    order.
    """
    by_guid: dict[str, Document] = {}
    for doc in persisted:
        by_guid[doc.guid] = doc

    replaced = 0
    for doc in fetched:
        if doc.guid in by_guid:
            replaced += 1
            # Drop the old position so the fetched copy sorts with the new batch
            del by_guid[doc.guid]
        by_guid[doc.guid] = doc

    if replaced:
        logger.info("Replaced %d persisted reports with fresh copies", replaced)

    return sorted(by_guid.values(), key=lambda doc: doc.published_at)
