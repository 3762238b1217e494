"""Tests for ingest_reports.merge_reports.merge module."""

from datetime import datetime, timedelta, timezone

from ingest_reports.merge_reports.merge import merge_documents
from ingest_reports.models import Document

BASE = datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)


def _doc(guid: str, day_offset: int, body: str = "") -> Document:
    return Document(
        guid=guid,
        title=guid,
        link=f"https://reports.example.edu/{guid}",
        published_at=BASE + timedelta(days=day_offset),
        body=body,
    )


class TestMergeDocuments:
    def test_output_sorted_by_publish_time(self) -> None:
        persisted = [_doc("a", 0), _doc("b", 2), _doc("c", 4)]
        fetched = [_doc("e", 6), _doc("d", 5), _doc("f", 7)]

        result = merge_documents(persisted, fetched)

        assert [doc.guid for doc in result] == ["a", "b", "c", "d", "e", "f"]
        assert all(left.published_at <= right.published_at for left, right in zip(result, result[1:]))

    def test_interleaves_old_and_new(self) -> None:
        result = merge_documents([_doc("a", 0), _doc("c", 2)], [_doc("b", 1), _doc("d", 3)])
        assert [doc.guid for doc in result] == ["a", "b", "c", "d"]

    def test_empty_persisted(self) -> None:
        result = merge_documents([], [_doc("b", 1), _doc("a", 0)])
        assert [doc.guid for doc in result] == ["a", "b"]

    def test_empty_fetched(self) -> None:
        persisted = [_doc("a", 0), _doc("b", 1)]
        assert merge_documents(persisted, []) == persisted

    def test_both_empty(self) -> None:
        assert merge_documents([], []) == []

    def test_offsets_compared_as_instants(self) -> None:
        central = timezone(timedelta(hours=-6))
        late_local = Document("late", "", "", datetime(2024, 1, 1, 20, 0, tzinfo=central), "")
        early_utc = Document("early", "", "", datetime(2024, 1, 2, 1, 0, tzinfo=timezone.utc), "")

        result = merge_documents([late_local], [early_utc])

        assert [doc.guid for doc in result] == ["early", "late"]

    def test_fetched_copy_replaces_same_guid(self) -> None:
        persisted = [_doc("a", 0, body="old")]
        fetched = [_doc("a", 0, body="new")]

        result = merge_documents(persisted, fetched)

        assert len(result) == 1
        assert result[0].body == "new"

    def test_equal_timestamps_keep_persisted_first(self) -> None:
        result = merge_documents([_doc("old", 0)], [_doc("new", 0)])
        assert [doc.guid for doc in result] == ["old", "new"]
