from datetime import datetime, timezone

import pytest

from clipboard_item import (
    ContentKind,
    ContentSnapshot,
    FileListContent,
    ImageContent,
    RichTextContent,
    SnapshotDecodeError,
    TextContent,
)


def test_new_snapshots_get_distinct_ids_and_utc_timestamps():
    a = ContentSnapshot(TextContent("a"))
    b = ContentSnapshot(TextContent("a"))
    assert a.id != b.id
    assert a.captured_at.tzinfo is not None


def test_snapshot_is_immutable():
    snapshot = ContentSnapshot(TextContent("hello"))
    with pytest.raises(AttributeError):
        snapshot.content = TextContent("other")


def test_kind_follows_content():
    assert ContentSnapshot(TextContent("x")).kind is ContentKind.TEXT
    assert ContentSnapshot(ImageContent(b"\x00")).kind is ContentKind.IMAGE
    assert ContentSnapshot(FileListContent(["file:///tmp/a"])).kind is ContentKind.FILE_URL
    assert ContentSnapshot(RichTextContent(b"{\\rtf1}")).kind is ContentKind.RTF


def test_file_list_is_stored_as_tuple():
    content = FileListContent(["file:///a", "file:///b"])
    assert content.urls == ("file:///a", "file:///b")


def test_short_text_preview_is_unchanged():
    assert ContentSnapshot(TextContent("hello world")).preview_label() == "hello world"


def test_long_text_preview_is_truncated_to_thirty_chars():
    text = "abcdefghijklmnopqrstuvwxyz0123456789"
    assert ContentSnapshot(TextContent(text)).preview_label() == text[:30] + "..."


def test_text_of_exactly_thirty_chars_is_not_truncated():
    text = "x" * 30
    assert ContentSnapshot(TextContent(text)).preview_label() == text


def test_image_and_rtf_previews():
    assert ContentSnapshot(ImageContent(b"img")).preview_label() == "Image"
    assert ContentSnapshot(RichTextContent(b"rtf")).preview_label() == "Formatted text"


def test_file_preview_uses_last_component_of_first_url():
    content = FileListContent(["file:///Users/me/My%20Report.pdf", "file:///tmp/other.txt"])
    assert ContentSnapshot(content).preview_label() == "My Report.pdf"


def test_file_preview_handles_directories_and_empty_lists():
    assert ContentSnapshot(FileListContent(["file:///Users/me/Projects/"])).preview_label() == "Projects"
    assert ContentSnapshot(FileListContent([])).preview_label() == "File"


@pytest.mark.parametrize("content", [
    TextContent("héllo\nwörld"),
    ImageContent(b"\x89PNG\r\n\x1a\n\x00\x01"),
    FileListContent(["file:///tmp/a.txt", "file:///tmp/b%20c.txt"]),
    RichTextContent(b"{\\rtf1\\ansi hello}"),
])
def test_dict_round_trip_keeps_id_and_timestamp(content):
    snapshot = ContentSnapshot(content)
    restored = ContentSnapshot.from_dict(snapshot.to_dict())
    assert restored == snapshot
    assert restored.id == snapshot.id
    assert restored.captured_at == snapshot.captured_at


def test_wire_shape_populates_only_the_matching_field():
    record = ContentSnapshot(ImageContent(b"abc")).to_dict()
    assert record["contentType"] == "image"
    assert record["imageData"] == "YWJj"
    assert not {"textData", "fileURLStrings", "rtfData"} & set(record)


def test_naive_timestamps_are_read_as_utc():
    record = {
        "id": "A1",
        "createdAt": "2025-04-24T10:00:00",
        "contentType": "text",
        "textData": "hi",
    }
    snapshot = ContentSnapshot.from_dict(record)
    assert snapshot.captured_at == datetime(2025, 4, 24, 10, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize("created_at", [1745488800, 1745488800.0])
def test_epoch_timestamps_are_accepted(created_at):
    record = {
        "id": "A1",
        "createdAt": created_at,
        "contentType": "text",
        "textData": "hi",
    }
    snapshot = ContentSnapshot.from_dict(record)
    assert snapshot.captured_at == datetime(2025, 4, 24, 10, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize("record", [
    "not a dict",
    {"createdAt": "2025-04-24T10:00:00+00:00", "contentType": "text", "textData": "x"},
    {"id": "A", "createdAt": "yesterday", "contentType": "text", "textData": "x"},
    {"id": "A", "createdAt": True, "contentType": "text", "textData": "x"},
    {"id": "A", "createdAt": 1e300, "contentType": "text", "textData": "x"},
    {"id": "A", "createdAt": "2025-04-24T10:00:00+00:00", "contentType": "video"},
    {"id": "A", "createdAt": "2025-04-24T10:00:00+00:00", "contentType": "text"},
    {"id": "A", "createdAt": "2025-04-24T10:00:00+00:00", "contentType": "image", "imageData": "%%%"},
    {"id": "A", "createdAt": "2025-04-24T10:00:00+00:00", "contentType": "fileURL", "fileURLStrings": [1]},
])
def test_malformed_records_raise_decode_error(record):
    with pytest.raises(SnapshotDecodeError):
        ContentSnapshot.from_dict(record)
