"""Clipboard snapshots kept on the stack."""

from __future__ import annotations

import base64
import binascii
import posixpath
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Tuple, Union
from urllib.parse import unquote, urlparse

from config import PREVIEW_LENGTH


class ContentKind(str, Enum):
    TEXT = "text"
    IMAGE = "image"
    FILE_URL = "fileURL"
    RTF = "rtf"


class SnapshotDecodeError(ValueError):
    """A persisted snapshot record could not be decoded."""


@dataclass(frozen=True)
class TextContent:
    text: str
    kind = ContentKind.TEXT


@dataclass(frozen=True)
class ImageContent:
    data: bytes
    kind = ContentKind.IMAGE


@dataclass(frozen=True)
class FileListContent:
    urls: Tuple[str, ...]
    kind = ContentKind.FILE_URL

    def __post_init__(self):
        # Accept any sequence but store a tuple so the value stays hashable.
        object.__setattr__(self, "urls", tuple(self.urls))


@dataclass(frozen=True)
class RichTextContent:
    data: bytes
    kind = ContentKind.RTF


Content = Union[TextContent, ImageContent, FileListContent, RichTextContent]


def _new_id() -> str:
    return str(uuid.uuid4()).upper()


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _last_path_component(url: str) -> str:
    path = unquote(urlparse(url).path or url)
    return posixpath.basename(path.rstrip("/"))


@dataclass(frozen=True)
class ContentSnapshot:
    """
    One captured clipboard item.

    Exactly one payload is held in ``content``; its type decides ``kind``.
    ``id`` and ``captured_at`` are assigned at creation and survive
    persistence unchanged.
    """

    content: Content
    id: str = field(default_factory=_new_id)
    captured_at: datetime = field(default_factory=_now)

    @property
    def kind(self) -> ContentKind:
        return self.content.kind

    def preview_label(self) -> str:
        content = self.content
        if self.kind is ContentKind.TEXT:
            text = content.text
            if len(text) > PREVIEW_LENGTH:
                return text[:PREVIEW_LENGTH] + "..."
            return text
        if self.kind is ContentKind.IMAGE:
            return "Image"
        if self.kind is ContentKind.FILE_URL:
            if content.urls:
                name = _last_path_component(content.urls[0])
                if name:
                    return name
            return "File"
        return "Formatted text"

    def to_dict(self) -> Dict[str, Any]:
        record: Dict[str, Any] = {
            "id": self.id,
            "createdAt": self.captured_at.isoformat(),
            "contentType": self.kind.value,
        }
        content = self.content
        if self.kind is ContentKind.TEXT:
            record["textData"] = content.text
        elif self.kind is ContentKind.IMAGE:
            record["imageData"] = base64.b64encode(content.data).decode("ascii")
        elif self.kind is ContentKind.FILE_URL:
            record["fileURLStrings"] = list(content.urls)
        else:
            record["rtfData"] = base64.b64encode(content.data).decode("ascii")
        return record

    @classmethod
    def from_dict(cls, record: Dict[str, Any]) -> "ContentSnapshot":
        if not isinstance(record, dict):
            raise SnapshotDecodeError(f"Expected an object, got {type(record).__name__}")
        try:
            snapshot_id = record["id"]
            created_at = _decode_timestamp(record["createdAt"])
            kind = ContentKind(record["contentType"])
        except (KeyError, TypeError, ValueError, OverflowError, OSError) as e:
            raise SnapshotDecodeError(f"Invalid snapshot header: {e}") from e
        if not isinstance(snapshot_id, str) or not snapshot_id:
            raise SnapshotDecodeError("Snapshot id must be a non-empty string")
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        return cls(content=_decode_content(kind, record), id=snapshot_id, captured_at=created_at)


def _decode_timestamp(value: Any) -> datetime:
    # ISO-8601 string, or seconds since the epoch.
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return datetime.fromtimestamp(value, timezone.utc)
    return datetime.fromisoformat(value)


def _decode_bytes(record: Dict[str, Any], key: str) -> bytes:
    value = record.get(key)
    if not isinstance(value, str):
        raise SnapshotDecodeError(f"Missing {key}")
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as e:
        raise SnapshotDecodeError(f"Invalid base64 in {key}: {e}") from e


def _decode_content(kind: ContentKind, record: Dict[str, Any]) -> Content:
    if kind is ContentKind.TEXT:
        text = record.get("textData")
        if not isinstance(text, str):
            raise SnapshotDecodeError("Missing textData")
        return TextContent(text)
    if kind is ContentKind.IMAGE:
        return ImageContent(_decode_bytes(record, "imageData"))
    if kind is ContentKind.FILE_URL:
        urls = record.get("fileURLStrings")
        if not isinstance(urls, list) or not all(isinstance(u, str) for u in urls):
            raise SnapshotDecodeError("Missing fileURLStrings")
        return FileListContent(tuple(urls))
    return RichTextContent(_decode_bytes(record, "rtfData"))
