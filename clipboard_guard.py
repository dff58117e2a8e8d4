"""NSPasteboard-backed pasteboard bridge."""

from __future__ import annotations

import logging
from typing import List, Optional

from AppKit import (
    NSPasteboard,
    NSPasteboardTypePNG,
    NSPasteboardTypeRTF,
    NSPasteboardTypeString,
    NSPasteboardTypeTIFF,
)
from Foundation import NSURL

from clipboard import copy_from_active_app, paste_to_active_app
from clipboard_item import Content, ContentKind
from pasteboard import PasteboardBridge

logger = logging.getLogger(__name__)

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


class MacPasteboard(PasteboardBridge):
    """Bridge over NSPasteboard.generalPasteboard()."""

    def __init__(self, pasteboard=None) -> None:
        self.pb = pasteboard or NSPasteboard.generalPasteboard()

    def change_count(self) -> int:
        return int(self.pb.changeCount())

    def read_text(self) -> Optional[str]:
        value = self.pb.stringForType_(NSPasteboardTypeString)
        return str(value) if value is not None else None

    def read_image(self) -> Optional[bytes]:
        data = self.pb.dataForType_(NSPasteboardTypeTIFF)
        if data is None:
            data = self.pb.dataForType_(NSPasteboardTypePNG)
        return bytes(data) if data is not None else None

    def read_file_urls(self) -> Optional[List[str]]:
        urls = self.pb.readObjectsForClasses_options_([NSURL], None)
        if not urls:
            return None
        return [str(url.absoluteString()) for url in urls]

    def read_rich_text(self) -> Optional[bytes]:
        data = self.pb.dataForType_(NSPasteboardTypeRTF)
        return bytes(data) if data is not None else None

    def clear(self) -> None:
        self.pb.clearContents()

    def write(self, content: Content) -> None:
        if content.kind is ContentKind.TEXT:
            ok = self.pb.setString_forType_(content.text, NSPasteboardTypeString)
        elif content.kind is ContentKind.IMAGE:
            image_type = NSPasteboardTypePNG if content.data.startswith(PNG_SIGNATURE) else NSPasteboardTypeTIFF
            ok = self.pb.setData_forType_(content.data, image_type)
        elif content.kind is ContentKind.FILE_URL:
            urls = [NSURL.URLWithString_(s) for s in content.urls]
            ok = self.pb.writeObjects_([url for url in urls if url is not None])
        else:
            ok = self.pb.setData_forType_(content.data, NSPasteboardTypeRTF)
        if not ok:
            logger.warning(f"Pasteboard rejected {content.kind.value} content")

    def trigger_copy(self) -> None:
        copy_from_active_app()

    def trigger_paste(self) -> None:
        paste_to_active_app()
