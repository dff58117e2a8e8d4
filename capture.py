"""Copy the focused app's selection onto the clipboard stack."""

from __future__ import annotations

import logging
import time
from enum import Enum
from typing import Callable, Optional

import config
from clipboard_item import (
    ContentSnapshot,
    FileListContent,
    ImageContent,
    RichTextContent,
    TextContent,
)
from pasteboard import PasteboardBridge
from stack_store import CapacityExceeded, StackStore

logger = logging.getLogger(__name__)


class CaptureResult(Enum):
    CAPTURED = "captured"
    STACK_FULL = "stack_full"
    NOTHING_TO_CAPTURE = "nothing_to_capture"


def snapshot_from_pasteboard(bridge: PasteboardBridge) -> Optional[ContentSnapshot]:
    """Classify the pasteboard contents: text, then image, then files, then RTF."""
    text = bridge.read_text()
    if text:
        logger.debug(f"Found text in pasteboard: {text[:20]}...")
        return ContentSnapshot(TextContent(text))

    image = bridge.read_image()
    if image:
        logger.debug(f"Found image data in pasteboard, size: {len(image)} bytes")
        return ContentSnapshot(ImageContent(image))

    urls = bridge.read_file_urls()
    if urls:
        logger.debug(f"Found file URLs in pasteboard: {len(urls)} URLs")
        return ContentSnapshot(FileListContent(tuple(urls)))

    rtf = bridge.read_rich_text()
    if rtf:
        logger.debug(f"Found RTF data in pasteboard, size: {len(rtf)} bytes")
        return ContentSnapshot(RichTextContent(rtf))

    logger.debug("No supported content types found in pasteboard")
    return None


class CaptureController:
    def __init__(
        self,
        store: StackStore,
        bridge: PasteboardBridge,
        on_stack_full: Optional[Callable[[], None]] = None,
        settle_delay: float = config.COPY_SETTLE_SEC,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.store = store
        self.bridge = bridge
        self.on_stack_full = on_stack_full
        self.settle_delay = settle_delay
        self._sleep = sleep
        self.last_change_count = bridge.change_count()

    def capture(self) -> CaptureResult:
        if self.store.is_full:
            logger.debug("Stack is full, skipping capture")
            self._notify_stack_full()
            return CaptureResult.STACK_FULL

        before = self.bridge.change_count()
        self.bridge.trigger_copy()
        # The focused app fills the pasteboard asynchronously.
        self._sleep(self.settle_delay)

        try:
            after = self.bridge.change_count()
            if after == before:
                # Not authoritative: try to read the pasteboard anyway.
                logger.debug(f"Pasteboard change count unchanged at {after} after copy")

            snapshot = snapshot_from_pasteboard(self.bridge)
            if snapshot is None:
                return CaptureResult.NOTHING_TO_CAPTURE

            try:
                self.store.push(snapshot)
            except CapacityExceeded:
                logger.debug("Stack filled up during capture")
                self._notify_stack_full()
                return CaptureResult.STACK_FULL
            return CaptureResult.CAPTURED
        finally:
            self.last_change_count = self.bridge.change_count()

    def _notify_stack_full(self) -> None:
        if self.on_stack_full is not None:
            self.on_stack_full()
