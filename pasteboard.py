"""Contract between the stack controllers and the system pasteboard."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from clipboard_item import Content


class PasteboardBridge(ABC):
    """
    Read/write access to the system pasteboard plus synthetic copy/paste.

    ``trigger_copy`` and ``trigger_paste`` only post the key events; the
    focused application handles them asynchronously.
    """

    @abstractmethod
    def change_count(self) -> int:
        """Monotonic counter, bumped on every pasteboard change."""

    @abstractmethod
    def read_text(self) -> Optional[str]:
        ...

    @abstractmethod
    def read_image(self) -> Optional[bytes]:
        ...

    @abstractmethod
    def read_file_urls(self) -> Optional[List[str]]:
        ...

    @abstractmethod
    def read_rich_text(self) -> Optional[bytes]:
        ...

    @abstractmethod
    def clear(self) -> None:
        ...

    @abstractmethod
    def write(self, content: Content) -> None:
        """Write one payload back in its kind-specific encoding."""

    @abstractmethod
    def trigger_copy(self) -> None:
        ...

    @abstractmethod
    def trigger_paste(self) -> None:
        ...
