import logging

import pytest

from pasteboard import PasteboardBridge
from state_manager import ClipStackStateStore


class FakePasteboard(PasteboardBridge):
    """In-memory pasteboard that records every call made against it."""

    def __init__(self, text=None, image=None, file_urls=None, rich_text=None):
        self.text = text
        self.image = image
        self.file_urls = file_urls
        self.rich_text = rich_text
        self.count = 0
        self.calls = []
        self.written = []
        self.on_copy = None

    def change_count(self):
        return self.count

    def read_text(self):
        self.calls.append("read_text")
        return self.text

    def read_image(self):
        self.calls.append("read_image")
        return self.image

    def read_file_urls(self):
        self.calls.append("read_file_urls")
        return self.file_urls

    def read_rich_text(self):
        self.calls.append("read_rich_text")
        return self.rich_text

    def clear(self):
        self.calls.append("clear")
        self.text = self.image = self.file_urls = self.rich_text = None
        self.count += 1

    def write(self, content):
        self.calls.append("write")
        self.written.append(content)
        self.count += 1

    def trigger_copy(self):
        self.calls.append("trigger_copy")
        if self.on_copy is not None:
            self.on_copy(self)

    def trigger_paste(self):
        self.calls.append("trigger_paste")


@pytest.fixture
def pasteboard():
    return FakePasteboard()


@pytest.fixture
def state_path(tmp_path):
    return str(tmp_path / "ClipStack" / "clipstack_state.json")


@pytest.fixture
def state_store(state_path):
    return ClipStackStateStore(state_path, logging.getLogger("tests"))
