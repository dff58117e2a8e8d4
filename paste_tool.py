"""Paste items back from the clipboard stack and delete them."""

import logging
import time

import config
from popup import PopupMode, Selection, SelectionKind, present_selector
from stack_store import IndexOutOfRange

logger = logging.getLogger(__name__)


class RestoreController:
    def __init__(self, store, bridge, selector=present_selector, on_empty=None,
                 settle_delay=config.PASTE_SETTLE_SEC, sleep=time.sleep):
        self.store = store
        self.bridge = bridge
        self.selector = selector
        self.on_empty = on_empty
        self.settle_delay = settle_delay
        self._sleep = sleep

    def restore(self, index):
        """Put the item at index on the pasteboard, then simulate Cmd+V."""
        snapshot = self.store.get(index)
        if snapshot is None:
            logger.debug(f"No stack item at index {index}, nothing to paste")
            return False

        # 1. Put into clipboard
        self.bridge.clear()
        self.bridge.write(snapshot.content)
        # 2. Give the pasteboard a moment before the paste is issued
        self._sleep(self.settle_delay)
        # 3. Ask the focused app to paste
        self.bridge.trigger_paste()
        logger.debug(f"Pasted {snapshot.kind.value} item from index {index}")
        return True

    def delete_at(self, index):
        try:
            self.store.remove_at(index)
        except IndexOutOfRange as e:
            logger.warning(f"Ignoring delete request: {e}")
            return False
        return True

    def delete_all(self):
        self.store.remove_all()

    def apply(self, selection, mode):
        """Act on a popup result. Returns True if anything happened."""
        if selection.kind is SelectionKind.CANCELLED:
            return False
        if selection.kind is SelectionKind.DELETE_ALL:
            if mode is not PopupMode.DELETE:
                logger.warning("Ignoring delete-all selection outside delete mode")
                return False
            self.delete_all()
            return True
        if mode is PopupMode.PASTE:
            return self.restore(selection.index)
        return self.delete_at(selection.index)

    def paste_from_stack(self):
        return self._present(PopupMode.PASTE)

    def delete_from_stack(self):
        return self._present(PopupMode.DELETE)

    def _present(self, mode):
        items = self.store.items
        if not items:
            if self.on_empty is not None:
                self.on_empty()
            return Selection.cancelled()
        selection = self.selector(items, mode)
        logger.debug(f"Popup ({mode.value}) returned {selection}")
        self.apply(selection, mode)
        return selection
