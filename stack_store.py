"""Bounded, persisted stack of clipboard snapshots."""

from __future__ import annotations

import logging
from typing import List, Optional

from clipboard_item import ContentSnapshot, SnapshotDecodeError
from config import (
    CLIPBOARD_STACK_KEY,
    DEFAULT_MAX_STACK_SIZE,
    MAX_STACK_SIZE,
    MAX_STACK_SIZE_KEY,
    MIN_STACK_SIZE,
)

logger = logging.getLogger(__name__)


class StackError(Exception):
    pass


class CapacityExceeded(StackError):
    def __init__(self, capacity: int) -> None:
        super().__init__(f"Stack is full ({capacity} items)")
        self.capacity = capacity


class IndexOutOfRange(StackError, IndexError):
    def __init__(self, index: int, size: int) -> None:
        super().__init__(f"Index {index} out of range for stack of {size} items")
        self.index = index
        self.size = size


class StackStore:
    """
    Ordered stack of snapshots, newest first.

    A full stack rejects new items instead of evicting old ones. Every
    successful mutation is written to the state store before returning.
    """

    def __init__(self, state_store, capacity: Optional[int] = None) -> None:
        self.state_store = state_store
        if capacity is None:
            capacity = self._load_capacity()
        elif capacity < 1:
            raise ValueError(f"Capacity must be positive, got {capacity}")
        self._capacity = capacity
        self._items: List[ContentSnapshot] = self.load()
        self.revision = 0
        if len(self._items) > self._capacity:
            # Keep everything that was saved; pushes stay blocked until the
            # stack is back under capacity.
            logger.warning(
                f"Loaded {len(self._items)} items into a stack of capacity {self._capacity}"
            )

    @property
    def items(self) -> List[ContentSnapshot]:
        return list(self._items)

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def is_full(self) -> bool:
        return len(self._items) >= self._capacity

    def __len__(self) -> int:
        return len(self._items)

    def get(self, index: int) -> Optional[ContentSnapshot]:
        if 0 <= index < len(self._items):
            return self._items[index]
        return None

    def push(self, snapshot: ContentSnapshot) -> None:
        if self.is_full:
            raise CapacityExceeded(self._capacity)
        self._items.insert(0, snapshot)
        self._changed()
        logger.debug(f"Pushed {snapshot.kind.value} item; stack size is now {len(self._items)}")

    def remove_at(self, index: int) -> ContentSnapshot:
        if not 0 <= index < len(self._items):
            raise IndexOutOfRange(index, len(self._items))
        removed = self._items.pop(index)
        self._changed()
        return removed

    def remove_all(self) -> None:
        self._items.clear()
        self._changed()

    def set_capacity(self, capacity: int) -> bool:
        """Change the capacity; refuses to drop below the current item count."""
        if capacity < 1:
            raise ValueError(f"Capacity must be positive, got {capacity}")
        if capacity < len(self._items):
            logger.info(f"Refusing capacity {capacity}: stack holds {len(self._items)} items")
            return False
        self._capacity = capacity
        self.state_store.set(MAX_STACK_SIZE_KEY, capacity)
        self.revision += 1
        return True

    def load(self) -> List[ContentSnapshot]:
        records = self.state_store.get(CLIPBOARD_STACK_KEY)
        if records is None:
            return []
        if not isinstance(records, list):
            logger.error(f"Failed to load clipboard stack: expected a list, got {type(records).__name__}")
            return []
        try:
            return [ContentSnapshot.from_dict(record) for record in records]
        except SnapshotDecodeError as e:
            logger.error(f"Failed to load clipboard stack: {e}")
            return []

    def save(self) -> None:
        records = [item.to_dict() for item in self._items]
        if not self.state_store.set(CLIPBOARD_STACK_KEY, records):
            logger.error("Failed to save clipboard stack")

    def _load_capacity(self) -> int:
        value = self.state_store.get(MAX_STACK_SIZE_KEY)
        if isinstance(value, int) and not isinstance(value, bool) and MIN_STACK_SIZE <= value <= MAX_STACK_SIZE:
            return value
        return DEFAULT_MAX_STACK_SIZE

    def _changed(self) -> None:
        self.revision += 1
        self.save()
