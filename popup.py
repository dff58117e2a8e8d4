"""Selection popup shown for the paste and delete shortcuts."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence

import config
from clipboard_item import ContentSnapshot

logger = logging.getLogger(__name__)

CANCELLED_MARKER = "<<CANCELLED>>"
DELETE_ALL_LABEL = "Delete All"
BLANK_PREVIEW = "(blank)"


class PopupMode(Enum):
    PASTE = "paste"
    DELETE = "delete"


class SelectionKind(Enum):
    ITEM = "item"
    DELETE_ALL = "delete_all"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class Selection:
    kind: SelectionKind
    index: Optional[int] = None

    @classmethod
    def item(cls, index: int) -> "Selection":
        return cls(SelectionKind.ITEM, index)

    @classmethod
    def delete_all(cls) -> "Selection":
        return cls(SelectionKind.DELETE_ALL)

    @classmethod
    def cancelled(cls) -> "Selection":
        return cls(SelectionKind.CANCELLED)


def item_labels(items: Sequence[ContentSnapshot]) -> List[str]:
    # One line per item, numbered so that every label is unique.
    labels = []
    for i, item in enumerate(items):
        preview = " ".join(item.preview_label().split()) or BLANK_PREVIEW
        labels.append(f"{i + 1}. {preview}")
    return labels


def _escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')


def build_script(labels: Sequence[str], mode: PopupMode) -> str:
    choices = list(labels)
    if mode is PopupMode.DELETE:
        choices.append(DELETE_ALL_LABEL)
        prompt, ok_button = "Delete from stack:", "Delete"
    else:
        prompt, ok_button = "Paste from stack:", "Paste"
    choice_list = ", ".join(f'"{_escape(c)}"' for c in choices)
    return f'''
    tell application "System Events"
        activate
        set choice to choose from list {{{choice_list}}} with title "{config.APP_NAME}" with prompt "{prompt}" OK button name "{ok_button}" cancel button name "Cancel" default items {{"{_escape(choices[0])}"}}
        if choice is false then
            return "{CANCELLED_MARKER}"
        end if
        return item 1 of choice
    end tell
    '''


def parse_choice(output: str, labels: Sequence[str], mode: PopupMode) -> Selection:
    choice = output.strip()
    if not choice or choice == CANCELLED_MARKER:
        return Selection.cancelled()
    if mode is PopupMode.DELETE and choice == DELETE_ALL_LABEL:
        return Selection.delete_all()
    try:
        return Selection.item([label.strip() for label in labels].index(choice))
    except ValueError:
        logger.warning(f"Unrecognized popup choice: {choice!r}")
        return Selection.cancelled()


def present_selector(items: Sequence[ContentSnapshot], mode: PopupMode) -> Selection:
    """Show the chooser and block until the user picks an entry or dismisses it."""
    if not items:
        return Selection.cancelled()

    labels = item_labels(items)
    script = build_script(labels, mode)
    try:
        result = subprocess.run(
            ["osascript", "-e", script],
            capture_output=True,
            text=True,
            timeout=config.POPUP_TIMEOUT_SEC,
        )
    except subprocess.TimeoutExpired:
        logger.debug("Selection popup timed out")
        return Selection.cancelled()
    except OSError as e:
        logger.error(f"Failed to show selection popup: {e}")
        return Selection.cancelled()

    if result.returncode != 0:
        logger.error(f"Selection popup failed: {result.stderr.strip()}")
        return Selection.cancelled()
    return parse_choice(result.stdout, labels, mode)
