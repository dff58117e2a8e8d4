"""Synthetic Cmd+C / Cmd+V key events."""

from __future__ import annotations

from Quartz import (
    CGEventCreateKeyboardEvent,
    CGEventPost,
    CGEventSetFlags,
    CGEventSourceCreate,
    kCGEventFlagMaskCommand,
    kCGEventSourceStateHIDSystemState,
    kCGHIDEventTap,
)

# macOS virtual keycodes (US keyboard layout).
KVK_ANSI_C = 0x08
KVK_ANSI_V = 0x09


def _post_command_keystroke(keycode: int) -> None:
    # Post Cmd+<key> keydown/keyup to the active application.
    source = CGEventSourceCreate(kCGEventSourceStateHIDSystemState)

    event_down = CGEventCreateKeyboardEvent(source, keycode, True)
    CGEventSetFlags(event_down, kCGEventFlagMaskCommand)
    CGEventPost(kCGHIDEventTap, event_down)

    event_up = CGEventCreateKeyboardEvent(source, keycode, False)
    CGEventSetFlags(event_up, kCGEventFlagMaskCommand)
    CGEventPost(kCGHIDEventTap, event_up)


def copy_from_active_app() -> None:
    _post_command_keystroke(KVK_ANSI_C)


def paste_to_active_app() -> None:
    _post_command_keystroke(KVK_ANSI_V)
