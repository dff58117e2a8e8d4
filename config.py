"""Configuration for ClipStack."""

import os

APP_NAME = "ClipStack"


def _env_seconds(name, default):
    value = os.environ.get(name)
    if value is None:
        return default
    try:
        seconds = float(value)
    except ValueError:
        return default
    return seconds if seconds >= 0 else default


# Stack settings
DEFAULT_MAX_STACK_SIZE = 10
MIN_STACK_SIZE = 5
MAX_STACK_SIZE = 20
PREVIEW_LENGTH = 30

# Persisted keys
CLIPBOARD_STACK_KEY = "clipboardStack"
MAX_STACK_SIZE_KEY = "maxStackSize"
SHORTCUTS_KEY = "shortcuts"

STATE_PATH = os.path.join(
    os.path.expanduser("~"),
    "Library",
    "Application Support",
    APP_NAME,
    "clipstack_state.json",
)

# Timing settings.
# There is no synchronous signal that the focused app has handled a synthetic
# Cmd+C / Cmd+V, so these waits are a best-effort heuristic.
COPY_SETTLE_SEC = _env_seconds("CLIPSTACK_COPY_SETTLE_SEC", 0.2)
PASTE_SETTLE_SEC = _env_seconds("CLIPSTACK_PASTE_SETTLE_SEC", 0.1)
FOCUS_RESTORE_SEC = 0.1
MENU_REFRESH_INTERVAL_SEC = 0.5
POPUP_TIMEOUT_SEC = 120

# Hotkeys (pynput chord syntax)
COPY_ACTION = "stackCopy"
PASTE_ACTION = "stackPaste"
DELETE_ACTION = "stackDelete"

DEFAULT_SHORTCUTS = {
    COPY_ACTION: "<cmd>+<shift>+c",
    PASTE_ACTION: "<cmd>+<shift>+v",
    DELETE_ACTION: "<cmd>+<shift>+d",
}

SHORTCUT_TITLES = {
    COPY_ACTION: "Copy to Stack",
    PASTE_ACTION: "Paste from Stack",
    DELETE_ACTION: "Delete from Stack",
}

# Notifications
STACK_FULL_TITLE = "Stack Full"
STACK_FULL_MESSAGE = "Cannot add more items. Please delete some items from your stack."
STACK_EMPTY_TITLE = "Stack Empty"
STACK_EMPTY_MESSAGE = "Your clipboard stack is empty."

LAUNCH_AGENT_LABEL = "com.clipstack.agent"
ACCESSIBILITY_PREFS_URL = "x-apple.systempreferences:com.apple.preference.security?Privacy_Accessibility"
