import argparse
import logging
import os
import subprocess
import sys
import time

import rumps
from AppKit import NSApplicationActivateIgnoringOtherApps, NSWorkspace

import config
import login_item
from capture import CaptureController
from clipboard_guard import MacPasteboard
from dispatcher import ActionDispatcher
from hotkey import HotkeyListener, describe_shortcut, is_valid_shortcut
from paste_tool import RestoreController
from permissions import check_accessibility, open_accessibility_preferences
from popup import item_labels, present_selector
from stack_store import StackStore
from state_manager import ClipStackStateStore

__version__ = "1.0.0"


def configure_logging(debug: bool):
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

logger = logging.getLogger(__name__)


class ClipStackApp(rumps.App):
    def __init__(self, state_path=config.STATE_PATH):
        super(ClipStackApp, self).__init__(config.APP_NAME, title="📋", quit_button="Quit")
        self.state_store = ClipStackStateStore(state_path, logger)
        self.store = StackStore(self.state_store)
        self.bridge = MacPasteboard()
        self.capture_controller = CaptureController(
            self.store, self.bridge, on_stack_full=self._notify_stack_full
        )
        self.restore_controller = RestoreController(
            self.store,
            self.bridge,
            selector=self._select_with_refocus,
            on_empty=self._notify_stack_empty,
        )

        # Shortcut and menu actions run one at a time.
        self.dispatcher = ActionDispatcher()
        self.shortcuts = self._load_shortcuts()
        self.hotkeys = HotkeyListener(self.shortcuts, {
            config.COPY_ACTION: lambda: self._dispatch(self.capture_controller.capture),
            config.PASTE_ACTION: lambda: self._dispatch(self.restore_controller.paste_from_stack),
            config.DELETE_ACTION: lambda: self._dispatch(self.restore_controller.delete_from_stack),
        })

        # Build menu
        self.status_item = rumps.MenuItem("Stack: 0 items", callback=None)
        self.manage_menu = rumps.MenuItem("Manage Stack")

        # Preferences submenu
        self.size_menu = rumps.MenuItem("Maximum Stack Size")
        self.size_items = {}
        for size in range(config.MIN_STACK_SIZE, config.MAX_STACK_SIZE + 1):
            item = rumps.MenuItem(str(size), callback=self._make_capacity_callback(size))
            self.size_items[size] = item
            self.size_menu.add(item)

        self.launch_item = rumps.MenuItem("Launch at Login", callback=self.toggle_launch_at_login)
        self.launch_item.state = 1 if login_item.is_enabled() else 0

        self.shortcut_items = {}
        self.prefs_menu = rumps.MenuItem("Preferences")
        self.prefs_menu.add(self.size_menu)
        self.prefs_menu.add(self.launch_item)
        self.prefs_menu.add(None)  # Separator
        for name in (config.COPY_ACTION, config.PASTE_ACTION, config.DELETE_ACTION):
            item = rumps.MenuItem(self._shortcut_label(name), callback=self._make_edit_shortcut_callback(name))
            self.shortcut_items[name] = item
            self.prefs_menu.add(item)
        self.prefs_menu.add(None)  # Separator
        self.prefs_menu.add(rumps.MenuItem(
            "Open Accessibility Settings...",
            callback=lambda _: open_accessibility_preferences()
        ))

        self.version_info = rumps.MenuItem(f"Version: {__version__}", callback=None)

        self.menu = [
            self.status_item,
            None,  # Separator
            self.manage_menu,
            self.prefs_menu,
            None,  # Separator
            self.version_info
        ]

        self._menu_revision = None
        self._refresh_menu(None)
        self.timer = rumps.Timer(self._refresh_menu, config.MENU_REFRESH_INTERVAL_SEC)
        self.timer.start()

    def _notify(self, title, message):
        try:
            rumps.notification(config.APP_NAME, title, message)
        except RuntimeError as e:
            # Raised when running outside an app bundle without a bundle id
            logger.warning(f"Notification not shown ({title}): {e}")

    def _notify_stack_full(self):
        self._notify(config.STACK_FULL_TITLE, config.STACK_FULL_MESSAGE)

    def _notify_stack_empty(self):
        self._notify(config.STACK_EMPTY_TITLE, config.STACK_EMPTY_MESSAGE)

    def _dispatch(self, action, *args):
        self.dispatcher.dispatch(action, *args)

    def _select_with_refocus(self, items, mode):
        # The chooser takes focus; hand it back before pasting.
        target_app = NSWorkspace.sharedWorkspace().frontmostApplication()
        selection = present_selector(items, mode)
        if target_app:
            target_app.activateWithOptions_(NSApplicationActivateIgnoringOtherApps)
            time.sleep(config.FOCUS_RESTORE_SEC)
        return selection

    def _index_of(self, snapshot_id):
        for index, item in enumerate(self.store.items):
            if item.id == snapshot_id:
                return index
        return None

    def _restore_by_id(self, snapshot_id):
        index = self._index_of(snapshot_id)
        if index is not None:
            self.restore_controller.restore(index)

    def _delete_by_id(self, snapshot_id):
        index = self._index_of(snapshot_id)
        if index is not None:
            self.restore_controller.delete_at(index)

    def _make_paste_callback(self, snapshot_id):
        def callback(_):
            self._dispatch(self._restore_by_id, snapshot_id)
        return callback

    def _make_delete_callback(self, snapshot_id):
        def callback(_):
            self._dispatch(self._delete_by_id, snapshot_id)
        return callback

    def clear_all(self, _):
        self._dispatch(self.restore_controller.delete_all)

    def _refresh_menu(self, _):
        """Rebuild stack-dependent menu entries when the stack has changed."""
        if self.store.revision == self._menu_revision:
            return
        self._menu_revision = self.store.revision

        items = self.store.items
        capacity = self.store.capacity
        self.status_item.title = f"Stack: {len(items)}/{capacity} items"
        for size, item in self.size_items.items():
            item.state = 1 if size == capacity else 0

        if len(self.manage_menu):
            self.manage_menu.clear()
        if not items:
            self.manage_menu.add(rumps.MenuItem("Your clipboard stack is empty", callback=None))
        for label, snapshot in zip(item_labels(items), items):
            captured = snapshot.captured_at.astimezone().strftime("%H:%M")
            entry = rumps.MenuItem(f"{label}  ({captured})")
            entry.add(rumps.MenuItem("Paste", callback=self._make_paste_callback(snapshot.id)))
            entry.add(rumps.MenuItem("Delete", callback=self._make_delete_callback(snapshot.id)))
            self.manage_menu.add(entry)
        self.manage_menu.add(None)  # Separator
        self.manage_menu.add(rumps.MenuItem("Clear All", callback=self.clear_all if items else None))

    def _make_capacity_callback(self, size):
        """Create a callback for the maximum stack size menu."""
        def set_capacity():
            if not self.store.set_capacity(size):
                self._notify(
                    "Stack Size Unchanged",
                    f"The stack holds {len(self.store)} items. Delete some before lowering the size to {size}."
                )

        def callback(_):
            self._dispatch(set_capacity)
        return callback

    def toggle_launch_at_login(self, _):
        enabled = not self.launch_item.state
        program = [sys.executable, os.path.abspath(__file__)]
        if login_item.set_enabled(enabled, program):
            self.launch_item.state = 1 if enabled else 0
        else:
            self._notify("Launch at Login", "Could not update the login item. See the log for details.")

    def _load_shortcuts(self):
        shortcuts = dict(config.DEFAULT_SHORTCUTS)
        saved = self.state_store.get(config.SHORTCUTS_KEY)
        if isinstance(saved, dict):
            for name, chord in saved.items():
                if name in shortcuts and isinstance(chord, str) and is_valid_shortcut(chord):
                    shortcuts[name] = chord
        return shortcuts

    def _shortcut_label(self, name):
        return f"{config.SHORTCUT_TITLES[name]}: {describe_shortcut(self.shortcuts[name])}"

    def _make_edit_shortcut_callback(self, name):
        """Create callback for editing a keyboard shortcut"""
        def callback(_):
            current = self.shortcuts[name]
            title = config.SHORTCUT_TITLES[name]

            script = f'''
            tell application "System Events"
                activate
                set dialogResult to display dialog "Shortcut for {title} (for example <cmd>+<shift>+c):" default answer "{current}" with title "{config.APP_NAME}" buttons {{"Cancel", "OK"}} default button "OK"
                if button returned of dialogResult is "OK" then
                    return text returned of dialogResult
                else
                    return "<<CANCELLED>>"
                end if
            end tell
            '''

            try:
                result = subprocess.run(
                    ['osascript', '-e', script],
                    capture_output=True,
                    text=True,
                    timeout=config.POPUP_TIMEOUT_SEC
                )
            except subprocess.TimeoutExpired:
                return
            except OSError as e:
                logger.error(f"Failed to show shortcut dialog: {e}")
                return

            if result.returncode != 0:
                return
            chord = result.stdout.strip().lower()
            if chord in ("", "<<cancelled>>", current):
                return
            if not is_valid_shortcut(chord):
                self._notify("Invalid Shortcut", f"'{chord}' is not a valid key combination.")
                return
            if chord in (c for n, c in self.shortcuts.items() if n != name):
                self._notify("Invalid Shortcut", f"{describe_shortcut(chord)} is already in use.")
                return

            self.shortcuts[name] = chord
            self.state_store.set(config.SHORTCUTS_KEY, dict(self.shortcuts))
            self.hotkeys.rebind(self.shortcuts)
            self.shortcut_items[name].title = self._shortcut_label(name)
            self._notify("Shortcut Changed", self._shortcut_label(name))

        return callback

    def run_app(self):
        if not check_accessibility(prompt=True):
            rumps.alert(
                "Accessibility Permissions Required",
                f"{config.APP_NAME} needs accessibility permissions to detect keyboard shortcuts "
                "and to copy and paste in other apps."
            )

        self.hotkeys.start()

        # Start rumps main loop
        self.run()


def main():
    parser = argparse.ArgumentParser(description=config.APP_NAME)
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--state-path", default=config.STATE_PATH, help="Path of the JSON state file")
    args = parser.parse_args()

    configure_logging(args.debug)
    app = ClipStackApp(state_path=args.state_path)
    app.run_app()


if __name__ == "__main__":
    main()
