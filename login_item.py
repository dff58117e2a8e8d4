"""Launch-at-login support through a per-user LaunchAgent."""

import logging
import os
import plistlib

import config

logger = logging.getLogger(__name__)


def launch_agent_path(label=config.LAUNCH_AGENT_LABEL):
    return os.path.join(os.path.expanduser("~"), "Library", "LaunchAgents", f"{label}.plist")


def is_enabled(path=None):
    return os.path.exists(path or launch_agent_path())


def set_enabled(enabled, program_arguments, path=None, label=config.LAUNCH_AGENT_LABEL):
    """Install or remove the LaunchAgent. Returns False if the change failed."""
    path = path or launch_agent_path(label)
    try:
        if not enabled:
            if os.path.exists(path):
                os.remove(path)
            return True

        payload = {
            "Label": label,
            "ProgramArguments": list(program_arguments),
            "RunAtLoad": True,
            "ProcessType": "Interactive",
        }
        parent = os.path.dirname(path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        with open(path, "wb") as f:
            plistlib.dump(payload, f)
    except OSError as e:
        logger.error(f"Failed to set launch at login: {e}")
        return False
    return True
