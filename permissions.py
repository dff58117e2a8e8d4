"""Accessibility permission checks."""

import logging

from AppKit import NSWorkspace
from ApplicationServices import AXIsProcessTrustedWithOptions, kAXTrustedCheckOptionPrompt
from Foundation import NSURL

import config

logger = logging.getLogger(__name__)


def check_accessibility(prompt=True):
    """Return True if the process may post and observe key events."""
    trusted = bool(AXIsProcessTrustedWithOptions({kAXTrustedCheckOptionPrompt: prompt}))
    logger.debug(f"Accessibility trusted: {trusted}")
    return trusted


def open_accessibility_preferences():
    url = NSURL.URLWithString_(config.ACCESSIBILITY_PREFS_URL)
    if not NSWorkspace.sharedWorkspace().openURL_(url):
        logger.error("Failed to open Accessibility settings")
