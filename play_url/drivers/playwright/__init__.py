"""Playwright driver module."""

from play_url.drivers.playwright.driver import (
    PlaywrightBrowser,
    PlaywrightDriver,
    PlaywrightPage,
)
from play_url.drivers.playwright.manifest import (
    chromium_manifest,
    firefox_manifest,
    webkit_manifest,
)

__all__ = [
    "PlaywrightBrowser",
    "PlaywrightDriver",
    "PlaywrightPage",
    "chromium_manifest",
    "firefox_manifest",
    "webkit_manifest",
]
