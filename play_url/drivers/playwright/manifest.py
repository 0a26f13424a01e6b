"""Playwright driver manifests, one per browser engine."""

from functools import partial

from play_url.drivers.manifest import DriverManifest
from play_url.drivers.playwright.driver import PlaywrightDriver

chromium_manifest = DriverManifest(
    engine="chromium",
    driver_factory=partial(PlaywrightDriver.from_engine, "chromium"),
)

firefox_manifest = DriverManifest(
    engine="firefox",
    driver_factory=partial(PlaywrightDriver.from_engine, "firefox"),
)

webkit_manifest = DriverManifest(
    engine="webkit",
    driver_factory=partial(PlaywrightDriver.from_engine, "webkit"),
)
