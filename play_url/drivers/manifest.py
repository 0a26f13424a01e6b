"""Driver manifest definition for the plugin system."""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass

from play_url.drivers.base import BrowserDriver


@dataclass(frozen=True, kw_only=True)
class DriverManifest:
    """Manifest describing a browser driver plugin.

    The manifest names the browser engine and references the driver factory,
    so drivers are only started when a run actually uses their browser.
    """

    engine: str
    driver_factory: Callable[[], AbstractAsyncContextManager[BrowserDriver]]
