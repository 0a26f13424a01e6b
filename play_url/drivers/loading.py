"""Lookup of browser drivers registered under the ``play_url.drivers`` group."""

from collections.abc import Sequence
from importlib.metadata import entry_points

from play_url.drivers.manifest import DriverManifest

ENTRY_POINT_GROUP = "play_url.drivers"


class DriverNotFoundError(Exception):
    """Raised when a browser has no usable driver."""


def available_drivers() -> Sequence[str]:
    """Return the browser identifiers with a registered driver."""
    return sorted({entry.name for entry in entry_points(group=ENTRY_POINT_GROUP)})


def load_driver_manifest(browser: str) -> DriverManifest:
    """Import the driver manifest registered for a browser.

    Args:
        browser: Browser identifier, the entry point name (e.g. "chromium")

    Returns:
        The driver manifest of the first matching entry point

    Raises:
        DriverNotFoundError: If no driver is registered for the browser, its
            module cannot be imported or it does not point at a manifest

    """
    matches = entry_points(group=ENTRY_POINT_GROUP, name=browser)
    entry = next(iter(matches), None)
    if entry is None:
        available = ", ".join(available_drivers()) or "none"
        raise DriverNotFoundError(
            f"No driver registered for '{browser}' (available: {available})"
        )

    try:
        manifest = entry.load()
    except Exception as e:
        raise DriverNotFoundError(
            f"Driver for '{browser}' failed to import from {entry.value}: {e}"
        ) from e

    if not isinstance(manifest, DriverManifest):
        raise DriverNotFoundError(f"{entry.value} is not a driver manifest")
    return manifest
