"""Abstract interfaces for browser drivers."""

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from typing import Any


class PageHandle(ABC):
    """A single open page (tab) in a launched browser."""

    @property
    @abstractmethod
    def native(self) -> Any:
        """Return the underlying page object, handed to validators."""

    @abstractmethod
    async def goto(self, url: str, options: Mapping[str, Any]) -> None:
        """Navigate to a URL.

        Args:
            url: URL to open
            options: Driver specific navigation options (e.g. timeout)

        Raises:
            Exception: If navigation fails or times out

        """

    @abstractmethod
    def on_response(self, callback: Callable[[int], None]) -> None:
        """Register a callback receiving the status of every response.

        Must be called before ``goto`` to observe the document response.
        """

    @abstractmethod
    async def screenshot(self, path: str) -> None:
        """Save a screenshot of the page to ``path``."""

    @abstractmethod
    async def close(self) -> None:
        """Close the page."""


class BrowserHandle(ABC):
    """A launched browser instance shared by all visits of one browser."""

    @abstractmethod
    async def new_page(self, options: Mapping[str, Any]) -> PageHandle:
        """Open a new page with driver specific options."""

    @abstractmethod
    async def close(self) -> None:
        """Close the browser and all of its pages."""


class BrowserDriver(ABC):
    """Launches browsers of a single engine."""

    @abstractmethod
    async def launch(self, options: Mapping[str, Any]) -> BrowserHandle:
        """Launch a browser.

        Args:
            options: Launch options passed verbatim to the engine

        Returns:
            Handle for the launched browser

        """
