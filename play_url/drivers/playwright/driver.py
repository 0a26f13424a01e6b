"""Browser driver implementation backed by Playwright."""

import logging
from collections.abc import AsyncGenerator, Callable, Mapping
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any

from playwright.async_api import Browser, BrowserType, Page, async_playwright

from play_url.drivers.base import BrowserDriver, BrowserHandle, PageHandle

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class PlaywrightPage(PageHandle):
    """Playwright page."""

    page: Page = field(repr=False)

    @property
    def native(self) -> Page:
        """Return the Playwright page."""
        return self.page

    async def goto(self, url: str, options: Mapping[str, Any]) -> None:
        """Navigate with Playwright `goto` options (timeout, wait_until)."""
        await self.page.goto(url, **options)

    def on_response(self, callback: Callable[[int], None]) -> None:
        """Forward the status of every page response to the callback."""
        self.page.on("response", lambda response: callback(response.status))

    async def screenshot(self, path: str) -> None:
        """Save a screenshot of the viewport."""
        await self.page.screenshot(path=path)

    async def close(self) -> None:
        """Close the page."""
        await self.page.close()


@dataclass(frozen=True, kw_only=True)
class PlaywrightBrowser(BrowserHandle):
    """Launched Playwright browser."""

    browser: Browser = field(repr=False)

    async def new_page(self, options: Mapping[str, Any]) -> PlaywrightPage:
        """Open a page in a new context with Playwright `new_page` options."""
        return PlaywrightPage(page=await self.browser.new_page(**options))

    async def close(self) -> None:
        """Close the browser."""
        await self.browser.close()


@dataclass(frozen=True, kw_only=True)
class PlaywrightDriver(BrowserDriver):
    """Launches browsers of one Playwright engine (chromium, firefox, webkit)."""

    engine: str
    browser_type: BrowserType = field(repr=False)

    @classmethod
    @asynccontextmanager
    async def from_engine(
        cls, engine: str
    ) -> AsyncGenerator["PlaywrightDriver", None]:
        """Create driver with managed Playwright lifecycle."""
        async with async_playwright() as playwright:
            yield cls(engine=engine, browser_type=getattr(playwright, engine))

    async def launch(self, options: Mapping[str, Any]) -> PlaywrightBrowser:
        """Launch a browser of this engine."""
        log.info("Launching %s (options=%s)", self.engine, dict(options))
        browser = await self.browser_type.launch(**options)
        log.info("Launched %s %s", self.engine, browser.version)
        return PlaywrightBrowser(browser=browser)
