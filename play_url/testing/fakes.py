"""In-memory browser drivers for exercising the engine without browsers."""

from collections.abc import AsyncGenerator, Callable, Mapping, Sequence
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any

from play_url.drivers.base import BrowserDriver, BrowserHandle, PageHandle
from play_url.drivers.loading import DriverNotFoundError
from play_url.drivers.manifest import DriverManifest


@dataclass(frozen=True, kw_only=True)
class PageScript:
    """Scripted behaviour of a page when navigating to a URL.

    Every status in ``statuses`` is reported to the response callbacks in
    order, then ``error`` (if any) is raised from ``goto``.
    """

    statuses: Sequence[int] = (200,)
    error: Exception | None = None
    screenshot_error: Exception | None = None


@dataclass(kw_only=True)
class FakePage(PageHandle):
    """Page replaying a script for the URL it navigates to."""

    engine: str
    drivers: "FakeDrivers" = field(repr=False)
    options: Mapping[str, Any] = field(default_factory=dict)
    callbacks: list[Callable[[int], None]] = field(default_factory=list)
    screenshots: list[str] = field(default_factory=list)
    url: str | None = None
    closed: bool = False

    @property
    def native(self) -> "FakePage":
        """Return the page itself."""
        return self

    async def goto(self, url: str, options: Mapping[str, Any]) -> None:
        """Replay the script of ``url``."""
        self.url = url
        self.drivers.events.append(f"goto {self.engine} {url}")
        script = self.drivers.script_for(self.engine, url)
        for status in script.statuses:
            for callback in self.callbacks:
                callback(status)
        if script.error is not None:
            raise script.error

    def on_response(self, callback: Callable[[int], None]) -> None:
        """Register a status callback."""
        self.callbacks.append(callback)

    async def screenshot(self, path: str) -> None:
        """Record the screenshot path, or raise the scripted error."""
        self.drivers.events.append(f"screenshot {self.engine} {path}")
        if self.url is not None:
            script = self.drivers.script_for(self.engine, self.url)
            if script.screenshot_error is not None:
                raise script.screenshot_error
        self.screenshots.append(path)

    async def close(self) -> None:
        """Mark the page closed."""
        self.closed = True
        self.drivers.events.append(f"close page {self.engine}")


@dataclass(kw_only=True)
class FakeBrowser(BrowserHandle):
    """Launched fake browser."""

    engine: str
    drivers: "FakeDrivers" = field(repr=False)
    closed: bool = False

    async def new_page(self, options: Mapping[str, Any]) -> FakePage:
        """Open a fake page, or raise ``new_page_error``."""
        self.drivers.events.append(f"new page {self.engine}")
        if self.drivers.new_page_error is not None:
            raise self.drivers.new_page_error
        page = FakePage(engine=self.engine, drivers=self.drivers, options=options)
        self.drivers.pages.append(page)
        return page

    async def close(self) -> None:
        """Mark the browser closed."""
        self.closed = True
        self.drivers.events.append(f"close {self.engine}")


@dataclass(frozen=True, kw_only=True)
class FakeDriver(BrowserDriver):
    """Driver launching fake browsers."""

    engine: str
    drivers: "FakeDrivers" = field(repr=False)

    async def launch(self, options: Mapping[str, Any]) -> FakeBrowser:
        """Launch a fake browser, or raise the engine's launch error."""
        self.drivers.events.append(f"launch {self.engine}")
        self.drivers.launch_options.append(options)
        if (error := self.drivers.launch_errors.get(self.engine)) is not None:
            raise error
        browser = FakeBrowser(engine=self.engine, drivers=self.drivers)
        self.drivers.browsers.append(browser)
        return browser


@dataclass(kw_only=True)
class FakeDrivers:
    """Registry of fake drivers usable as an engine ``driver_loader``.

    Scripts are looked up by ``(engine, url)`` first, then by URL; URLs
    without a script answer with a single 200 response.
    """

    scripts: dict[str, PageScript] = field(default_factory=dict)
    engine_scripts: dict[tuple[str, str], PageScript] = field(default_factory=dict)
    engines: Sequence[str] = ("chromium", "firefox", "webkit")
    launch_errors: dict[str, Exception] = field(default_factory=dict)
    new_page_error: Exception | None = None
    events: list[str] = field(default_factory=list)
    launch_options: list[Mapping[str, Any]] = field(default_factory=list)
    browsers: list[FakeBrowser] = field(default_factory=list)
    pages: list[FakePage] = field(default_factory=list)

    def script_for(self, engine: str, url: str) -> PageScript:
        """Return the script for a visit of ``url`` in ``engine``."""
        if (script := self.engine_scripts.get((engine, url))) is not None:
            return script
        return self.scripts.get(url, PageScript())

    def load(self, key: str) -> DriverManifest:
        """Return a manifest for a fake engine, mirroring entry point loading."""
        if key not in self.engines:
            raise DriverNotFoundError(
                f"No driver registered for '{key}' "
                f"(available: {', '.join(self.engines)})"
            )
        return DriverManifest(engine=key, driver_factory=lambda: self._driver(key))

    @asynccontextmanager
    async def _driver(self, engine: str) -> AsyncGenerator[FakeDriver, None]:
        self.events.append(f"start {engine}")
        try:
            yield FakeDriver(engine=engine, drivers=self)
        finally:
            self.events.append(f"stop {engine}")
