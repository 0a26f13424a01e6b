"""Execution engine visiting every URL in every configured browser."""

import logging
from collections.abc import Callable, Sequence
from contextlib import AsyncExitStack
from dataclasses import dataclass

from play_url.drivers.base import BrowserHandle, PageHandle
from play_url.drivers.loading import load_driver_manifest
from play_url.drivers.manifest import DriverManifest
from play_url.failure_log import FailureLog
from play_url.models.config import RunConfig, UrlSpec
from play_url.models.result import (
    NO_STATUS,
    FailureRecord,
    RunResult,
    VisitOutcome,
)
from play_url.screenshot import ScreenshotContext, now_millis, render_screenshot_path
from play_url.validation import validate

log = logging.getLogger(__name__)


def format_error(error: BaseException) -> str:
    """Return the description of an error stored in failure records."""
    message = str(error)
    name = type(error).__name__
    return f"{name}: {message}" if message else name


@dataclass(frozen=True, kw_only=True)
class ExecutionEngine:
    """Runs all URLs in all browsers, one visit at a time.

    Browsers are processed in configuration order and URLs in list order,
    so failures (and screenshot indices) are reproducible between runs.
    Visits never share a page and only one navigation is in flight at a
    time. Problems with a single browser or visit end up in the failure
    log or the console, they never abort the run.
    """

    driver_loader: Callable[[str], DriverManifest] = load_driver_manifest
    clock: Callable[[], int] = now_millis

    async def run(self, config: RunConfig, urls: Sequence[UrlSpec]) -> RunResult:
        """Visit every URL in every configured browser.

        Args:
            config: Resolved run configuration
            urls: URL specs to visit, in order

        Returns:
            Run result with the failures in browser, then URL order

        """
        failures = FailureLog()

        for browser_name in config.browsers:
            await self._run_browser(browser_name, config, urls, failures)

        log.info(
            "Run completed: %d url(s), %d failure(s)", len(urls), len(failures)
        )
        return RunResult(total=len(urls), failures=failures.records())

    async def _run_browser(
        self,
        browser_name: str,
        config: RunConfig,
        urls: Sequence[UrlSpec],
        failures: FailureLog,
    ) -> None:
        """Launch one browser and visit all URLs in it."""
        try:
            manifest = self.driver_loader(browser_name)
        except Exception as e:
            log.error("browser %s not available!", browser_name)
            log.debug("Driver lookup for %s failed: %s", browser_name, e, exc_info=e)
            return

        async with AsyncExitStack() as stack:
            try:
                driver = await stack.enter_async_context(manifest.driver_factory())
                browser = await driver.launch(config.browser_options)
            except Exception as e:
                log.error("Failed to launch %s: %s", browser_name, e, exc_info=e)
                self._record_launch_failure(browser_name, urls, e, failures)
                return

            stack.push_async_callback(self._close_browser, browser, browser_name)

            log.info("Visiting %d url(s) in %s", len(urls), browser_name)
            for index, spec in enumerate(urls):
                await self._visit(browser, browser_name, index, spec, config, failures)

    async def _visit(
        self,
        browser: BrowserHandle,
        browser_name: str,
        index: int,
        spec: UrlSpec,
        config: RunConfig,
        failures: FailureLog,
    ) -> None:
        """Visit a single URL and record a failure if it is invalid."""
        if not spec.url:
            log.error("%s has no defined url!", spec.name or index)
            return

        try:
            page = await browser.new_page(spec.page_options)
        except Exception as e:
            log.error(
                "Failed to open page for %s in %s: %s", spec.url, browser_name, e
            )
            failures.append(
                FailureRecord(
                    browser=browser_name,
                    name=spec.name,
                    url=spec.url,
                    status=NO_STATUS,
                    error=format_error(e),
                )
            )
            return

        try:
            outcome = VisitOutcome()
            page.on_response(outcome.record_status)

            try:
                await page.goto(spec.url, spec.visit_options)
            except Exception as e:
                outcome.navigation_error = format_error(e)
                log.warning(
                    "Navigation to %s failed in %s: %s",
                    spec.url,
                    browser_name,
                    outcome.navigation_error,
                )

            error = outcome.navigation_error
            try:
                valid = await validate(
                    outcome, spec.validator, browser_name, page.native
                )
            except Exception as e:
                log.warning(
                    "Validator for %s raised in %s: %s", spec.url, browser_name, e
                )
                valid, error = False, format_error(e)

            if valid:
                log.info("✓ %s: %s (%d)", browser_name, spec.url, outcome.status)
                return

            log.info("✗ %s: %s (%d)", browser_name, spec.url, outcome.status)

            screenshot = None
            if config.screenshot_on_error:
                screenshot = await self._capture_screenshot(
                    page,
                    config.screenshot_on_error,
                    ScreenshotContext(
                        browser=browser_name,
                        timestamp=self.clock(),
                        status=outcome.status,
                        index=index,
                        name=spec.name,
                    ),
                )

            failures.append(
                FailureRecord(
                    browser=browser_name,
                    name=spec.name,
                    url=spec.url,
                    status=outcome.status,
                    error=error,
                    screenshot=screenshot,
                )
            )
        finally:
            await self._close_page(page, spec.url)

    async def _capture_screenshot(
        self, page: PageHandle, template: str, context: ScreenshotContext
    ) -> str | None:
        """Save a screenshot of a failed visit, returning its path if written."""
        path = render_screenshot_path(template, context)
        try:
            await page.screenshot(path)
        except Exception as e:
            log.warning("Could not save screenshot %s: %s", path, e)
            return None

        log.info("Saved screenshot %s", path)
        return path

    def _record_launch_failure(
        self,
        browser_name: str,
        urls: Sequence[UrlSpec],
        error: Exception,
        failures: FailureLog,
    ) -> None:
        """Record every defined URL as failed in a browser that did not start."""
        for spec in urls:
            if not spec.url:
                continue
            failures.append(
                FailureRecord(
                    browser=browser_name,
                    name=spec.name,
                    url=spec.url,
                    status=NO_STATUS,
                    error=format_error(error),
                )
            )

    async def _close_page(self, page: PageHandle, url: str) -> None:
        try:
            await page.close()
        except Exception as e:
            log.warning("Failed to close page for %s: %s", url, e)

    async def _close_browser(self, browser: BrowserHandle, browser_name: str) -> None:
        try:
            await browser.close()
        except Exception as e:
            log.warning("Failed to close %s: %s", browser_name, e)
