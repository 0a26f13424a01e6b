"""Fixtures for integration tests against real browsers."""

from collections.abc import AsyncGenerator

import pytest
from aiohttp import web
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

# Inline favicon so browsers do not request /favicon.ico after the document.
HEAD = '<head><title>%s</title><link rel="icon" href="data:,"></head>'

PAGES = {
    "/": (200, f"<html>{HEAD % 'Home'}<body>ok</body></html>"),
    "/missing": (404, f"<html>{HEAD % 'Missing'}<body>not found</body></html>"),
    "/broken": (500, f"<html>{HEAD % 'Broken'}<body>server error</body></html>"),
}


async def _page(request: web.Request) -> web.Response:
    status, body = PAGES[request.path]
    return web.Response(status=status, text=body, content_type="text/html")


async def _redirect(request: web.Request) -> web.Response:
    raise web.HTTPFound("/")


@pytest.fixture
async def site_url() -> AsyncGenerator[str, None]:
    """Serve a small site on a random local port."""
    app = web.Application()
    for path in PAGES:
        app.router.add_get(path, _page)
    app.router.add_get("/redirect", _redirect)

    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "127.0.0.1", 0)
    await site.start()
    port = runner.addresses[0][1]
    try:
        yield f"http://127.0.0.1:{port}"
    finally:
        await runner.cleanup()


@pytest.fixture
async def chromium_available() -> None:
    """Skip when the chromium binary is not installed."""
    async with async_playwright() as playwright:
        try:
            browser = await playwright.chromium.launch()
        except PlaywrightError as e:
            pytest.skip(f"chromium not available: {e}")
        await browser.close()
