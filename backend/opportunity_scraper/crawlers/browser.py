"""
Headless browser session shared by the site scrapers.

Uses Playwright's async API. Each scraper owns one session (and therefore
one browser + context pair), so a crash in one source cannot corrupt
another source's browser state.
"""

import asyncio
import logging
import random
from typing import List, Optional

from playwright.async_api import async_playwright, Browser, BrowserContext, Page, Route

from ..base import OpportunitySource
from ..settings import Settings, get_settings

logger = logging.getLogger(__name__)


# Runs inside the page: returns the outerHTML of every element matching a
# CSS selector list, with anchor hrefs rewritten to absolute URLs.
COLLECT_FRAGMENTS_JS = """
(selector) => Array.from(document.querySelectorAll(selector)).map((el) => {
    el.querySelectorAll('a[href]').forEach((a) => a.setAttribute('href', a.href));
    return el.outerHTML;
})
"""


class BrowserSession:
    """
    Lazily launched Chromium browser + context for one scraper.

    Lifecycle: uninitialized -> launched -> closed (== uninitialized again).
    init_browser() is idempotent and close_browser() resets the session so
    it can be relaunched. Scrapers wrap every run in `async with session:`
    so no browser process outlives a run.
    """

    def __init__(self, source: OpportunitySource, settings: Optional[Settings] = None):
        self.source = source
        self.settings = settings or get_settings()
        self.logger = logging.getLogger(f"scraper.{source.value.lower()}")
        self._playwright = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None

    @property
    def is_open(self) -> bool:
        return self._browser is not None

    async def init_browser(self) -> Browser:
        """Launch the browser and context if not already done."""
        if self.is_open:
            return self._browser

        self._playwright = await async_playwright().start()
        try:
            self._browser = await self._playwright.chromium.launch(
                headless=self.settings.headless,
                args=list(self.settings.browser_args),
            )
            # Fixed viewport and French-first locale to normalize site responses
            self._context = await self._browser.new_context(
                viewport={
                    'width': self.settings.viewport_width,
                    'height': self.settings.viewport_height,
                },
                locale=self.settings.locale,
                extra_http_headers={
                    'Accept-Language': self.settings.accept_language,
                },
            )
        except Exception:
            # Clean up partial initialization
            await self.close_browser()
            raise

        logger.debug(f"Browser launched for {self.source.value}")
        return self._browser

    async def create_page(self) -> Page:
        """
        Open a new page with heavy resources blocked.

        Raises:
            RuntimeError: If the context is missing after initialization
        """
        await self.init_browser()

        if self._context is None:
            raise RuntimeError("Browser context not initialized")

        page = await self._context.new_page()
        await page.route("**/*", self._block_heavy_resources)
        return page

    async def _block_heavy_resources(self, route: Route):
        """Abort images, stylesheets, fonts and media; let everything else through."""
        if route.request.resource_type in self.settings.blocked_resource_types:
            await route.abort()
        else:
            await route.continue_()

    async def close_browser(self):
        """Close context, browser and driver, then reset to uninitialized."""
        if self._context is not None:
            try:
                await self._context.close()
            except Exception as e:
                logger.warning(f"Error closing context: {e}")
            self._context = None

        if self._browser is not None:
            try:
                await self._browser.close()
            except Exception as e:
                logger.warning(f"Error closing browser: {e}")
            self._browser = None

        if self._playwright is not None:
            try:
                await self._playwright.stop()
            except Exception as e:
                logger.warning(f"Error stopping playwright: {e}")
            self._playwright = None

    async def wait_random(self, min_ms: int = 1000, max_ms: int = 3000):
        """Sleep for a uniformly random duration in [min_ms, max_ms]."""
        delay = random.randint(min_ms, max_ms)
        await asyncio.sleep(delay / 1000)

    async def goto(self, page: Page, url: str, timeout_ms: int):
        """Navigate and wait for network idle, bounded by timeout_ms."""
        self.logger.debug(f"[{self.source.value}] Navigating to {url}")
        await page.goto(url, wait_until='networkidle', timeout=timeout_ms)

    async def collect_fragments(self, page: Page, selector: str) -> List[str]:
        """Return the outerHTML of every element matching selector."""
        fragments = await page.evaluate(COLLECT_FRAGMENTS_JS, selector)
        return list(fragments or [])

    def log_info(self, message: str):
        self.logger.info(f"[{self.source.value}] {message}")

    def log_error(self, message: str, error: Optional[BaseException] = None):
        if error is not None:
            message = f"{message}: {error}"
        self.logger.error(f"[{self.source.value}] {message}")

    async def __aenter__(self):
        await self.init_browser()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close_browser()
