"""
Pytest configuration and fixtures for the opportunity scraper tests.

The `web` fixture swaps Playwright for an in-memory driver: pages are served
from HTML fixtures and the in-page fragment snippet is answered with
BeautifulSoup CSS selection, so scrapers run end to end without a browser.
"""

from datetime import datetime, timezone
from pathlib import Path

import pytest
from bs4 import BeautifulSoup

from opportunity_scraper.base import (
    BaseScraper,
    OpportunityCategory,
    ScrapedOpportunity,
    ScraperResult,
)
from opportunity_scraper.crawlers import browser as browser_module
from opportunity_scraper.crawlers.browser import BrowserSession


FIXTURES_DIR = Path(__file__).parent / "fixtures"
EMPTY_PAGE = "<html><body></body></html>"


class FakeWeb:
    """Serves HTML by URL and records browser lifecycle calls."""

    def __init__(self):
        self.pages = {}
        self.visited = []
        self.launches = []
        self.contexts = []
        self.created_pages = []
        self.closed_contexts = 0
        self.closed_browsers = 0
        self.stopped = 0
        self.fail_launch = None

    def serve(self, url, content):
        """Register HTML (or an exception to raise) for a URL."""
        self.pages[url] = content

    def visited_urls(self):
        return [url for url, _, _ in self.visited]


class FakeRequest:
    def __init__(self, resource_type):
        self.resource_type = resource_type


class FakeRoute:
    def __init__(self, resource_type):
        self.request = FakeRequest(resource_type)
        self.aborted = False
        self.continued = False

    async def abort(self):
        self.aborted = True

    async def continue_(self):
        self.continued = True


class FakePage:
    def __init__(self, web):
        self.web = web
        self.html = EMPTY_PAGE
        self.routes = []
        self.closed = False

    async def route(self, pattern, handler):
        self.routes.append((pattern, handler))

    async def goto(self, url, wait_until=None, timeout=None):
        self.web.visited.append((url, wait_until, timeout))
        content = self.web.pages.get(url, EMPTY_PAGE)
        if isinstance(content, Exception):
            raise content
        self.html = content

    async def evaluate(self, script, selector):
        soup = BeautifulSoup(self.html, "html.parser")
        return [str(element) for element in soup.select(selector)]

    async def close(self):
        self.closed = True


class FakeContext:
    def __init__(self, web):
        self.web = web

    async def new_page(self):
        page = FakePage(self.web)
        self.web.created_pages.append(page)
        return page

    async def close(self):
        self.web.closed_contexts += 1


class FakeBrowser:
    def __init__(self, web):
        self.web = web

    async def new_context(self, **kwargs):
        self.web.contexts.append(kwargs)
        return FakeContext(self.web)

    async def close(self):
        self.web.closed_browsers += 1


class FakeChromium:
    def __init__(self, web):
        self.web = web

    async def launch(self, **kwargs):
        if self.web.fail_launch is not None:
            raise self.web.fail_launch
        self.web.launches.append(kwargs)
        return FakeBrowser(self.web)


class FakePlaywright:
    def __init__(self, web):
        self.web = web
        self.chromium = FakeChromium(web)

    async def stop(self):
        self.web.stopped += 1


class FakePlaywrightManager:
    def __init__(self, web):
        self.web = web

    async def start(self):
        return FakePlaywright(self.web)


@pytest.fixture
def web(monkeypatch):
    """Fake browser backend with pacing disabled."""
    fake_web = FakeWeb()

    async def no_wait(self, min_ms=1000, max_ms=3000):
        return None

    monkeypatch.setattr(browser_module, "async_playwright", lambda: FakePlaywrightManager(fake_web))
    monkeypatch.setattr(BrowserSession, "wait_random", no_wait)
    return fake_web


@pytest.fixture
def fixture_html():
    """Load an HTML fixture by file name."""
    def load(name):
        return (FIXTURES_DIR / name).read_text(encoding="utf-8")
    return load


@pytest.fixture
def make_route():
    return FakeRoute


class StubScraper(BaseScraper):
    """Scraper double that returns canned opportunities or raises."""

    def __init__(self, source, opportunities=None, errors=None, raises=None):
        self.source = source
        self.opportunities = list(opportunities or [])
        self.errors = list(errors or [])
        self.raises = raises
        self.calls = []

    async def scrape(self, config):
        self.calls.append(config)
        if self.raises is not None:
            raise self.raises
        return ScraperResult(
            source=self.source,
            opportunities=list(self.opportunities),
            errors=list(self.errors),
        )


@pytest.fixture
def stub_scraper():
    return StubScraper


@pytest.fixture
def sample_opportunity():
    """A fully populated Codeur opportunity."""
    return ScrapedOpportunity(
        source_id="codeur_412345",
        title="Création d'un site vitrine en React",
        description="Nous cherchons un développeur React et TypeScript.",
        source_url="https://www.codeur.com/projects/412345-site-vitrine-react",
        category=OpportunityCategory.WEB_DEVELOPMENT,
        posted_at=datetime(2024, 5, 2, 9, 30, tzinfo=timezone.utc),
        location="Télétravail",
        is_remote=True,
        tags=["react", "typescript"],
        budget="1 000 € - 2 000 €",
        budget_min=1000.0,
        budget_max=2000.0,
        currency="EUR",
    )
