"""
Tests for the shared browser session lifecycle.
"""

import asyncio
import logging

import pytest

from opportunity_scraper.base import OpportunitySource
from opportunity_scraper.crawlers import browser as browser_module
from opportunity_scraper.crawlers.browser import COLLECT_FRAGMENTS_JS, BrowserSession


class TestBrowserLifecycle:
    """Test launch, reuse and teardown of the browser."""

    def test_init_is_idempotent(self, web):
        session = BrowserSession(OpportunitySource.CODEUR)

        async def go():
            first = await session.init_browser()
            second = await session.init_browser()
            return first, second

        first, second = asyncio.run(go())

        assert first is second
        assert len(web.launches) == 1
        assert session.is_open

    def test_launch_options_come_from_settings(self, web):
        session = BrowserSession(OpportunitySource.MALT)

        asyncio.run(session.init_browser())

        assert web.launches[0]['headless'] is True
        assert '--no-sandbox' in web.launches[0]['args']
        context = web.contexts[0]
        assert context['viewport'] == {'width': 1920, 'height': 1080}
        assert context['locale'] == 'fr-FR'
        assert context['extra_http_headers']['Accept-Language'].startswith('fr-FR')

    def test_close_resets_and_allows_relaunch(self, web):
        session = BrowserSession(OpportunitySource.CODEUR)

        async def go():
            await session.init_browser()
            await session.close_browser()
            closed = session.is_open
            await session.init_browser()
            return closed

        was_open_after_close = asyncio.run(go())

        assert was_open_after_close is False
        assert len(web.launches) == 2
        assert web.closed_contexts == 1
        assert web.closed_browsers == 1
        assert web.stopped == 1

    def test_close_without_init_is_noop(self, web):
        session = BrowserSession(OpportunitySource.CODEUR)

        asyncio.run(session.close_browser())

        assert web.closed_browsers == 0
        assert web.stopped == 0

    def test_failed_launch_cleans_up(self, web):
        web.fail_launch = RuntimeError("Executable doesn't exist")
        session = BrowserSession(OpportunitySource.CODEUR)

        with pytest.raises(RuntimeError, match="Executable"):
            asyncio.run(session.init_browser())

        assert not session.is_open
        assert web.stopped == 1

    def test_async_context_manager(self, web):
        async def go():
            async with BrowserSession(OpportunitySource.WE_WORK_REMOTELY) as session:
                assert session.is_open
            return session

        session = asyncio.run(go())

        assert not session.is_open
        assert web.closed_browsers == 1


class TestPages:
    """Test page creation and resource blocking."""

    def test_create_page_installs_resource_filter(self, web):
        session = BrowserSession(OpportunitySource.CODEUR)

        page = asyncio.run(session.create_page())

        assert len(page.routes) == 1
        assert page.routes[0][0] == "**/*"

    def test_heavy_resources_are_blocked(self, web, make_route):
        session = BrowserSession(OpportunitySource.CODEUR)
        page = asyncio.run(session.create_page())
        handler = page.routes[0][1]

        image, font, document = make_route("image"), make_route("font"), make_route("document")

        async def go():
            for route in (image, font, document):
                await handler(route)

        asyncio.run(go())

        assert image.aborted and not image.continued
        assert font.aborted
        assert document.continued and not document.aborted

    def test_create_page_without_context_raises(self, web, monkeypatch):
        session = BrowserSession(OpportunitySource.CODEUR)

        async def no_init():
            return None

        monkeypatch.setattr(session, "init_browser", no_init)

        with pytest.raises(RuntimeError, match="Browser context not initialized"):
            asyncio.run(session.create_page())

    def test_goto_waits_for_network_idle(self, web):
        session = BrowserSession(OpportunitySource.CODEUR)

        async def go():
            page = await session.create_page()
            await session.goto(page, "https://www.codeur.com/projects", 5000)

        asyncio.run(go())

        assert web.visited == [("https://www.codeur.com/projects", "networkidle", 5000)]

    def test_collect_fragments(self, web):
        web.serve("https://example.com/", "<ul><li class='job'>A</li><li class='job'>B</li></ul>")
        session = BrowserSession(OpportunitySource.CODEUR)

        async def go():
            page = await session.create_page()
            await session.goto(page, "https://example.com/", 5000)
            return await session.collect_fragments(page, "li.job")

        fragments = asyncio.run(go())

        assert fragments == ['<li class="job">A</li>', '<li class="job">B</li>']

    def test_fragment_snippet_absolutizes_links(self):
        assert "querySelectorAll(selector)" in COLLECT_FRAGMENTS_JS
        assert "a.href" in COLLECT_FRAGMENTS_JS


class TestPacingAndLogging:

    def test_wait_random_stays_in_range(self, monkeypatch):
        calls = []

        def fake_randint(low, high):
            calls.append((low, high))
            return low

        monkeypatch.setattr(browser_module.random, "randint", fake_randint)
        session = BrowserSession(OpportunitySource.CODEUR)

        asyncio.run(session.wait_random(1, 5))

        assert calls == [(1, 5)]

    def test_log_messages_are_prefixed(self, caplog):
        session = BrowserSession(OpportunitySource.CODEUR)
        caplog.set_level(logging.INFO, logger="scraper.codeur")

        session.log_info("Starting scrape")
        session.log_error("Failed to scrape page 2", ValueError("boom"))

        messages = [record.getMessage() for record in caplog.records]
        assert "[CODEUR] Starting scrape" in messages
        assert "[CODEUR] Failed to scrape page 2: boom" in messages
        assert all(record.name == "scraper.codeur" for record in caplog.records)
