"""
Shared run loop for the browser-driven site scrapers.

Subclasses set `source` and implement `scrape_category()`; everything around
it (session lifecycle, category defaults, per-category error collection,
pacing between categories) lives here.
"""

from abc import abstractmethod
from typing import List, Optional

from playwright.async_api import Page

from ..base import (
    BaseScraper,
    OpportunityCategory,
    ScrapedOpportunity,
    ScraperConfig,
    ScraperResult,
)
from ..config import get_site_config
from ..crawlers.browser import BrowserSession
from ..settings import Settings, get_settings


class BrowserScraper(BaseScraper):
    """
    Base class for scrapers that walk category listings in one browser page.

    A failing category is recorded in the result and the next one runs; a
    failure outside the category loop (browser launch, page creation) is
    recorded as a whole-run failure. The browser is always closed.
    """

    def __init__(self, session: Optional[BrowserSession] = None, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.site = get_site_config(self.source)
        self.session = session or BrowserSession(self.source, self.settings)

    async def scrape(self, config: ScraperConfig) -> ScraperResult:
        result = ScraperResult(source=self.source)

        try:
            async with self.session:
                page = await self.session.create_page()
                try:
                    self.session.log_info("Starting scrape")
                    await self._scrape_categories(page, config, result)
                    self.session.log_info(f"Scraped {len(result.opportunities)} opportunities")
                finally:
                    try:
                        await page.close()
                    except Exception as e:
                        self.session.logger.warning(f"Error closing page: {e}")

        except Exception as e:
            message = f"Scraping failed: {e}"
            self.session.log_error(message)
            result.errors.append(message)

        return result

    async def _scrape_categories(self, page: Page, config: ScraperConfig, result: ScraperResult):
        categories = config.categories
        if categories is None:
            categories = list(self.site.default_categories)
        max_pages = config.max_pages or self.settings.default_max_pages
        timeout_ms = config.timeout or self.settings.navigation_timeout_ms

        for category in categories:
            try:
                opportunities = await self.scrape_category(page, category, max_pages, timeout_ms)
                result.opportunities.extend(opportunities)
                await self.session.wait_random(*self.site.category_pause_ms)
            except Exception as e:
                message = f"Failed to scrape category {category.value}: {e}"
                self.session.log_error(message)
                result.errors.append(message)

    @abstractmethod
    async def scrape_category(
        self,
        page: Page,
        category: OpportunityCategory,
        max_pages: int,
        timeout_ms: int,
    ) -> List[ScrapedOpportunity]:
        """
        Scrape up to max_pages listing pages for one category.

        Raising marks the category as failed without affecting the others.
        """
