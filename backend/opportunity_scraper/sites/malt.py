"""
Malt scraper.

Malt has no category listing pages, so each category is mapped to a French
search query and the search results are paginated.

Site structure:
- Search page: `/search?q=<query>&page=N`
- Cards: `[data-testid="mission-card"]` (older markup: `.mission-card`)
- Mission URLs: `/mission/<slug-id>`
"""

from typing import List, Optional

from playwright.async_api import Page

from ..base import (
    OpportunityCategory,
    OpportunitySource,
    ScrapedOpportunity,
)
from ..utils import (
    add_query_params,
    extract_source_id,
    extract_tags,
    infer_remote,
    normalize_url,
    parse_fragment,
    parse_relative_date,
    select_date_text,
    select_first,
    select_text,
)
from .browser_scraper import BrowserScraper


class MaltScraper(BrowserScraper):
    """Scraper for Malt mission search results."""

    source = OpportunitySource.MALT

    def search_url(self, category: OpportunityCategory, page_num: int) -> str:
        """Build the search URL for a category's query and a page number."""
        query = self.site.category_target(category)
        return add_query_params(f"{self.site.base_url}/search", q=query, page=page_num)

    async def scrape_category(
        self,
        page: Page,
        category: OpportunityCategory,
        max_pages: int,
        timeout_ms: int,
    ) -> List[ScrapedOpportunity]:
        missions = []

        for page_num in range(1, max_pages + 1):
            try:
                await self.session.goto(page, self.search_url(category, page_num), timeout_ms)
                await self.session.wait_random(*self.site.page_pause_ms)
                cards = await self.session.collect_fragments(page, self.site.card_selector)
            except Exception as e:
                if page_num == 1:
                    raise
                self.session.log_error(f"Failed to scrape page {page_num} for category {category.value}", e)
                break

            # No more results
            if not cards:
                break

            for card in cards:
                mission = self._parse_card(card, category)
                if mission is not None:
                    missions.append(mission)

        return missions

    def _parse_card(self, card_html: str, category: OpportunityCategory) -> Optional[ScrapedOpportunity]:
        try:
            soup = parse_fragment(card_html)
            selectors = self.site.selectors

            title = select_text(soup, selectors['title'])
            link = select_first(soup, selectors['link'])
            url = normalize_url(link.get('href') if link else None, self.site.base_url)
            if not title or not url:
                return None

            mission_id = extract_source_id(url, self.site.id_pattern)
            if not mission_id:
                return None

            description = select_text(soup, selectors['description'])
            # The description fallback 'p' can land on the title line itself
            if description == title:
                description = ''
            company = select_text(soup, selectors['company'])
            location = select_text(soup, selectors['location'])

            return ScrapedOpportunity(
                source_id=f"{self.site.id_prefix}_{mission_id}",
                title=title,
                description=description,
                company=company or None,
                source_url=url,
                category=category,
                tags=extract_tags(f"{title} {description}"),
                location=location or None,
                is_remote=infer_remote(location),
                posted_at=parse_relative_date(select_date_text(soup, selectors['date'])),
            )
        except Exception as e:
            self.session.logger.debug(f"[{self.source.value}] Skipping unparseable card: {e}")
            return None
