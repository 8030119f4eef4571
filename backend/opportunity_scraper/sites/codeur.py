"""
Codeur.com scraper.

Codeur is a French freelance marketplace. Projects are listed per category
and paginated with a `page` query parameter.

Site structure:
- Listing page: `.project-item` / `[data-project-id]` cards
- Project URLs: `/projects/<numeric id>-<slug>`
- Budget shown as free text ("500 € à 1 000 €", "Moins de 500 €")
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
    extract_budget,
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


class CodeurScraper(BrowserScraper):
    """
    Scraper for Codeur.com.

    One category at a time, up to max_pages listing pages per category.
    A page with no cards ends the category.
    """

    source = OpportunitySource.CODEUR

    async def scrape_category(
        self,
        page: Page,
        category: OpportunityCategory,
        max_pages: int,
        timeout_ms: int,
    ) -> List[ScrapedOpportunity]:
        """
        Walk the paginated project list for one category.

        A failure on the first page propagates so the category is reported
        as failed; a failure on a later page keeps what was already scraped.
        """
        opportunities = []
        category_url = self.site.category_target(category)

        for page_num in range(1, max_pages + 1):
            url = add_query_params(category_url, page=page_num)
            try:
                await self.session.goto(page, url, timeout_ms)
                await self.session.wait_random(*self.site.page_pause_ms)
                cards = await self.session.collect_fragments(page, self.site.card_selector)
            except Exception as e:
                if page_num == 1:
                    raise
                self.session.log_error(f"Failed to scrape page {page_num} for category {category.value}", e)
                break

            if not cards:
                break

            for card in cards:
                opportunity = self._parse_card(card, category)
                if opportunity is not None:
                    opportunities.append(opportunity)

        return opportunities

    def _parse_card(self, card_html: str, category: OpportunityCategory) -> Optional[ScrapedOpportunity]:
        """Convert one project card into an opportunity, or None if unusable."""
        try:
            soup = parse_fragment(card_html)
            selectors = self.site.selectors

            title = select_text(soup, selectors['title'])
            link = select_first(soup, selectors['link'])
            url = normalize_url(link.get('href') if link else None, self.site.base_url)
            if not title or not url:
                return None

            # Without a stable ID the listing cannot be deduplicated downstream
            project_id = extract_source_id(url, self.site.id_pattern)
            if not project_id:
                return None

            description = select_text(soup, selectors['description'])
            budget = select_text(soup, selectors['budget'])
            location = select_text(soup, selectors['location'])

            return ScrapedOpportunity(
                source_id=f"{self.site.id_prefix}_{project_id}",
                title=title,
                description=description,
                source_url=url,
                category=category,
                tags=extract_tags(f"{title} {description}"),
                budget=budget or None,
                **extract_budget(budget),
                location=location or None,
                is_remote=infer_remote(location),
                posted_at=parse_relative_date(select_date_text(soup, selectors['date'])),
            )
        except Exception as e:
            self.session.logger.debug(f"[{self.source.value}] Skipping unparseable card: {e}")
            return None
