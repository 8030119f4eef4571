"""
We Work Remotely (WWR) scraper.

Every WWR job is remote. The category list pages only carry title, company,
region and date, so each listing's own page is opened to read the full
description.

Site structure:
- Category page: `li.feature` / `li[data-job-id]` entries
- Job URLs: `/remote-jobs/<id>-<slug>`, the numeric id is the listing key
- Detail page: `#job-listing-show-container`
"""

from dataclasses import dataclass
from typing import List, Optional, Set

from playwright.async_api import Page

from ..base import (
    OpportunityCategory,
    OpportunitySource,
    ScrapedOpportunity,
)
from ..utils import (
    add_query_params,
    clean_text,
    extract_source_id,
    extract_tags,
    normalize_url,
    parse_fragment,
    parse_relative_date,
    select_date_text,
    select_first,
    select_text,
)
from .browser_scraper import BrowserScraper


@dataclass
class JobListing:
    """A row from a WWR category page, before the detail fetch."""
    job_id: str
    title: str
    company: str
    url: str
    location: str
    posted_at: str


class WeWorkRemotelyScraper(BrowserScraper):
    """
    Scraper for We Work Remotely.

    Category pages usually list every open job at once; later pages are
    requested with `?page=N` and the category stops as soon as a page shows
    nothing new.
    """

    source = OpportunitySource.WE_WORK_REMOTELY

    def category_page_url(self, category: OpportunityCategory, page_num: int) -> str:
        url = self.site.category_target(category)
        if page_num == 1:
            return url
        return add_query_params(url, page=page_num)

    async def scrape_category(
        self,
        page: Page,
        category: OpportunityCategory,
        max_pages: int,
        timeout_ms: int,
    ) -> List[ScrapedOpportunity]:
        jobs = []
        seen_ids: Set[str] = set()

        for page_num in range(1, max_pages + 1):
            try:
                await self.session.goto(page, self.category_page_url(category, page_num), timeout_ms)
                await self.session.wait_random(*self.site.page_pause_ms)
                rows = await self.session.collect_fragments(page, self.site.card_selector)
            except Exception as e:
                if page_num == 1:
                    raise
                self.session.log_error(f"Failed to scrape page {page_num} for category {category.value}", e)
                break

            if not rows:
                break

            listings = []
            for row in rows:
                listing = self._parse_row(row)
                if listing is not None and listing.job_id not in seen_ids:
                    seen_ids.add(listing.job_id)
                    listings.append(listing)

            # The site ignores unknown page numbers and serves the same list again
            if not listings:
                break

            # Detail pages navigate away, so the list rows are parsed first
            for listing in listings:
                description = await self.scrape_job_details(page, listing.url)
                jobs.append(self._build_opportunity(listing, description, category))
                await self.session.wait_random(*self.site.item_pause_ms)

        return jobs

    async def scrape_job_details(self, page: Page, url: str) -> Optional[str]:
        """
        Fetch the full description from a job's own page.

        Returns None on failure; the caller falls back to the title.
        """
        try:
            await self.session.goto(page, url, self.settings.detail_timeout_ms)
            for selector in self.site.selectors['detail']:
                fragments = await self.session.collect_fragments(page, selector)
                if fragments:
                    return clean_text(parse_fragment(fragments[0]).get_text(' '))
            return None
        except Exception as e:
            self.session.log_error(f"Failed to scrape job details from {url}", e)
            return None

    def _parse_row(self, row_html: str) -> Optional[JobListing]:
        try:
            soup = parse_fragment(row_html)
            selectors = self.site.selectors

            title = select_text(soup, selectors['title'])
            link = select_first(soup, selectors['link'])
            url = normalize_url(link.get('href') if link else None, self.site.base_url)
            if not title or not url:
                return None

            job_id = extract_source_id(url, self.site.id_pattern)
            if not job_id:
                return None

            return JobListing(
                job_id=job_id,
                title=title,
                company=select_text(soup, selectors['company']),
                url=url,
                location=select_text(soup, selectors['location']) or 'Remote',
                posted_at=select_date_text(soup, selectors['date']),
            )
        except Exception as e:
            self.session.logger.debug(f"[{self.source.value}] Skipping unparseable row: {e}")
            return None

    def _build_opportunity(
        self,
        listing: JobListing,
        description: Optional[str],
        category: OpportunityCategory,
    ) -> ScrapedOpportunity:
        return ScrapedOpportunity(
            source_id=f"{self.site.id_prefix}_{listing.job_id}",
            title=listing.title,
            description=description or listing.title,
            company=listing.company or None,
            source_url=listing.url,
            category=category,
            tags=extract_tags(f"{listing.title} {description or ''}"),
            location=listing.location,
            is_remote=True,
            posted_at=parse_relative_date(listing.posted_at),
        )
