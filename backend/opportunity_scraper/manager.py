"""
Scraper Manager - orchestrates all site scrapers.

Provides a unified interface for running scrapers, either individually
or all at once. Handles parallel execution and result aggregation.

Nothing raised by a scraper escapes the manager: a missing scraper and a
crashing scraper both come back as a ScraperResult whose `errors` says what
went wrong, so one bad source never aborts a batch run.
"""

import asyncio
from typing import Dict, Iterable, List, Optional
import logging

from .base import BaseScraper, OpportunitySource, ScraperConfig, ScraperResult

# Import all implemented scrapers
from .sites.codeur import CodeurScraper
from .sites.malt import MaltScraper
from .sites.weworkremotely import WeWorkRemotelyScraper

logger = logging.getLogger(__name__)


# Scrapers registered by default
# Add new scrapers here as they are implemented
DEFAULT_SCRAPERS = (
    CodeurScraper,
    MaltScraper,
    WeWorkRemotelyScraper,
)


class ScraperManager:
    """
    Manages and orchestrates all site scrapers.

    Usage:
        manager = ScraperManager()

        # Run single scraper
        result = await manager.scrape_source(ScraperConfig(OpportunitySource.CODEUR))

        # Run several concurrently
        results = await manager.scrape_all(configs)

        # Check registry
        manager.get_available_sources()
    """

    def __init__(self, scrapers: Optional[Iterable[BaseScraper]] = None):
        """
        Initialize the scraper manager.

        Args:
            scrapers: Scraper instances to register instead of the default
                set. A later scraper for the same source replaces an earlier one.
        """
        self._scrapers: Dict[OpportunitySource, BaseScraper] = {}

        if scrapers is None:
            scrapers = [scraper_class() for scraper_class in DEFAULT_SCRAPERS]
        for scraper in scrapers:
            self._register_scraper(scraper)

    def _register_scraper(self, scraper: BaseScraper):
        self._scrapers[scraper.source] = scraper
        logger.info(f"Registered scraper: {scraper.source.value}")

    async def scrape_source(self, config: ScraperConfig) -> ScraperResult:
        """
        Run the scraper for a single source.

        Args:
            config: Run request; config.source selects the scraper

        Returns:
            The scraper's ScraperResult, or an empty result with one error
            if the source has no scraper or the scraper crashed
        """
        scraper = self._scrapers.get(config.source)
        if scraper is None:
            logger.warning(f"Scraper not implemented for source: {config.source.value}")
            return ScraperResult.failure(
                config.source, f"Scraper not found for source: {config.source.value}"
            )

        logger.info(f"Starting scrape for {config.source.value}")
        try:
            return await scraper.scrape(config)
        except Exception as e:
            logger.error(f"Scraper failed for {config.source.value}: {e}")
            return ScraperResult.failure(config.source, f"Scraper crashed: {e}")

    async def scrape_all(self, configs: List[ScraperConfig]) -> List[ScraperResult]:
        """
        Run scrapers for every enabled config concurrently.

        Args:
            configs: Run requests; disabled ones are skipped

        Returns:
            One ScraperResult per enabled config, in input order
        """
        enabled_configs = [config for config in configs if config.enabled]
        logger.info(f"Scraping {len(enabled_configs)} sources")

        tasks = [self.scrape_source(config) for config in enabled_configs]
        outcomes = await asyncio.gather(*tasks, return_exceptions=True)

        results = []
        for config, outcome in zip(enabled_configs, outcomes):
            if isinstance(outcome, BaseException):
                logger.error(f"Scraper crashed for {config.source.value}: {outcome}")
                results.append(ScraperResult.failure(config.source, f"Scraper crashed: {outcome}"))
            else:
                results.append(outcome)
        return results

    def get_available_sources(self) -> List[OpportunitySource]:
        """Sources with a registered scraper, in registration order."""
        return list(self._scrapers.keys())

    def has_source(self, source: OpportunitySource) -> bool:
        return source in self._scrapers

    @staticmethod
    def summarize(results: List[ScraperResult]) -> Dict:
        """
        Get summary of a batch of scrape results.

        Returns:
            Summary dictionary with totals and per-source counts
        """
        successful = sum(1 for r in results if r.success)

        return {
            'total_sources': len(results),
            'successful': successful,
            'failed': len(results) - successful,
            'total_opportunities': sum(len(r.opportunities) for r in results),
            'total_errors': sum(len(r.errors) for r in results),
            'sources': [
                {
                    'source': r.source.value,
                    'opportunities': len(r.opportunities),
                    'errors': len(r.errors),
                    'success': r.success,
                }
                for r in results
            ],
        }
