"""
Playwright-based opportunity scraper system.

This package scrapes freelance and job postings from several sites and
normalizes them into a common schema:
- Codeur.com (French freelance projects)
- Malt (French freelance missions)
- We Work Remotely (remote jobs)

Each site scraper drives its own headless browser; the ScraperManager runs
them concurrently and never lets one source's failure affect another.
"""

from .base import (
    BaseScraper,
    OpportunityCategory,
    OpportunitySource,
    ScrapedOpportunity,
    ScraperConfig,
    ScraperResult,
)
from .config import SITES, SiteConfig, get_site_config
from .manager import ScraperManager
from .sites import CodeurScraper, MaltScraper, WeWorkRemotelyScraper

__all__ = [
    'BaseScraper',
    'OpportunityCategory',
    'OpportunitySource',
    'ScrapedOpportunity',
    'ScraperConfig',
    'ScraperResult',
    'SITES',
    'SiteConfig',
    'get_site_config',
    'ScraperManager',
    'CodeurScraper',
    'MaltScraper',
    'WeWorkRemotelyScraper',
]
