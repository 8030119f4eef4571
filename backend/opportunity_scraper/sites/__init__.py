"""Site-specific scraper implementations."""

from .browser_scraper import BrowserScraper
from .codeur import CodeurScraper
from .malt import MaltScraper
from .weworkremotely import WeWorkRemotelyScraper

__all__ = ['BrowserScraper', 'CodeurScraper', 'MaltScraper', 'WeWorkRemotelyScraper']
