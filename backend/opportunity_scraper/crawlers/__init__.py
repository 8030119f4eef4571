"""Browser session used by the site scrapers."""

from .browser import BrowserSession, COLLECT_FRAGMENTS_JS

__all__ = ['BrowserSession', 'COLLECT_FRAGMENTS_JS']
