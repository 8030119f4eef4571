"""
Site configurations for the supported opportunity sources.

Each site has a SiteConfig that defines:
- Base URL and the category -> URL/search query mapping
- CSS selector alternatives for cards and card fields
- The regex used to pull a stable listing ID out of a URL
- Pacing ranges (milliseconds) between requests

Selectors drift with the sites' markup, so each field lists 2-3
alternatives tried in order.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from .base import OpportunityCategory, OpportunitySource


@dataclass(frozen=True)
class SiteConfig:
    """Configuration for a scraping source."""
    name: str                           # Full display name
    id_prefix: str                      # Prefix for source_id, e.g. 'codeur'
    base_url: str
    listing_url: str                    # Fallback "all postings" URL or search query
    id_pattern: str                     # Regex with one group for the listing ID
    card_selector: str                  # CSS selector list matching one card per listing
    selectors: Dict[str, List[str]] = field(default_factory=dict)  # Field -> alternatives
    category_urls: Dict[OpportunityCategory, str] = field(default_factory=dict)
    default_categories: Tuple[OpportunityCategory, ...] = (
        OpportunityCategory.WEB_DEVELOPMENT,
        OpportunityCategory.WEB_DESIGN,
        OpportunityCategory.FRONTEND,
        OpportunityCategory.BACKEND,
    )
    page_pause_ms: Tuple[int, int] = (1000, 2000)       # After each list page
    category_pause_ms: Tuple[int, int] = (2000, 4000)   # Between categories
    item_pause_ms: Tuple[int, int] = (500, 1500)        # Between detail pages

    def category_target(self, category: OpportunityCategory) -> str:
        """URL (or search query) for a category, falling back to listing_url."""
        return self.category_urls.get(category, self.listing_url)


# ============================================================
# SITE CONFIGURATIONS
# ============================================================

SITES: Dict[OpportunitySource, SiteConfig] = {

    OpportunitySource.CODEUR: SiteConfig(
        name='Codeur.com',
        id_prefix='codeur',
        base_url='https://www.codeur.com',
        listing_url='https://www.codeur.com/projects',
        id_pattern=r'/projects/(\d+)',
        card_selector='.project-item, .mission-card, [data-project-id]',
        selectors={
            'title': ['.project-title', '.mission-title', 'h3'],
            'description': ['.project-description', '.mission-description', '.description'],
            'link': ['a[href*="/projects/"]', 'a[href*="/mission/"]'],
            'budget': ['.budget', '.price', '[class*="budget"]'],
            'date': ['time', '.date', '.posted-date'],
            'location': ['.location', '[class*="location"]'],
        },
        category_urls={
            OpportunityCategory.WEB_DEVELOPMENT: 'https://www.codeur.com/projects?category=developpement-web',
            OpportunityCategory.WEB_DESIGN: 'https://www.codeur.com/projects?category=design-web',
            OpportunityCategory.FRONTEND: 'https://www.codeur.com/projects?category=front-end',
            OpportunityCategory.BACKEND: 'https://www.codeur.com/projects?category=back-end',
            OpportunityCategory.MOBILE_DEVELOPMENT: 'https://www.codeur.com/projects?category=mobile',
            OpportunityCategory.WORDPRESS: 'https://www.codeur.com/projects?category=wordpress',
        },
    ),

    # Malt maps categories to search queries rather than URLs
    OpportunitySource.MALT: SiteConfig(
        name='Malt',
        id_prefix='malt',
        base_url='https://www.malt.fr',
        listing_url='développeur',
        id_pattern=r'/mission/([a-zA-Z0-9-]+)',
        card_selector='[data-testid="mission-card"], .mission-card, .search-result',
        selectors={
            'title': ['[data-testid="mission-title"]', 'h2', 'h3'],
            'description': ['[data-testid="mission-description"]', '.description', 'p'],
            'company': ['[data-testid="company-name"]', '.company'],
            'link': ['a[href*="/mission/"]', 'a[href]'],
            'location': ['[data-testid="location"]', '.location'],
            'date': ['time', '[data-testid="posted-date"]', '.date'],
        },
        category_urls={
            OpportunityCategory.WEB_DEVELOPMENT: 'développeur web',
            OpportunityCategory.WEB_DESIGN: 'designer web',
            OpportunityCategory.FRONTEND: 'développeur frontend',
            OpportunityCategory.BACKEND: 'développeur backend',
            OpportunityCategory.FULLSTACK: 'développeur fullstack',
            OpportunityCategory.MOBILE_DEVELOPMENT: 'développeur mobile',
            OpportunityCategory.UI_UX_DESIGN: 'UI UX designer',
            OpportunityCategory.DEVOPS: 'devops',
        },
    ),

    OpportunitySource.WE_WORK_REMOTELY: SiteConfig(
        name='We Work Remotely',
        id_prefix='wwr',
        base_url='https://weworkremotely.com',
        listing_url='https://weworkremotely.com/categories/remote-programming-jobs',
        id_pattern=r'/(\d+)-',
        card_selector='li.feature, li[data-job-id], .job-listing',
        selectors={
            'title': ['.title', '.job-title', 'h2'],
            'company': ['.company', '.company-name'],
            'link': ['a[href*="/remote-jobs/"]', 'a[href*="/listings/"]', 'a[href]'],
            'location': ['.region', '.location'],
            'date': ['time', '.date'],
            'detail': ['#job-listing-show-container', '.listing-container', '.job-description'],
        },
        category_urls={
            OpportunityCategory.WEB_DEVELOPMENT: 'https://weworkremotely.com/categories/remote-programming-jobs',
            OpportunityCategory.WEB_DESIGN: 'https://weworkremotely.com/categories/remote-design-jobs',
            OpportunityCategory.FRONTEND: 'https://weworkremotely.com/categories/remote-programming-jobs',
            OpportunityCategory.BACKEND: 'https://weworkremotely.com/categories/remote-programming-jobs',
            OpportunityCategory.FULLSTACK: 'https://weworkremotely.com/categories/remote-full-stack-programming-jobs',
            OpportunityCategory.DEVOPS: 'https://weworkremotely.com/categories/remote-devops-sysadmin-jobs',
        },
    ),
}


# ============================================================
# HELPER FUNCTIONS
# ============================================================

def get_site_config(source: OpportunitySource) -> SiteConfig:
    """
    Get configuration for a site by its source.

    Raises:
        ValueError: If the source has no site configuration
    """
    if source not in SITES:
        valid = ', '.join(sorted(s.value for s in SITES))
        raise ValueError(f"Unknown site: '{source}'. Valid sites: {valid}")
    return SITES[source]

