"""
Base classes for the opportunity scraper system.

This module defines the shared data structures and the abstract contract
implemented by every site-specific scraper.
"""

from abc import ABC, abstractmethod
from typing import List, Dict, Optional, Any
from dataclasses import dataclass, field
from enum import Enum
from datetime import datetime, timezone


# ANSI color codes for terminal output
class Colors:
    """ANSI color codes for colorized output."""
    RESET = '\033[0m'
    BOLD = '\033[1m'

    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RED = '\033[91m'
    GRAY = '\033[90m'

    @staticmethod
    def green(text):
        return f"{Colors.GREEN}{text}{Colors.RESET}"

    @staticmethod
    def yellow(text):
        return f"{Colors.YELLOW}{text}{Colors.RESET}"

    @staticmethod
    def red(text):
        return f"{Colors.RED}{text}{Colors.RESET}"

    @staticmethod
    def gray(text):
        return f"{Colors.GRAY}{text}{Colors.RESET}"

    @staticmethod
    def bold(text):
        return f"{Colors.BOLD}{text}{Colors.RESET}"


class OpportunitySource(Enum):
    """Platforms an opportunity can come from."""
    MALT = "MALT"
    CODEUR = "CODEUR"
    FREELANCE_INFORMATIQUE = "FREELANCE_INFORMATIQUE"
    COMET = "COMET"
    LE_HIBOU = "LE_HIBOU"
    UPWORK = "UPWORK"
    FIVERR = "FIVERR"
    FREELANCER = "FREELANCER"
    TOPTAL = "TOPTAL"
    WE_WORK_REMOTELY = "WE_WORK_REMOTELY"
    REMOTE_CO = "REMOTE_CO"
    REMOTIVE = "REMOTIVE"
    LINKEDIN = "LINKEDIN"
    INDEED = "INDEED"
    GURU = "GURU"
    PEOPLEPERHOUR = "PEOPLEPERHOUR"


class OpportunityCategory(Enum):
    """Job/skill classification used to pick a search URL or query."""
    WEB_DEVELOPMENT = "WEB_DEVELOPMENT"
    WEB_DESIGN = "WEB_DESIGN"
    MOBILE_DEVELOPMENT = "MOBILE_DEVELOPMENT"
    UI_UX_DESIGN = "UI_UX_DESIGN"
    FRONTEND = "FRONTEND"
    BACKEND = "BACKEND"
    FULLSTACK = "FULLSTACK"
    DEVOPS = "DEVOPS"
    DATA_SCIENCE = "DATA_SCIENCE"
    MACHINE_LEARNING = "MACHINE_LEARNING"
    BLOCKCHAIN = "BLOCKCHAIN"
    GAME_DEVELOPMENT = "GAME_DEVELOPMENT"
    WORDPRESS = "WORDPRESS"
    ECOMMERCE = "ECOMMERCE"
    SEO = "SEO"
    CONTENT_WRITING = "CONTENT_WRITING"
    COPYWRITING = "COPYWRITING"
    GRAPHIC_DESIGN = "GRAPHIC_DESIGN"
    VIDEO_EDITING = "VIDEO_EDITING"
    MARKETING = "MARKETING"
    CONSULTING = "CONSULTING"
    OTHER = "OTHER"


@dataclass(frozen=True)
class ScrapedOpportunity:
    """Standardized opportunity data after scraping."""
    source_id: str                      # Prefixed by source, e.g. 'codeur_12345'
    title: str
    description: str
    source_url: str
    category: OpportunityCategory
    posted_at: datetime

    company: Optional[str] = None
    location: Optional[str] = None
    is_remote: bool = False
    tags: List[str] = field(default_factory=list)

    # Budget info (raw text plus parsed values)
    budget: Optional[str] = None
    budget_min: Optional[float] = None
    budget_max: Optional[float] = None
    currency: Optional[str] = None

    expires_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'source_id': self.source_id,
            'title': self.title,
            'description': self.description,
            'source_url': self.source_url,
            'category': self.category.value,
            'company': self.company,
            'location': self.location,
            'is_remote': self.is_remote,
            'tags': list(self.tags),
            'budget': self.budget,
            'budget_min': self.budget_min,
            'budget_max': self.budget_max,
            'currency': self.currency,
            'posted_at': self.posted_at.isoformat(),
            'expires_at': self.expires_at.isoformat() if self.expires_at else None,
        }


@dataclass(frozen=True)
class ScraperConfig:
    """A run request for one source."""
    source: OpportunitySource
    enabled: bool = True
    categories: Optional[List[OpportunityCategory]] = None  # None = adapter defaults
    max_pages: Optional[int] = None     # None = settings.default_max_pages
    timeout: Optional[int] = None       # Navigation timeout in milliseconds


@dataclass
class ScraperResult:
    """Result of one source's scraping run."""
    source: OpportunitySource
    opportunities: List[ScrapedOpportunity] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    scraped_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def failure(cls, source: OpportunitySource, message: str) -> 'ScraperResult':
        """Build an empty result carrying a single error."""
        return cls(source=source, errors=[message])

    @property
    def success(self) -> bool:
        return not self.errors

    def to_dict(self) -> Dict:
        return {
            'source': self.source.value,
            'scraped_at': self.scraped_at.isoformat(),
            'total': len(self.opportunities),
            'success': self.success,
            'errors': list(self.errors),
            'opportunities': [o.to_dict() for o in self.opportunities],
        }


class BaseScraper(ABC):
    """
    Contract every site scraper implements.

    Subclasses must define:
    - source: the OpportunitySource they handle (registry key)
    - scrape(): run a full scrape for a ScraperConfig

    scrape() must always return a ScraperResult; failures are reported
    through ScraperResult.errors rather than raised.
    """

    source: OpportunitySource

    @abstractmethod
    async def scrape(self, config: ScraperConfig) -> ScraperResult:
        """
        Scrape the site according to config.

        Args:
            config: Run request for this source

        Returns:
            ScraperResult with opportunities and non-fatal errors
        """
        pass
