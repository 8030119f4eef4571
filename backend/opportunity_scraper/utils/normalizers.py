"""
Data normalization utilities for scrapers.

These functions standardize scraped text into consistent formats.
"""

import re
from typing import Optional
from urllib.parse import parse_qsl, quote, urlencode, urljoin, urlsplit, urlunsplit


REMOTE_KEYWORDS = ('remote', 'télétravail', 'teletravail', 'distance', 'anywhere')


def clean_text(text: Optional[str]) -> str:
    """
    Collapse whitespace and strip.

    Examples:
        "  Développeur\\n   React  " -> "Développeur React"
        None -> ""
    """
    if not text:
        return ""
    return re.sub(r'\s+', ' ', text).strip()


def infer_remote(text: Optional[str]) -> bool:
    """
    Best-effort remote detection from location text.

    Examples:
        "Télétravail" -> True
        "À distance" -> True
        "Paris" -> False
    """
    if not text:
        return False
    text_lower = text.lower()
    return any(keyword in text_lower for keyword in REMOTE_KEYWORDS)


def normalize_url(href: Optional[str], base_url: str) -> Optional[str]:
    """
    Resolve a link against the site's base URL.

    Returns None for empty, fragment-only or javascript: links.
    """
    if not href:
        return None
    href = href.strip()
    if not href or href.startswith('#') or href.lower().startswith('javascript:'):
        return None
    return urljoin(base_url, href)


def add_query_params(url: str, **params) -> str:
    """
    Return url with params merged into its query string.

    Examples:
        ("https://x.com/projects?category=web", page=2)
            -> "https://x.com/projects?category=web&page=2"
    """
    parts = urlsplit(url)
    query = dict(parse_qsl(parts.query, keep_blank_values=True))
    query.update({key: str(value) for key, value in params.items()})
    return urlunsplit(parts._replace(query=urlencode(query, quote_via=quote)))
