"""
Data extraction utilities for scrapers.

These functions extract specific data from listing text using regex patterns.
None of them raise on malformed input: unparseable text yields an empty or
default value so a single bad listing never blocks a scrape.
"""

import re
from datetime import datetime, timedelta, timezone
from email.utils import parsedate_to_datetime
from typing import Dict, List, Optional, Union

from bs4 import BeautifulSoup, Tag

from .normalizers import clean_text


# Shared technology vocabulary used for tagging (matched as lowercase substrings)
TECH_KEYWORDS = [
    'react', 'vue', 'angular', 'svelte', 'nextjs', 'nuxt',
    'nodejs', 'express', 'nestjs', 'fastify',
    'typescript', 'javascript', 'python', 'php', 'java',
    'wordpress', 'shopify', 'woocommerce', 'prestashop',
    'figma', 'sketch', 'adobe xd', 'photoshop',
    'tailwind', 'bootstrap', 'material ui',
    'mysql', 'postgresql', 'mongodb', 'redis',
    'aws', 'azure', 'gcp', 'docker', 'kubernetes',
]

CURRENCY_SYMBOLS = {
    '€': 'EUR',
    '$': 'USD',
    '£': 'GBP',
}

# Numbers may contain internal spaces ("1 000", "1 000")
_NUMBER = r'(\d+(?:\s\d+)*)'
_RANGE_RE = re.compile(_NUMBER + r'\s*[€$£]?\s*(?:-|–|à|to)\s*[€$£]?\s*' + _NUMBER)
_SINGLE_RE = re.compile(_NUMBER)
_CURRENCY_RE = re.compile(r'[€$£]')

# (pattern, timedelta keyword) pairs for "N <unit>" relative dates
# Checked in order, so "2 heures 30 minutes" resolves to hours
_RELATIVE_UNITS = [
    (re.compile(r'(\d+)\s*(?:heure|hour)', re.IGNORECASE), 'hours'),
    (re.compile(r'(\d+)\s*(?:jour|day)', re.IGNORECASE), 'days'),
    (re.compile(r'(\d+)\s*(?:semaine|week)', re.IGNORECASE), 'weeks'),
    (re.compile(r'(\d+)\s*(?:minute|min\b)', re.IGNORECASE), 'minutes'),
]


def _to_number(text: str) -> float:
    return float(re.sub(r'\s', '', text))


def extract_budget(text: Optional[str]) -> Dict[str, Union[float, str]]:
    """
    Extract budget range and currency from text.

    Handles formats like:
        1000 - 2000€    -> min 1000, max 2000, EUR
        500 € à 1 000 € -> min 500, max 1000, EUR
        1 500 €         -> min 1500, max 1500, EUR
        500$            -> min 500, max 500, USD

    Args:
        text: Raw budget text

    Returns:
        Dict with only the keys that were found among
        'budget_min', 'budget_max' and 'currency'
    """
    result: Dict[str, Union[float, str]] = {}
    if not text:
        return result

    currency_match = _CURRENCY_RE.search(text)
    if currency_match:
        result['currency'] = CURRENCY_SYMBOLS[currency_match.group(0)]

    range_match = _RANGE_RE.search(text)
    if range_match:
        low = _to_number(range_match.group(1))
        high = _to_number(range_match.group(2))
        result['budget_min'] = min(low, high)
        result['budget_max'] = max(low, high)
        return result

    single_match = _SINGLE_RE.search(text)
    if single_match:
        value = _to_number(single_match.group(1))
        result['budget_min'] = value
        result['budget_max'] = value

    return result


def parse_relative_date(text: Optional[str], now: Optional[datetime] = None) -> datetime:
    """
    Parse a posting date into an absolute UTC datetime.

    Handles formats like:
        aujourd'hui / today     -> now
        hier / yesterday        -> now - 1 day
        il y a 3 heures         -> now - 3 hours
        2 days ago              -> now - 2 days
        2024-05-01T10:00:00Z    -> that instant

    Anything else falls back to now.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    if not text:
        return now

    text_lower = text.strip().lower().replace('’', "'")

    # "aujourd'hui" contains "jour", so it has to be checked first
    if "aujourd'hui" in text_lower or 'today' in text_lower:
        return now

    if re.search(r'\bhier\b', text_lower) or 'yesterday' in text_lower:
        return now - timedelta(days=1)

    for pattern, unit in _RELATIVE_UNITS:
        match = pattern.search(text_lower)
        if match:
            try:
                return now - timedelta(**{unit: int(match.group(1))})
            except (OverflowError, ValueError):
                # Counts past datetime's range
                return now

    raw = text.strip()
    try:
        parsed = datetime.fromisoformat(raw.replace('Z', '+00:00'))
    except ValueError:
        # RFC 2822, e.g. "Wed, 01 May 2024 10:00:00 GMT"
        try:
            parsed = parsedate_to_datetime(raw)
        except (TypeError, ValueError):
            return now

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def extract_tags(text: Optional[str], keywords: List[str] = None) -> List[str]:
    """
    Extract technology tags from text based on keywords.

    Args:
        text: Text to search (typically title + description)
        keywords: Vocabulary to look for, defaults to TECH_KEYWORDS

    Returns:
        Matched keywords, lowercase, without duplicates, in vocabulary order
    """
    if keywords is None:
        keywords = TECH_KEYWORDS
    if not text:
        return []

    tags = []
    text_lower = text.lower()
    for keyword in keywords:
        keyword = keyword.lower()
        if keyword in text_lower and keyword not in tags:
            tags.append(keyword)
    return tags


def extract_source_id(url: Optional[str], pattern: str) -> Optional[str]:
    """Return the first capture group of pattern in url, or None."""
    if not url:
        return None
    match = re.search(pattern, url)
    return match.group(1) if match else None


def parse_fragment(html: str) -> BeautifulSoup:
    """Parse an element's outerHTML returned from the page."""
    return BeautifulSoup(html or '', 'html.parser')


def select_first(soup: BeautifulSoup, selectors: List[str]) -> Optional[Tag]:
    """
    Return the first element matched by any selector, trying them in order.

    Sites serve inconsistent markup, so callers pass 2-3 alternatives.
    """
    for selector in selectors or []:
        element = soup.select_one(selector)
        if element is not None:
            return element
    return None


def select_text(soup: BeautifulSoup, selectors: List[str]) -> str:
    """Text of the first matching element, whitespace-collapsed, or ''."""
    element = select_first(soup, selectors)
    if element is None:
        return ''
    return clean_text(element.get_text(' '))


def select_date_text(soup: BeautifulSoup, selectors: List[str]) -> str:
    """Prefer a machine-readable datetime attribute over the visible text."""
    element = select_first(soup, selectors)
    if element is None:
        return ''
    return element.get('datetime') or clean_text(element.get_text(' '))
