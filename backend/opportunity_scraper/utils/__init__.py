"""Shared utilities for scrapers."""

from .normalizers import (
    clean_text,
    infer_remote,
    normalize_url,
    add_query_params,
)
from .extractors import (
    TECH_KEYWORDS,
    extract_budget,
    extract_tags,
    extract_source_id,
    parse_relative_date,
    parse_fragment,
    select_first,
    select_text,
    select_date_text,
)

__all__ = [
    'clean_text',
    'infer_remote',
    'normalize_url',
    'add_query_params',
    'TECH_KEYWORDS',
    'extract_budget',
    'extract_tags',
    'extract_source_id',
    'parse_relative_date',
    'parse_fragment',
    'select_first',
    'select_text',
    'select_date_text',
]
