#!/usr/bin/env python3
"""
Command-line entry point for the opportunity scrapers.

Usage:
    python -m opportunity_scraper --list
    python -m opportunity_scraper --source codeur --category web_development --max-pages 1
    python -m opportunity_scraper --json > opportunities.json

Without --source every registered source is scraped.
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import List, Optional

from .base import Colors, OpportunityCategory, OpportunitySource, ScraperConfig, ScraperResult
from .config import SITES
from .manager import ScraperManager
from .settings import get_settings


def configure_logging():
    """Send scraper logs to stderr so --json output stays clean."""
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format=settings.log_format,
        stream=sys.stderr,
    )


def _enum_value(enum_class):
    """argparse type accepting enum values case-insensitively."""
    def parse(value: str):
        try:
            return enum_class(value.strip().upper())
        except ValueError:
            valid = ', '.join(member.value.lower() for member in enum_class)
            raise argparse.ArgumentTypeError(f"invalid choice: '{value}' (choose from {valid})")
    parse.__name__ = enum_class.__name__
    return parse


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='opportunity-scraper',
        description='Scrape freelance and job opportunities',
    )
    parser.add_argument('--list', action='store_true', help='List registered sources and exit')
    parser.add_argument('--source', dest='sources', action='append', type=_enum_value(OpportunitySource),
                        help='Source to scrape (repeatable, default: all registered)')
    parser.add_argument('--category', dest='categories', action='append', type=_enum_value(OpportunityCategory),
                        help='Category to scrape (repeatable, default: per-source defaults)')
    parser.add_argument('--max-pages', type=int, help='Maximum listing pages per category')
    parser.add_argument('--timeout', type=int, help='Navigation timeout in milliseconds')
    parser.add_argument('--json', action='store_true', help='Print results as JSON')
    return parser


def list_sources(manager: ScraperManager):
    """Print registered sources."""
    print(f"\n{'='*60}")
    print("Available Scrapers")
    print(f"{'='*60}\n")

    for source in manager.get_available_sources():
        site = SITES.get(source)
        name = site.name if site else source.value
        print(f"{Colors.green('✓')} {source.value.lower():18} - {name}")
    print()


def print_summary(results: List[ScraperResult]):
    """Print a colorized per-source summary."""
    summary = ScraperManager.summarize(results)

    print(f"\n{'='*60}")
    print("Scrape Summary")
    print(f"{'='*60}\n")

    for result in results:
        status = Colors.green('✓') if result.success else Colors.red('✗')
        print(f"{status} {Colors.bold(result.source.value)}: {len(result.opportunities)} opportunities")
        for error in result.errors:
            print(f"    {Colors.yellow(error)}")
        for opportunity in result.opportunities[:5]:
            print(f"    {Colors.gray(opportunity.source_id)} {opportunity.title}")
        if len(result.opportunities) > 5:
            print(f"    {Colors.gray(f'... and {len(result.opportunities) - 5} more')}")

    print(
        f"\n{summary['successful']}/{summary['total_sources']} sources succeeded, "
        f"{summary['total_opportunities']} opportunities, {summary['total_errors']} errors"
    )


async def run(args: argparse.Namespace, manager: ScraperManager) -> List[ScraperResult]:
    sources = args.sources or manager.get_available_sources()
    configs = [
        ScraperConfig(
            source=source,
            categories=args.categories,
            max_pages=args.max_pages,
            timeout=args.timeout,
        )
        for source in sources
    ]
    return await manager.scrape_all(configs)


def main(argv: Optional[List[str]] = None, manager: Optional[ScraperManager] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging()

    if args.max_pages is not None and args.max_pages < 1:
        print("--max-pages must be at least 1", file=sys.stderr)
        return 2

    manager = manager or ScraperManager()

    if args.list:
        list_sources(manager)
        return 0

    results = asyncio.run(run(args, manager))

    if args.json:
        print(json.dumps([r.to_dict() for r in results], indent=2, ensure_ascii=False))
    else:
        print_summary(results)

    return 0 if all(r.success for r in results) else 1


if __name__ == '__main__':
    sys.exit(main())
