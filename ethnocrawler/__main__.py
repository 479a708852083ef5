#!/usr/bin/env python3
"""
Command line entry point
========================
Builds a ``ScraperConfig`` from ``.env`` / environment variables and CLI
flags, then crawls and writes the report.

Run with: python -m ethnocrawler
"""

import argparse
import asyncio
import logging
import os
import sys

from dotenv import load_dotenv

from .crawler import NO_CRAWL_ENV
from .run_config import ScraperConfig
from .runner import run

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='ethnocrawler',
        description='Ethnologue language-page scraper (Crawlee + Playwright)',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m ethnocrawler                                  # defaults / .env
  python -m ethnocrawler --languages fra,deu --pages 3
  python -m ethnocrawler --selector "//main" --output out/langs.json
  NO_CRAWL=true python -m ethnocrawler                    # rebuild report only
        """
    )
    parser.add_argument('url', nargs='?', help='Seed URL (default: Ethnologue mirror root)')
    parser.add_argument('--pages', type=int, help='Maximum pages to crawl (default: 50)')
    parser.add_argument('--selector', type=str, help='XPath (leading "/") or CSS selector to extract')
    parser.add_argument('--selector-timeout', type=int, help='Selector wait in ms (default: 1000)')
    parser.add_argument('--languages', type=str, help='Comma separated language codes to enqueue')
    parser.add_argument('--output', type=str, help='Report file path (default: output.json)')
    parser.add_argument('--headless', action='store_true',
                        help='Hide the browser window (manual login becomes impossible)')
    parser.add_argument('--no-crawl', action='store_true',
                        help=f'Skip crawling, same as {NO_CRAWL_ENV}=true')

    auth_group = parser.add_argument_group(
        'Authentication',
        'Session cookie for the library proxy. Also read from '
        'SCRAPER_COOKIE_NAME / SCRAPER_COOKIE_VALUE.')
    auth_group.add_argument('--cookie-name', type=str, help='Auth cookie name')
    auth_group.add_argument('--cookie-value', type=str, help='Auth cookie value')
    return parser


def main(argv=None) -> int:
    """Parse argv, build ScraperConfig, run.  Returns the exit code."""
    load_dotenv()

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s | %(levelname)s | %(message)s',
        datefmt='%H:%M:%S'
    )

    args = build_parser().parse_args(argv)

    try:
        cfg = ScraperConfig.from_cli_args(args, base=ScraperConfig.from_env())
    except ValueError as exc:
        logger.error(f"[CONFIG] {exc}")
        return 2

    environ = dict(os.environ)
    if args.no_crawl:
        environ[NO_CRAWL_ENV] = "true"

    cfg.log_summary()

    try:
        output = asyncio.run(run(cfg, environ=environ))
    except Exception as exc:
        logger.error(f"Run failed: {exc}", exc_info=True)
        return 1

    print("\n" + "-" * 40)
    print(f"  Exported: {output}")
    print("-" * 40)
    return 0


if __name__ == '__main__':
    sys.exit(main())
