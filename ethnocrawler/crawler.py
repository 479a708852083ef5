"""
Crawl Driver
============
Configures Crawlee's ``PlaywrightCrawler`` around ``PageHandler`` and runs
it from the configured seed URL.

Scheduling, retries, browser lifecycle and dataset persistence all belong
to Crawlee.  This module only fixes the knobs: one page in flight at a
time and a hard page budget.
"""

from __future__ import annotations

import logging
import os
from typing import Mapping, Optional

from crawlee import ConcurrencySettings
from crawlee.crawlers import PlaywrightCrawler

from .handler import PageHandler
from .run_config import ScraperConfig

logger = logging.getLogger(__name__)

NO_CRAWL_ENV = "NO_CRAWL"


def crawl_disabled(environ: Optional[Mapping[str, str]] = None) -> bool:
    """True when ``NO_CRAWL`` is exactly ``"true"``."""
    env = os.environ if environ is None else environ
    return env.get(NO_CRAWL_ENV) == "true"


def build_crawler(config: ScraperConfig, handler: Optional[PageHandler] = None) -> PlaywrightCrawler:
    """Return a single-concurrency ``PlaywrightCrawler`` for *config*."""
    return PlaywrightCrawler(
        request_handler=handler or PageHandler(config),
        max_requests_per_crawl=config.max_pages_to_crawl,
        concurrency_settings=ConcurrencySettings(
            min_concurrency=1,
            desired_concurrency=1,
            max_concurrency=1,
        ),
        headless=config.headless,
    )


async def crawl(config: ScraperConfig, environ: Optional[Mapping[str, str]] = None):
    """Run the crawl, or skip it entirely when ``NO_CRAWL=true``.

    Returns:
        Crawlee's final statistics, or None when the crawl was skipped.
    """
    if crawl_disabled(environ):
        logger.info(f"[CRAWL] {NO_CRAWL_ENV}=true — skipping crawl, reusing data in {config.dataset_dir}")
        return None

    crawler = build_crawler(config)

    logger.info("=" * 65)
    logger.info("CRAWL STARTED")
    logger.info(f"Start URL: {config.url}")
    logger.info(f"Limits: max_pages={config.max_pages_to_crawl}, concurrency=1")
    logger.info("=" * 65)

    stats = await crawler.run([config.url])
    logger.info("[CRAWL] Crawl finished")
    return stats
