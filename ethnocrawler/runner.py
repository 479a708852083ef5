"""
Run orchestration: crawl, then always write.
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional

from .crawler import crawl
from .dataset import write
from .run_config import ScraperConfig

logger = logging.getLogger(__name__)


async def run(config: ScraperConfig, environ: Optional[Mapping[str, str]] = None) -> str:
    """Crawl, then flush the dataset to the report even if the crawl fails.

    A crawl error still propagates after the report is written.

    Returns:
        Absolute path of the written report.
    """
    try:
        await crawl(config, environ=environ)
    except Exception:
        logger.error("[CRAWL] Crawl failed — writing partial results")
        raise
    finally:
        output = write(config)
    return output
