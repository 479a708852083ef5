"""
Ethnologue Language-Page Scraper
Crawls the library-proxied Ethnologue mirror with a Playwright-driven
Crawlee crawler and writes every visited language page to one JSON report.

CLI Usage:
    python -m ethnocrawler [url] [options]

    Options:
        --pages             Maximum pages to crawl (default: 50)
        --selector          XPath (starts with "/") or CSS selector to extract
        --selector-timeout  Selector wait in ms (default: 1000)
        --languages         Comma separated language codes to enqueue
        --output            Report file (default: output.json)
        --cookie-name       Auth cookie name
        --cookie-value      Auth cookie value
        --headless          Hide the browser (disables manual login)
        --no-crawl          Skip crawling, rebuild the report from storage/
"""

from .run_config import ScraperConfig, CookieSpec
from .models import PageRecord
from .extraction import get_page_text, wait_for_xpath, wait_for_selector
from .handler import PageHandler
from .crawler import crawl, build_crawler
from .dataset import write, read_records
from .runner import run

__all__ = [
    'ScraperConfig',
    'CookieSpec',
    'PageRecord',
    'get_page_text',
    'wait_for_xpath',
    'wait_for_selector',
    'PageHandler',
    'crawl',
    'build_crawler',
    'write',
    'read_records',
    'run',
]

__version__ = '1.0.0'
