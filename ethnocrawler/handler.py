"""
Request Handler
===============
Per-page callback handed to Crawlee's ``PlaywrightCrawler``.

For every page the engine dequeues:

1. Attach the configured auth cookie to the loaded URL
2. Parse the language code out of the URL
3. Wait for a human to log in if the proxy bounced us to its login host
4. Wait for the configured selector (XPath or CSS)
5. Extract the selector's text and write a page record to the dataset
6. Run the optional user hook
7. Enqueue one follow-up URL per configured language code
8. Sleep a fixed delay before the engine moves on
"""

from __future__ import annotations

import logging
from typing import Optional

from crawlee.crawlers import PlaywrightCrawlingContext
from crawlee.storages import Dataset

from .auth import apply_cookie, await_manual_login, is_login_redirect
from .extraction import DEFAULT_SELECTOR, get_page_text, wait_for_selector
from .models import PageRecord
from .run_config import ScraperConfig
from .utils import build_language_urls, parse_language_code

logger = logging.getLogger(__name__)


class PageHandler:
    """
    Callable request handler bound to one ``ScraperConfig``.

    Usage::

        handler = PageHandler(config)
        crawler = PlaywrightCrawler(request_handler=handler, ...)

    Records are written straight to ``dataset`` instead of going through
    ``context.push_data``, which Crawlee only commits once the whole
    handler returns; a page whose hook or enqueue step fails keeps its
    record.  ``dataset`` defaults to Crawlee's default dataset, opened on
    first use.

    ``pages_seen`` counts invocations for progress logging only.
    """

    def __init__(self, config: ScraperConfig, dataset: Optional[Dataset] = None):
        self.config = config
        self.pages_seen = 0
        self._dataset = dataset
        self._language_urls = build_language_urls(
            config.language_url_template, config.language_codes,
        )

    async def _get_dataset(self) -> Dataset:
        if self._dataset is None:
            self._dataset = await Dataset.open()
        return self._dataset

    async def __call__(self, context: PlaywrightCrawlingContext) -> None:
        cfg = self.config
        page = context.page
        loaded_url = context.request.loaded_url

        if cfg.cookie:
            await apply_cookie(page, cfg.cookie, loaded_url or context.request.url)

        language_code = parse_language_code(loaded_url)

        if is_login_redirect(loaded_url, cfg.login_url_prefix):
            await await_manual_login(page, loaded_url, cfg.url, cfg.login_timeout_ms)

        title = await page.title()
        self.pages_seen += 1
        logger.info(
            f"[CRAWL] Page {self.pages_seen} / {cfg.max_pages_to_crawl} - URL: {loaded_url}"
        )

        if cfg.selector:
            await wait_for_selector(page, cfg.selector, cfg.selector_timeout_ms)

        text = await get_page_text(page, cfg.selector or DEFAULT_SELECTOR)

        record = PageRecord(
            title=title,
            url=loaded_url or context.request.url,
            html=text,
            language_code=language_code,
        )
        dataset = await self._get_dataset()
        await dataset.push_data(record.to_dict())

        if cfg.on_visit_page:
            await cfg.on_visit_page(page, dataset.push_data)

        if self._language_urls:
            await context.add_requests(self._language_urls)

        await page.wait_for_timeout(cfg.page_delay_ms)
