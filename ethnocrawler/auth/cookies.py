"""
Cookie Injection
================
Adds the configured authentication cookie to the page's browser context,
scoped to the URL that was just loaded.
"""

from __future__ import annotations

import logging

from playwright.async_api import Page

from ..run_config import CookieSpec

logger = logging.getLogger(__name__)


async def apply_cookie(page: Page, cookie: CookieSpec, url: str) -> None:
    """Attach *cookie* (by name/value) to *url* in the page's context."""
    await page.context.add_cookies([{
        "name": cookie.name,
        "value": cookie.value,
        "url": url,
    }])
    logger.debug(f"[AUTH] Cookie '{cookie.name}' set for {url}")
