"""
Manual Login Gate
=================
The library proxy redirects unauthenticated requests to its own login
host.  Login there is not automated: a human completes it (SSO, MFA, ...)
in the visible browser window, after which the proxy sends the browser
back to the portal URL.  This module only waits for that to happen.

Workflow:
    1. Request handler sees the loaded URL on the login host
    2. ``await_manual_login`` logs a prompt and blocks on ``wait_for_url``
    3. The user logs in; the browser lands back on the portal URL
    4. Crawling resumes, or Playwright's ``TimeoutError`` propagates
"""

from __future__ import annotations

import logging
from typing import Optional

from playwright.async_api import Page
from playwright.async_api import TimeoutError as PlaywrightTimeout

logger = logging.getLogger(__name__)


def is_login_redirect(url: Optional[str], login_url_prefix: str) -> bool:
    """True when *url* points at the external login host."""
    return bool(url) and url.startswith(login_url_prefix)


async def await_manual_login(
    page: Page,
    login_url: str,
    return_url: str,
    timeout_ms: int,
) -> None:
    """Block until the browser navigates back to *return_url*.

    Args:
        page:       Page currently showing the login host.
        login_url:  The login URL the proxy redirected to (for logging).
        return_url: Portal URL the browser reaches once login succeeds.
        timeout_ms: How long the human has to finish logging in.

    Raises:
        playwright.async_api.TimeoutError: login not completed in time.
    """
    logger.info(f"[AUTH] Awaiting manual authentication at {login_url}")
    logger.info(f"[AUTH] Log in using the browser window within {timeout_ms // 1000}s")
    try:
        await page.wait_for_url(return_url, timeout=timeout_ms)
    except PlaywrightTimeout:
        logger.error(f"[AUTH] Manual authentication not completed within {timeout_ms}ms")
        raise
    logger.info("[AUTH] Authentication completed.")
