"""
Selector Evaluation
===================
Text extraction and waiting for a selector that may be either an XPath
expression (anything starting with ``/``) or a CSS selector.

XPath is evaluated with ``document.evaluate`` inside the page rather than
through Playwright's ``xpath=`` engine so that the first matched *node*
(text and attribute nodes included) is what gets read.
"""

from __future__ import annotations

import logging

from playwright.async_api import Page

logger = logging.getLogger(__name__)

DEFAULT_SELECTOR = "body"

_XPATH_TEXT_JS = """
(xpath) => {
    const result = document.evaluate(
        xpath, document, null, XPathResult.ANY_TYPE, null
    ).iterateNext();
    return result ? (result.textContent || '') : '';
}
"""

_CSS_TEXT_JS = """
(selector) => {
    const el = document.querySelector(selector);
    return el ? (el.innerText || '') : '';
}
"""

_XPATH_MATCH_JS = """
(xpath) => document.evaluate(
    xpath, document, null, XPathResult.ANY_TYPE, null
).iterateNext() !== null
"""


def is_xpath(selector: str) -> bool:
    return selector.startswith("/")


async def get_page_text(page: Page, selector: str = DEFAULT_SELECTOR) -> str:
    """Return the visible text of the first element matching *selector*.

    XPath selectors return the first node's ``textContent``; CSS selectors
    return the first element's rendered ``innerText``.  An empty string is
    returned when nothing matches.  Malformed selectors raise whatever the
    browser raises.
    """
    if is_xpath(selector):
        return await page.evaluate(_XPATH_TEXT_JS, selector)
    return await page.evaluate(_CSS_TEXT_JS, selector)


async def wait_for_xpath(page: Page, xpath: str, timeout: int) -> None:
    """Poll in-page until *xpath* matches at least one node.

    Raises:
        playwright.async_api.TimeoutError: after *timeout* milliseconds.
    """
    await page.wait_for_function(_XPATH_MATCH_JS, arg=xpath, timeout=timeout)


async def wait_for_selector(page: Page, selector: str, timeout: int) -> None:
    """Wait for an XPath or CSS selector, bounded by *timeout* ms."""
    logger.debug(f"[SELECTOR] Waiting up to {timeout}ms for {selector!r}")
    if is_xpath(selector):
        await wait_for_xpath(page, selector, timeout)
    else:
        await page.wait_for_selector(selector, timeout=timeout)
