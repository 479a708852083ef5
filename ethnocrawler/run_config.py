"""
Unified Run Configuration
=========================
Single source of truth for every scraper default and runtime limit.

The crawl driver, request handler and report writer all read from one
``ScraperConfig``.  Environment variables (``.env`` included) and CLI flags
populate it through the factory methods below; the object itself is frozen
for the duration of a run.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Awaitable, Callable, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)

ETHNOLOGUE_MIRROR = "https://www-ethnologue-com.myaccess.library.utoronto.ca"

# ---------------------------------------------------------------------------
# Canonical defaults: the ONLY place these numbers live
# ---------------------------------------------------------------------------
_DEFAULTS = {
    "url": f"{ETHNOLOGUE_MIRROR}/",
    "max_pages_to_crawl": 50,
    "selector": None,                    # None → extract from <body>
    "wait_for_selector_timeout": None,   # None → 1000 ms
    "language_codes": ("eng", "fra", "spa", "deu", "por", "rus", "cmn", "arb", "hin", "jpn"),
    "language_url_template": f"{ETHNOLOGUE_MIRROR}/language/{{code}}/",
    "login_url_prefix": "https://login.library.utoronto.ca",
    "login_timeout_ms": 60_000,          # human-in-the-loop login window
    "page_delay_ms": 2_000,              # fixed throttle between pages
    "headless": False,                   # login must happen in a visible window
    "output_file_name": "output.json",
    "storage_dir": "storage",            # Crawlee's CRAWLEE_STORAGE_DIR default
}

DEFAULT_SELECTOR_TIMEOUT_MS = 1_000

# async hook(page, push_data), side effects only
OnVisitPage = Callable[[Any, Callable[..., Awaitable[None]]], Awaitable[None]]


def _default_dataset_dir(storage_dir: str = _DEFAULTS["storage_dir"]) -> str:
    return str(Path(storage_dir) / "datasets" / "default")


@dataclass(frozen=True)
class CookieSpec:
    """Authentication cookie attached to every loaded URL."""
    name: str
    value: str


@dataclass(frozen=True)
class ScraperConfig:
    """
    Configuration consumed by every scraper component.

    Populate via:
      - ``ScraperConfig()``                      → all defaults
      - ``ScraperConfig(max_pages_to_crawl=5)``  → override one value
      - ``ScraperConfig.from_env()``             → SCRAPER_* env vars
      - ``ScraperConfig.from_cli_args(ns)``      → argparse Namespace
    """

    # ---- Target ----
    url: str = _DEFAULTS["url"]
    max_pages_to_crawl: int = _DEFAULTS["max_pages_to_crawl"]

    # ---- Extraction ----
    selector: Optional[str] = _DEFAULTS["selector"]
    wait_for_selector_timeout: Optional[int] = _DEFAULTS["wait_for_selector_timeout"]

    # ---- Follow-up URLs ----
    language_codes: Tuple[str, ...] = _DEFAULTS["language_codes"]
    language_url_template: str = _DEFAULTS["language_url_template"]

    # ---- Authentication ----
    cookie: Optional[CookieSpec] = None
    login_url_prefix: str = _DEFAULTS["login_url_prefix"]
    login_timeout_ms: int = _DEFAULTS["login_timeout_ms"]

    # ---- Browser / pacing ----
    headless: bool = _DEFAULTS["headless"]
    page_delay_ms: int = _DEFAULTS["page_delay_ms"]

    # ---- Extension point ----
    on_visit_page: Optional[OnVisitPage] = field(default=None, compare=False, repr=False)

    # ---- Output ----
    output_file_name: str = _DEFAULTS["output_file_name"]
    dataset_dir: str = field(default_factory=_default_dataset_dir)

    def __post_init__(self):
        # Lists are accepted for convenience but stored as a tuple.
        if not isinstance(self.language_codes, tuple):
            object.__setattr__(self, "language_codes", tuple(self.language_codes))

        if not self.url:
            raise ValueError("url must not be empty")
        if self.max_pages_to_crawl < 1:
            raise ValueError(f"max_pages_to_crawl must be >= 1, got {self.max_pages_to_crawl}")
        if self.wait_for_selector_timeout is not None and self.wait_for_selector_timeout < 0:
            raise ValueError("wait_for_selector_timeout must be non-negative")
        if self.login_timeout_ms < 0 or self.page_delay_ms < 0:
            raise ValueError("login_timeout_ms and page_delay_ms must be non-negative")
        if "{code}" not in self.language_url_template:
            raise ValueError("language_url_template must contain a '{code}' placeholder")
        if not self.output_file_name:
            raise ValueError("output_file_name must not be empty")

    @property
    def selector_timeout_ms(self) -> int:
        if self.wait_for_selector_timeout is None:
            return DEFAULT_SELECTOR_TIMEOUT_MS
        return self.wait_for_selector_timeout

    # -----------------------------------------------------------------------
    # Factory helpers
    # -----------------------------------------------------------------------
    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "ScraperConfig":
        """Build config from ``SCRAPER_*`` environment variables.

        Unset variables keep the canonical defaults.  ``dataset_dir`` follows
        ``CRAWLEE_STORAGE_DIR`` so the writer reads where Crawlee wrote.
        Keyword ``overrides`` win over everything.
        """
        env = os.environ if environ is None else environ
        values: dict = {}

        if env.get("SCRAPER_URL"):
            values["url"] = env["SCRAPER_URL"]
        if env.get("SCRAPER_MAX_PAGES"):
            values["max_pages_to_crawl"] = int(env["SCRAPER_MAX_PAGES"])
        if env.get("SCRAPER_SELECTOR"):
            values["selector"] = env["SCRAPER_SELECTOR"]
        if env.get("SCRAPER_SELECTOR_TIMEOUT"):
            values["wait_for_selector_timeout"] = int(env["SCRAPER_SELECTOR_TIMEOUT"])
        if env.get("SCRAPER_LANGUAGE_CODES"):
            values["language_codes"] = parse_language_codes(env["SCRAPER_LANGUAGE_CODES"])
        if env.get("SCRAPER_OUTPUT"):
            values["output_file_name"] = env["SCRAPER_OUTPUT"]
        if env.get("SCRAPER_HEADLESS"):
            values["headless"] = env["SCRAPER_HEADLESS"].strip().lower() in ("1", "true", "yes")

        cookie_name = env.get("SCRAPER_COOKIE_NAME")
        cookie_value = env.get("SCRAPER_COOKIE_VALUE")
        if cookie_name and cookie_value:
            values["cookie"] = CookieSpec(name=cookie_name, value=cookie_value)
        elif cookie_name or cookie_value:
            logger.warning("[CONFIG] Cookie needs both SCRAPER_COOKIE_NAME and SCRAPER_COOKIE_VALUE — ignoring")

        values["dataset_dir"] = _default_dataset_dir(
            env.get("CRAWLEE_STORAGE_DIR") or _DEFAULTS["storage_dir"]
        )
        values.update(overrides)
        return cls(**values)

    @classmethod
    def from_cli_args(cls, args, base: Optional["ScraperConfig"] = None) -> "ScraperConfig":
        """Layer an argparse Namespace (``__main__.py``) over ``base``."""
        base = base or cls()
        changes: dict = {}

        if getattr(args, "url", None):
            changes["url"] = args.url
        if getattr(args, "pages", None) is not None:
            changes["max_pages_to_crawl"] = args.pages
        if getattr(args, "selector", None):
            changes["selector"] = args.selector
        if getattr(args, "selector_timeout", None) is not None:
            changes["wait_for_selector_timeout"] = args.selector_timeout
        if getattr(args, "languages", None):
            changes["language_codes"] = parse_language_codes(args.languages)
        if getattr(args, "output", None):
            changes["output_file_name"] = args.output
        if getattr(args, "headless", False):
            changes["headless"] = True

        cookie_name = getattr(args, "cookie_name", None)
        cookie_value = getattr(args, "cookie_value", None)
        if cookie_name and cookie_value:
            changes["cookie"] = CookieSpec(name=cookie_name, value=cookie_value)

        return replace(base, **changes) if changes else base

    # -----------------------------------------------------------------------
    # Logging helper
    # -----------------------------------------------------------------------
    def log_summary(self) -> None:
        """Emit a structured summary to the logger."""
        logger.info("=" * 60)
        logger.info("SCRAPER RUN CONFIG")
        logger.info("=" * 60)
        logger.info(f"  URL:              {self.url}")
        logger.info(f"  Max Pages:        {self.max_pages_to_crawl}")
        logger.info(f"  Selector:         {self.selector or 'body (default)'}")
        if self.selector:
            logger.info(f"  Selector Timeout: {self.selector_timeout_ms}ms")
        logger.info(f"  Language Codes:   {len(self.language_codes)} configured")
        logger.info(f"  Headless:         {self.headless}")
        logger.info(f"  Page Delay:       {self.page_delay_ms}ms")
        if self.cookie:
            # never log the cookie value
            logger.info(f"  Auth Cookie:      {self.cookie.name}")
        logger.info(f"  Dataset Dir:      {self.dataset_dir}")
        logger.info(f"  Output:           {self.output_file_name}")
        logger.info("=" * 60)


def parse_language_codes(raw: str) -> Tuple[str, ...]:
    """Split a comma separated list, dropping blanks."""
    return tuple(code.strip() for code in raw.split(",") if code.strip())
