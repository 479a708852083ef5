"""
Utility Functions
Language-code parsing and follow-up URL generation.
"""

import re
from typing import Iterable, List, Optional

UNKNOWN_LANGUAGE = "unknown"

# Trailing slash is required: ".../language/fra" does not match.
_LANGUAGE_CODE_RE = re.compile(r"language/(\w+)/")


def parse_language_code(url: Optional[str]) -> str:
    """
    Return the path segment following ``language/`` in *url*.

    Args:
        url: Loaded page URL (may be None or empty)

    Returns:
        The language code, or ``"unknown"`` when the URL has no
        ``language/<code>/`` segment
    """
    if not url:
        return UNKNOWN_LANGUAGE
    match = _LANGUAGE_CODE_RE.search(url)
    return match.group(1) if match else UNKNOWN_LANGUAGE


def build_language_urls(template: str, codes: Iterable[str]) -> List[str]:
    """Expand *template* (``{code}`` placeholder) once per language code."""
    return [template.format(code=code) for code in codes]
