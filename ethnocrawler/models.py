"""
Page Record
Shape of one persisted page in the Crawlee dataset and the final report.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class PageRecord:
    """
    One crawled page.

    ``html`` keeps its historical name but holds the selector's rendered
    text, not markup.
    """
    title: str
    url: Optional[str]
    html: str
    language_code: str = "unknown"

    def to_dict(self) -> dict:
        """Convert to the on-disk JSON shape."""
        return {
            'title': self.title,
            'url': self.url,
            'html': self.html,
            'languageCode': self.language_code,
        }
