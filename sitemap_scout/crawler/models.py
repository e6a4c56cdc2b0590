# sitemap_scout/crawler/models.py
"""
Data models for the sitemap_scout crawler.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

_HTML_TYPES = ("text/html", "application/xhtml+xml")


class ChangeFrequency(str, Enum):
    """Values of the sitemap ``<changefreq>`` element used by the heuristics."""

    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"

    def __str__(self) -> str:
        return self.value


@dataclass(slots=True)
class FetchResult:
    """What the fetcher hands back for one successfully fetched URL."""

    url: str
    body: str
    content_type: str = ""
    last_modified: Optional[datetime] = None
    status: int = 200

    @property
    def is_html(self) -> bool:
        mime = self.content_type.split(";", 1)[0].strip().lower()
        return mime in _HTML_TYPES


@dataclass(frozen=True, slots=True)
class PageRecord:
    """One crawled page: canonical location and its last-modified time (UTC)."""

    location: str
    last_modified: datetime


@dataclass(frozen=True, slots=True)
class SitemapEntry:
    """Formatted ``<url>`` element values, built only while serializing."""

    location: str
    lastmod: str
    change_frequency: str
    priority: str
