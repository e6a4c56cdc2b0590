# sitemap_scout/crawler/link_extractor.py
"""
Link extraction for sitemap_scout.
"""
from __future__ import annotations

from typing import Iterator
from urllib.parse import urljoin

from bs4 import BeautifulSoup
from bs4.element import Tag

_SKIP_SCHEMES = ("mailto:", "tel:", "javascript:")


def extract_links(html: str, base_url: str) -> Iterator[str]:
    """
    Yield absolute URLs of all <a href> values in document order.

    Ignores mailto:, tel:, javascript: and empty hrefs. Duplicates are kept;
    same-origin filtering is left to the canonicalizer.
    """
    soup = BeautifulSoup(html or "", "html.parser")
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href_val = tag.get("href")
        if not isinstance(href_val, str):
            continue
        raw = href_val.strip()
        if not raw or raw.lower().startswith(_SKIP_SCHEMES):
            continue
        try:
            yield urljoin(base_url, raw)
        except ValueError:
            continue
