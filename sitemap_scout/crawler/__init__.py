# File: sitemap_scout/crawler/__init__.py
"""sitemap_scout.crawler: Обход сайта: канонизация URL, извлечение ссылок, очередь обхода."""

from sitemap_scout.crawler.canonical import canonicalize, origin_of, origin_root
from sitemap_scout.crawler.fetcher import Fetcher, PageFetcher
from sitemap_scout.crawler.frontier import CrawlFrontier, FrontierState
from sitemap_scout.crawler.link_extractor import extract_links
from sitemap_scout.crawler.models import ChangeFrequency, FetchResult, PageRecord

__all__ = [
    "ChangeFrequency",
    "CrawlFrontier",
    "FetchResult",
    "Fetcher",
    "FrontierState",
    "PageFetcher",
    "PageRecord",
    "canonicalize",
    "extract_links",
    "origin_of",
    "origin_root",
]
