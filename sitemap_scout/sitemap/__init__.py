# File: sitemap_scout/sitemap/__init__.py
"""sitemap_scout.sitemap: Сборка, проверка и запись sitemap.xml."""

from sitemap_scout.sitemap.builder import build_sitemap
from sitemap_scout.sitemap.parser import parse_sitemap
from sitemap_scout.sitemap.writer import write_sitemap

__all__ = ["build_sitemap", "parse_sitemap", "write_sitemap"]
