# File: sitemap_scout/sitemap/builder.py
"""sitemap_scout.sitemap.builder: Сборка sitemap.xml (sitemaps.org 0.9) с помощью Jinja2."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, List, Optional, Union
from urllib.parse import urlsplit

from jinja2 import Environment, FileSystemLoader, select_autoescape
from lxml import etree

from sitemap_scout.crawler.canonical import origin_of, origin_root
from sitemap_scout.crawler.heuristics import change_frequency, priority
from sitemap_scout.crawler.models import PageRecord, SitemapEntry
from sitemap_scout.exceptions import SitemapSerializationError
from sitemap_scout.sitemap.parser import parse_sitemap

__all__ = ["SITEMAP_NAMESPACE", "TEMPLATE_NAME", "build_sitemap", "format_lastmod", "order_pages"]

SITEMAP_NAMESPACE = "http://www.sitemaps.org/schemas/sitemap/0.9"
TEMPLATE_NAME = "sitemap.xml.j2"
DEFAULT_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"


def format_lastmod(value: datetime) -> str:
    """ISO 8601 в UTC с миллисекундами: ``2024-05-01T12:00:00.000Z``.

    Наивное время считается UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def order_pages(pages: Iterable[PageRecord], origin_url: str) -> List[PageRecord]:
    """Корень сайта первым, остальные по возрастанию location."""
    origin = origin_of(origin_url)
    root = origin_root(origin) if origin else None
    return sorted(pages, key=lambda p: (p.location != root, p.location))


def _entry(page: PageRecord) -> SitemapEntry:
    path = urlsplit(page.location).path or "/"
    return SitemapEntry(
        location=page.location,
        lastmod=format_lastmod(page.last_modified),
        change_frequency=change_frequency(path).value,
        priority=f"{priority(path):.1f}",
    )


def _environment(template_dir: Union[Path, str, None]) -> Environment:
    if template_dir is None:
        template_dir = DEFAULT_TEMPLATE_DIR
    return Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=select_autoescape(["xml", "xml.j2"]),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def build_sitemap(
    pages: Iterable[PageRecord],
    origin_url: str,
    *,
    template_dir: Optional[Union[Path, str]] = None,
) -> str:
    """Рендерит sitemap для страниц обхода.

    Args:
        pages: записи страниц (location уникальны).
        origin_url: URL сайта; его корень сортируется первым.
        template_dir: каталог с собственным ``sitemap.xml.j2`` (по умолчанию
            шаблон из пакета).

    Returns:
        XML-документ строкой.

    Raises:
        SitemapSerializationError: результат не разбирается как XML или число
            ``<loc>`` не совпадает с числом страниц.
    """
    entries = [_entry(page) for page in order_pages(pages, origin_url)]
    template = _environment(template_dir).get_template(TEMPLATE_NAME)
    xml = template.render(entries=entries, namespace=SITEMAP_NAMESPACE)

    try:
        locs = parse_sitemap(xml, strict=True)
    except etree.XMLSyntaxError as exc:
        raise SitemapSerializationError(f"sitemap is not well-formed XML: {exc}") from exc
    if len(locs) != len(entries):
        raise SitemapSerializationError(
            f"sitemap lists {len(locs)} URLs, expected {len(entries)}"
        )
    return xml
