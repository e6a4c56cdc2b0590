# File: sitemap_scout/engine.py
"""sitemap_scout.engine: Orchestration layer: запуск обхода и сборка sitemap по конфигу."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import List, Optional, Union

from sitemap_scout.config import CrawlerConfig
from sitemap_scout.crawler.fetcher import Fetcher
from sitemap_scout.crawler.frontier import CrawlFrontier
from sitemap_scout.crawler.models import PageRecord
from sitemap_scout.logger import logger
from sitemap_scout.sitemap.builder import build_sitemap
from sitemap_scout.sitemap.writer import write_sitemap

__all__ = ["start_crawl", "render_sitemap"]


async def start_crawl(
    cfg: CrawlerConfig, *, cancel_event: Optional[asyncio.Event] = None
) -> List[PageRecord]:
    """
    Открывает Fetcher, обходит сайт от cfg.seed_url и возвращает записи страниц.

    Parameters
    ----------
    cfg : CrawlerConfig
        Конфигурация обхода.
    cancel_event : asyncio.Event, optional
        Внешний сигнал остановки, проверяется перед каждым шагом.
    """
    async with Fetcher(cfg.user_agent, timeout=cfg.timeout) as fetcher:
        frontier = CrawlFrontier(
            str(cfg.seed_url),
            fetcher,
            skip_extensions=cfg.skip_extensions,
            max_pages=cfg.max_pages,
            delay=cfg.delay,
            cancel_event=cancel_event,
        )
        return await frontier.run()


def render_sitemap(
    pages: List[PageRecord],
    cfg: CrawlerConfig,
    *,
    output_path: Union[Path, str, None] = None,
    template_dir: Union[Path, str, None] = None,
) -> Path:
    """Собирает sitemap для pages и записывает его (по умолчанию в cfg.output)."""
    xml = build_sitemap(pages, str(cfg.seed_url), template_dir=template_dir)
    saved = write_sitemap(xml, output_path or cfg.output)
    logger.info("Sitemap сохранён: %s (%d URL)", saved, len(pages))
    return saved
