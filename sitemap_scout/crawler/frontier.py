# === FILE: sitemap_scout/crawler/frontier.py ===
"""Crawl frontier: очередь обхода, множество посещённых URL и записи страниц.

Обход строго последовательный: одна загрузка за шаг, после каждой загрузки
пауза ``delay`` секунд. URL помечается посещённым до загрузки, поэтому
каждая страница загружается не более одного раза.
"""
from __future__ import annotations

import asyncio
import logging
import time
from collections import deque
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Deque, FrozenSet, Iterable, List, Optional, Sequence, Set, Tuple

from sitemap_scout.crawler.canonical import (
    DEFAULT_SKIP_EXTENSIONS,
    canonicalize,
    normalize_extensions,
    origin_of,
)
from sitemap_scout.crawler.fetcher import PageFetcher
from sitemap_scout.crawler.link_extractor import extract_links
from sitemap_scout.crawler.models import PageRecord
from sitemap_scout.exceptions import FetchError

__all__ = ("CrawlFrontier", "FrontierState")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class FrontierState(Enum):
    RUNNING = "running"
    DONE = "done"


class CrawlFrontier:
    """Обход одного сайта от seed URL. Создаётся заново для каждого запуска."""

    def __init__(
        self,
        seed_url: str,
        fetcher: PageFetcher,
        *,
        skip_extensions: Iterable[str] = DEFAULT_SKIP_EXTENSIONS,
        max_pages: Optional[int] = None,
        delay: float = 0.15,
        clock: Optional[Callable[[], datetime]] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> None:
        if max_pages is not None and max_pages < 1:
            raise ValueError("max_pages must be >= 1")
        if delay < 0:
            raise ValueError("delay must be >= 0")
        self.origin = origin_of(seed_url)
        if self.origin is None:
            raise ValueError(f"seed URL is not an absolute http(s) URL: {seed_url!r}")
        self.skip_extensions: Tuple[str, ...] = normalize_extensions(skip_extensions)
        seed = self._canonicalize(seed_url, seed_url)
        if seed is None:
            raise ValueError(f"seed URL is not a crawlable page: {seed_url!r}")

        self.seed = seed
        self.fetcher = fetcher
        self.max_pages = max_pages
        self.delay = delay
        self._clock = clock or _utcnow
        self._cancel_event = cancel_event
        self.logger = logging.getLogger("SitemapScout")

        self._visited: Set[str] = set()
        self._pending: Deque[str] = deque([seed])
        self._pending_set: Set[str] = {seed}
        self._pages: List[PageRecord] = []
        self._failed: List[str] = []
        self._state = FrontierState.RUNNING

    # Read-only views -------------------------------------------------------
    @property
    def state(self) -> FrontierState:
        return self._state

    @property
    def visited(self) -> FrozenSet[str]:
        return frozenset(self._visited)

    @property
    def pending(self) -> Sequence[str]:
        return tuple(self._pending)

    @property
    def pages(self) -> Sequence[PageRecord]:
        return tuple(self._pages)

    @property
    def failed(self) -> Sequence[str]:
        """URLs whose fetch failed, in the order they were attempted."""
        return tuple(self._failed)

    # Traversal -------------------------------------------------------------
    async def run(self) -> List[PageRecord]:
        """Выполняет шаги до состояния DONE и возвращает записи страниц."""
        self.logger.info("Старт обхода: %s", self.seed)
        start = time.monotonic()
        while self._state is FrontierState.RUNNING:
            await self.step()
        duration = time.monotonic() - start
        self.logger.info(
            "Завершено: %d страниц за %.2f с (%.2f стр/с)",
            len(self._pages), duration, len(self._pages) / duration if duration else 0,
        )
        if self._failed:
            self.logger.info("Не загружено: %d", len(self._failed))
        return list(self._pages)

    async def step(self) -> FrontierState:
        """Один шаг обхода: не более одной загрузки."""
        if self._state is FrontierState.DONE:
            return self._state

        url: Optional[str] = None
        while url is None:
            if self._should_stop():
                self._state = FrontierState.DONE
                return self._state
            head = self._pending.popleft()
            self._pending_set.discard(head)
            if head not in self._visited:
                url = head

        self._visited.add(url)
        try:
            result = await self.fetcher.fetch(url)
        except FetchError as exc:
            self.logger.warning("Пропуск %s: %s", url, exc.reason)
            self._failed.append(url)
        else:
            self._pages.append(PageRecord(url, result.last_modified or self._clock()))
            self.logger.debug("Загружено %s (%s)", url, result.content_type or "unknown type")
            if result.is_html and result.body:
                self._enqueue_links(result.body, url)

        if self.delay:
            await asyncio.sleep(self.delay)
        return self._state

    def _should_stop(self) -> bool:
        if self._cancel_event is not None and self._cancel_event.is_set():
            self.logger.info("Обход остановлен по сигналу отмены")
            return True
        if not self._pending:
            return True
        return self.max_pages is not None and len(self._pages) >= self.max_pages

    def _enqueue_links(self, html: str, page_url: str) -> None:
        added = 0
        for raw in extract_links(html, page_url):
            link = self._canonicalize(raw, page_url)
            if link is None or link in self._visited or link in self._pending_set:
                continue
            self._pending.append(link)
            self._pending_set.add(link)
            added += 1
        if added:
            self.logger.debug("%s: +%d URL в очереди", page_url, added)

    def _canonicalize(self, raw: str, base: str) -> Optional[str]:
        return canonicalize(raw, base, origin=self.origin, skip_extensions=self.skip_extensions)
