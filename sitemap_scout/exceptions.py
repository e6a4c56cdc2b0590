# File: sitemap_scout/exceptions.py
"""sitemap_scout.exceptions: Ошибки, которые краулер различает явно.

Отклонённые URL исключением не являются: ``canonicalize`` просто
возвращает ``None``.
"""

from __future__ import annotations

__all__ = ["SitemapScoutError", "FetchError", "SitemapSerializationError"]


class SitemapScoutError(Exception):
    """Базовый класс ошибок sitemap_scout."""


class FetchError(SitemapScoutError):
    """Не удалось загрузить одну страницу (сеть, таймаут, не-2xx)."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason


class SitemapSerializationError(SitemapScoutError):
    """Собранный sitemap не прошёл проверку разбором."""
