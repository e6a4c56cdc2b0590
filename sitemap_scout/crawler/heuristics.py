# sitemap_scout/crawler/heuristics.py
"""Эвристики <changefreq> и <priority> по пути страницы.

Порядок проверок важен: первая совпавшая ветка определяет результат.
"""
from __future__ import annotations

from sitemap_scout.crawler.models import ChangeFrequency

__all__ = ["change_frequency", "priority"]


def change_frequency(path: str) -> ChangeFrequency:
    """Возвращает ожидаемую частоту изменения страницы."""
    path = path or "/"
    if path == "/":
        return ChangeFrequency.WEEKLY
    if path.startswith("/blog"):
        return ChangeFrequency.WEEKLY
    if path.startswith("/products"):
        return ChangeFrequency.MONTHLY
    if "contact" in path:
        return ChangeFrequency.YEARLY
    return ChangeFrequency.MONTHLY


def priority(path: str) -> float:
    """Возвращает относительный приоритет страницы в диапазоне [0, 1]."""
    path = path or "/"
    if path == "/":
        return 1.0
    if path == "/blog/" or path.startswith("/blog/"):
        return 0.8
    if path.startswith("/products"):
        return 0.7
    if "contact" in path:
        return 0.4
    return 0.6
