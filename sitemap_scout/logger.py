# === FILE: sitemap_scout/logger.py ===
"""Logging for **sitemap_scout**.

Every module logs through the ``SitemapScout`` logger::

    from sitemap_scout.logger import logger
    logger.info("Sitemap сохранён")

Nothing is attached at import time; the CLI calls :func:`init_logging`
once per run. Crawl progress goes to stderr, so stdout carries only the
command output (the ``config`` JSON and the summary line).
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, List, Union

DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOGGER_NAME: Final[str] = "SitemapScout"

# Ротация файла журнала: 5 MiB x 3 архива
LOG_FILE_MAX_BYTES: Final[int] = 5 * 1024 * 1024
LOG_FILE_BACKUPS: Final[int] = 3

_LevelT = Union[int, str]


def _build_handlers(log_file: Path | str | None, fmt: str) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                filename=str(path),
                maxBytes=LOG_FILE_MAX_BYTES,
                backupCount=LOG_FILE_BACKUPS,
                encoding="utf-8",
            )
        )
    formatter = logging.Formatter(fmt)
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def init_logging(
    level: _LevelT = "INFO",
    log_file: str | Path | None = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Настраивает логгер проекта для одного запуска.

    Предыдущие обработчики снимаются и закрываются, поэтому повторный вызов
    (например, несколько команд CLI в одном процессе) не дублирует вывод.

    Parameters
    ----------
    level
        Уровень логирования, число или имя (``"DEBUG"``).
    log_file
        Файл журнала с ротацией; каталог создаётся при необходимости.
        *None* - только stderr.
    log_format
        Формат для :class:`logging.Formatter`.
    """
    lg = logging.getLogger(LOGGER_NAME)
    lg.setLevel(level)
    for handler in list(lg.handlers):
        lg.removeHandler(handler)
        handler.close()
    for handler in _build_handlers(log_file, log_format):
        lg.addHandler(handler)
    lg.propagate = False
    return lg


logger: logging.Logger = logging.getLogger(LOGGER_NAME)

__all__ = ["DEFAULT_FORMAT", "LOGGER_NAME", "logger", "init_logging"]
