# === FILE: sitemap_scout/config.py ===
"""
Модуль для загрузки и валидации конфигурации генератора sitemap.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, List, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator

from sitemap_scout.crawler.canonical import DEFAULT_SKIP_EXTENSIONS, normalize_extensions

DEFAULT_SEED_URL = "https://www.baumechemical.com/"
DEFAULT_USER_AGENT = "BaumeSiteMapBot/1.0 (+https://www.baumechemical.com/)"


class CrawlerConfig(BaseModel):
    """Конфигурация для одного запуска обхода."""
    model_config = ConfigDict(extra="forbid", frozen=True, validate_default=True)

    seed_url: HttpUrl = Field(DEFAULT_SEED_URL, description="Стартовый URL обхода.")
    max_pages: Optional[int] = Field(None, ge=1, description="Лимит числа страниц (None: без лимита).")
    delay_ms: int = Field(150, ge=0, description="Пауза между запросами (мс).")
    timeout: float = Field(10.0, gt=0, description="Таймаут на один запрос (секунд).")
    user_agent: str = Field(DEFAULT_USER_AGENT, min_length=1, description="Заголовок User-Agent.")
    skip_extensions: List[str] = Field(
        default_factory=lambda: list(DEFAULT_SKIP_EXTENSIONS),
        description="Расширения путей, которые не считаются HTML-страницами.",
    )
    output: Path = Field(Path("sitemap.xml"), description="Файл для записи sitemap.")

    @field_validator("skip_extensions", mode="after")
    def _normalize_extensions(cls, v: List[str]) -> List[str]:
        return list(normalize_extensions(v))

    @property
    def delay(self) -> float:
        """Пауза между запросами в секундах."""
        return self.delay_ms / 1000


DEFAULT_CONFIG_PATH = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None]) -> CrawlerConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект CrawlerConfig.
    При отсутствии файла конфига бросает FileNotFoundError.
    """
    if path is None:
        if not DEFAULT_CONFIG_PATH.exists():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(DEFAULT_CONFIG_PATH))
        path_obj = DEFAULT_CONFIG_PATH
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")

    return CrawlerConfig(**data)


def override_config(cfg: CrawlerConfig, **overrides: Any) -> CrawlerConfig:
    """Возвращает копию cfg с заданными полями (None пропускается), заново проверенную."""
    updates = {k: v for k, v in overrides.items() if v is not None}
    if not updates:
        return cfg
    data = cfg.model_dump(mode="json")
    data.update(updates)
    return CrawlerConfig(**data)
