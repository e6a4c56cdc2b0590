# === FILE: sitemap_scout/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для генерации sitemap.xml через командную строку.

Команды:
  crawl     Обойти сайт и записать sitemap.xml
  config    Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml, если есть)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (только консоль, если не указан)
  --log-format FORMAT Формат логирования (e.g. "%(asctime)s %(levelname)s %(message)s")

Команда crawl:
  SEED                 Стартовый URL (override seed_url)
  --output PATH        Куда записать sitemap (override output)
  --limit INT          Макс. число страниц (override max_pages)
  --delay MS           Пауза между запросами, мс (override delay_ms)
  --user-agent UA      Заголовок User-Agent (override user_agent)
  --template DIR       Папка с собственным шаблоном sitemap.xml.j2
  --crawl-timeout SEC  Таймаут всего обхода (секунд)

Дополнительно:
  --version, -v       Показать версию

Пример:
  sitemap_scout crawl https://example.com/ --output public/sitemap.xml --limit 500
"""
import asyncio
import sys
from pathlib import Path

import click
from jinja2 import TemplateError
from pydantic import ValidationError

from sitemap_scout import __version__
from sitemap_scout.config import CrawlerConfig, DEFAULT_CONFIG_PATH, load_config, override_config
from sitemap_scout.engine import render_sitemap, start_crawl
from sitemap_scout.exceptions import SitemapSerializationError
from sitemap_scout.logger import DEFAULT_FORMAT, init_logging

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='sitemap_scout, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (только консоль, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Генератор sitemap.xml: обход сайта по ссылкам."""
    init_logging(level=log_level, log_file=log_file, log_format=log_format)
    try:
        if config_path is None and not DEFAULT_CONFIG_PATH.exists():
            cfg = CrawlerConfig()
        else:
            cfg = load_config(config_path)
    except (OSError, ValueError, TypeError) as e:
        # ValidationError наследует ValueError
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.argument('seed', required=False)
@click.option(
    '--output', '-o', 'output',
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help='Куда записать sitemap (override output)'
)
@click.option(
    '--limit', '-l', 'limit',
    type=click.IntRange(min=1),
    default=None,
    help='Макс. число страниц (override max_pages)'
)
@click.option(
    '--delay', '-d', 'delay_ms',
    type=click.IntRange(min=0),
    default=None,
    help='Пауза между запросами, мс (override delay_ms)'
)
@click.option(
    '--user-agent', '-u', 'user_agent',
    default=None,
    help='Заголовок User-Agent (override user_agent)'
)
@click.option(
    '--template', '-t', 'template_dir',
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Папка с шаблоном sitemap.xml.j2'
)
@click.option(
    '--crawl-timeout', 'crawl_timeout',
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help='Таймаут всего обхода (секунд)'
)
@click.pass_context
def crawl(ctx, seed, output, limit, delay_ms, user_agent, template_dir, crawl_timeout):
    """Обойти сайт и записать sitemap.xml."""
    try:
        cfg = override_config(
            ctx.obj['config'],
            seed_url=seed,
            output=output,
            max_pages=limit,
            delay_ms=delay_ms,
            user_agent=user_agent,
        )
    except ValidationError as e:
        print_error(f'Некорректные параметры: {e}')
    click.echo(f'Crawling {cfg.seed_url}', err=True)

    try:
        if crawl_timeout is not None:
            pages = asyncio.run(
                asyncio.wait_for(start_crawl(cfg), timeout=crawl_timeout)
            )
        else:
            pages = asyncio.run(start_crawl(cfg))
    except asyncio.TimeoutError:
        print_error(f'Обход не завершён за {crawl_timeout} секунд')
    except Exception as e:
        print_error(f'Ошибка при обходе: {e}')

    try:
        saved = render_sitemap(pages, cfg, template_dir=template_dir)
    except (SitemapSerializationError, TemplateError) as e:
        print_error(f'Ошибка сборки sitemap: {e}')
    except OSError as e:
        print_error(f'Ошибка при сохранении sitemap: {e}')

    click.echo(f'Generated {saved.name} with {len(pages)} URLs')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
