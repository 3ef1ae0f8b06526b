#!/usr/bin/env python3
"""
Точка входа для запуска LinkCrawler через командную строку.

Команды:
  links     Вывести ссылки, найденные на одной странице
  crawl     Обойти сайт в ширину от ссылок стартовой страницы
  config    Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (значения по умолчанию, если не указан)
  --timeout SEC       Таймаут одного запроса (override timeout)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stderr, если не указан)
  --log-format FORMAT Формат логирования (e.g. "%(asctime)s %(levelname)s %(message)s")

Опции команд links и crawl:
  --json PATH          Сохранить JSON-отчёт в файл
  --pretty             Преформатировать JSON (отступ 2)
  --crawl-timeout SEC  Таймаут всего обхода (только crawl)

Дополнительно:
  --version, -v       Показать версию LinkCrawler

Пример:
  link-crawler crawl example.com 50 --json links.json
"""
import asyncio
import sys
from pathlib import Path

import click

from link_crawler import __version__
from link_crawler.aggregator import CrawlReport
from link_crawler.config import CrawlerConfig, load_config
from link_crawler.dispatcher import fetch_links, start_crawl
from link_crawler.logger import init_logging
from link_crawler.report import render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def emit_report(report: CrawlReport, json_output, pretty: bool) -> None:
    """Печатает URL по одному на строку и при необходимости сохраняет JSON."""
    for url in report.urls:
        click.echo(url)
    if json_output:
        try:
            saved = render_json(report, json_output)
        except OSError as e:
            print_error(f'Ошибка при сохранении JSON: {e}')
        click.echo(f'JSON report: {saved}', err=True)
    elif pretty:
        click.echo(report.json(pretty=True), err=True)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='LinkCrawler, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML или JSON.'
)
@click.option(
    '--timeout', 'timeout',
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help='Таймаут одного запроса, секунд (override timeout)'
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
    help='Путь к файлу логов (только stderr, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, timeout, log_level, log_file, log_format):
    """Группа команд LinkCrawler CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path) if config_path else CrawlerConfig()
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    if timeout is not None:
        cfg = cfg.model_copy(update={'timeout': timeout})
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('links', context_settings=CONTEXT_SETTINGS)
@click.argument('url')
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить JSON-отчёт в файл'
)
@click.option('--pretty', is_flag=True, help='Вывести JSON-отчёт в stderr с отступом 2')
@click.pass_context
def links(ctx, url, json_output, pretty):
    """Вывести ссылки со страницы URL, по одной на строку."""
    cfg = ctx.obj['config']
    try:
        found = asyncio.run(fetch_links(cfg, url))
    except Exception as e:
        print_error(f'Ошибка при обходе {url}: {e}')
    emit_report(CrawlReport(url=url, mode='links', urls=found), json_output, pretty)


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.argument('url')
@click.argument('limit', type=click.IntRange(min=1), required=False)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить JSON-отчёт в файл'
)
@click.option('--pretty', is_flag=True, help='Вывести JSON-отчёт в stderr с отступом 2')
@click.option(
    '--crawl-timeout', 'crawl_timeout',
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help='Таймаут всего обхода (секунд)'
)
@click.pass_context
def crawl(ctx, url, limit, json_output, pretty, crawl_timeout):
    """Обойти страницы от ссылок URL, не более LIMIT на каждую ветку."""
    cfg = ctx.obj['config']
    limit = limit or cfg.limit
    try:
        if crawl_timeout:
            visited = asyncio.run(
                asyncio.wait_for(start_crawl(cfg, url, limit), timeout=crawl_timeout)
            )
        else:
            visited = asyncio.run(start_crawl(cfg, url, limit))
    except asyncio.TimeoutError:
        print_error(f'Обход не завершён за {crawl_timeout} секунд')
    except Exception as e:
        print_error(f'Ошибка при обходе {url}: {e}')
    emit_report(CrawlReport(url=url, mode='crawl', urls=visited, limit=limit), json_output, pretty)


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
