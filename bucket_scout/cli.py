# === FILE: bucket_scout/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска сканера BucketScout через командную строку.

Команды:
  scan      Сгенерировать кандидатов, проверить бакеты, вывести/сохранить отчёты
  config    Показать итоговую конфигурацию
  regions   Показать коды регионов и их адреса

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (необязательно)
  --log-level LEVEL   Уровень логирования на консоли (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (все исходы, включая несуществующие бакеты)
  --log-format FORMAT Формат логирования

Команда scan опции:
  --domain, -d TEXT   Seed для имён бакетов (обязательно)
  --region, -r CODE   Регион провайдера: us, ie, nc, si, to (default: us)
  --wordlist, -w PATH Словарь префиксов
  --download, -a      Скачать публичные файлы найденных бакетов
  --verbose, -v       Показывать и несуществующие бакеты
  --json PATH         Сохранить JSON-отчёт в файл
  --html PATH         Сохранить HTML-отчёт в файл

Дополнительно:
  --version           Показать версию BucketScout

Пример:
  bucket-scout --log-file scan.log scan -d example -r ie --json report.json
"""
import asyncio
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from bucket_scout import __version__
from bucket_scout.config import REGIONS, load_config
from bucket_scout.engine import start_scan
from bucket_scout.logger import configure
from bucket_scout.report.console import ConsoleReporter
from bucket_scout.report.html_report import render_html
from bucket_scout.report.json_report import render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])


def print_error(message: str, code: int = 1):
    click.secho(message, fg='red', err=True)
    sys.exit(code)


def _load(ctx, **overrides):
    try:
        return load_config(ctx.obj['config_path'], overrides)
    except (ValidationError, ValueError, TypeError, FileNotFoundError) as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', message='BucketScout, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option(
    '--log-level', 'log_level',
    default='WARNING', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования на консоли'
)
@click.option(
    '--log-file', '-l', 'log_file',
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help='Путь к файлу логов'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд BucketScout CLI."""
    try:
        configure(level=log_level, log_file=log_file, log_format=log_format)
    except OSError as e:
        print_error(f'Could not open the logging file: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config_path


def scan_options(func):
    """Options shared by `scan` and `config`."""
    options = [
        click.option('--domain', '-d', 'domain', required=True, help='Seed для имён бакетов.'),
        click.option(
            '--region', '-r', 'region',
            default=None,
            type=click.Choice(sorted(REGIONS)),
            help='Регион провайдера [default: us]'
        ),
        click.option(
            '--wordlist', '-w', 'wordlist',
            default=None,
            type=click.Path(exists=True, dir_okay=False, path_type=Path),
            help='Словарь префиксов (по строке на слово)'
        ),
        click.option('--download', '-a', 'download', is_flag=True,
                     help='Скачать публичные файлы найденных бакетов'),
        click.option('--output-dir', 'download_dir', default=None,
                     type=click.Path(file_okay=False, path_type=Path),
                     help='Каталог для скачанных файлов'),
        click.option('--pool-size', 'pool_size', type=int, default=None, help='Число воркеров'),
        click.option('--prefix', 'prefix', is_flag=True,
                     help='Добавлять seed перед каждым кандидатом'),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _overrides(domain, region, wordlist, download, download_dir, pool_size, prefix):
    return {
        'domain': domain,
        'region': region,
        'wordlist': wordlist,
        'download': True if download else None,
        'download_dir': download_dir,
        'pool_size': pool_size,
        'prefix_candidates': True if prefix else None,
    }


@cli.command('scan', context_settings=CONTEXT_SETTINGS)
@scan_options
@click.option('--verbose', '-v', is_flag=True, help='Показывать все исходы, включая несуществующие бакеты')
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить JSON-отчёт в файл'
)
@click.option(
    '--html', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить HTML-отчёт в файл'
)
@click.option(
    '--template', '-t', 'template_dir',
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Папка с Jinja2-шаблонами (по умолчанию встроенные)'
)
@click.option(
    '--pretty', is_flag=True,
    help='Преформатировать JSON-вывод (отступ 2)'
)
@click.pass_context
def scan(ctx, domain, region, wordlist, download, download_dir, pool_size, prefix,
         verbose, json_output, html_output, template_dir, pretty):
    """Запустить сканирование бакетов и сгенерировать отчёты."""
    cfg = _load(ctx, **_overrides(domain, region, wordlist, download, download_dir, pool_size, prefix))
    reporter = ConsoleReporter(verbose=verbose)

    click.echo(f'Scanning {cfg.domain} against {cfg.host}')
    try:
        report = asyncio.run(start_scan(cfg, reporter))
    except KeyboardInterrupt:
        print_error('Сканирование прервано пользователем', code=130)
    except Exception as e:
        print_error(f'Ошибка при сканировании: {e}')

    click.echo(f'Finish time: {report.finished}')
    click.echo(f'Total time: {report.elapsed:.2f}s')

    if json_output:
        try:
            saved_json = render_json(report, json_output)
            click.echo(f'JSON report: {saved_json}')
        except Exception as e:
            print_error(f'Ошибка при сохранении JSON: {e}')

    if html_output:
        try:
            saved_html = render_html(report, template_dir, html_output)
            click.echo(f'HTML report: {saved_html}')
        except Exception as e:
            print_error(f'Ошибка при сохранении HTML: {e}')

    if pretty and not json_output:
        click.echo(report.json(pretty=True))


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@scan_options
@click.pass_context
def show_config(ctx, domain, region, wordlist, download, download_dir, pool_size, prefix):
    """Показать итоговую конфигурацию в JSON."""
    cfg = _load(ctx, **_overrides(domain, region, wordlist, download, download_dir, pool_size, prefix))
    click.echo(cfg.model_dump_json(indent=2))


@cli.command('regions', context_settings=CONTEXT_SETTINGS)
def show_regions():
    """Показать коды регионов и базовые URL."""
    for code, url in REGIONS.items():
        click.echo(f'{code}\t{url}')


# expose these names at module level for test monkey-patching
cli.start_scan = start_scan
cli.render_json = render_json
cli.render_html = render_html

if __name__ == "__main__":
    cli()
