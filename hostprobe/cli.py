"""CLI точка входа hostprobe: команда `hostprobe check`."""

from __future__ import annotations

import logging
import time

import click

from hostprobe import render
from hostprobe.catalog import all_probes
from hostprobe.config import (
    DEBUG_TIMEOUT_S,
    DEFAULT_TIMEOUT_MS,
    EXIT_DETECTED,
    EXIT_INCOMPLETE,
)
from hostprobe.context import CheckContext
from hostprobe.lights import parse_lights
from hostprobe.runner import count_detected, run_batch

logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(message)s")


@click.group()
@click.version_option(package_name="hostprobe", prog_name="hostprobe")
def cli() -> None:
    """hostprobe — быстрые проверки гигиены безопасности локальной машины."""


@cli.command()
@click.option("--details", "-d", is_flag=True, help="Подробности по найденным проблемам")
@click.option("--verbose", "-v", is_flag=True, help="Развёрнутые инструкции по исправлению")
@click.option("--debug", is_flag=True, help="Снять дедлайн и показать время каждого зонда")
@click.option(
    "--timeout-ms",
    default=DEFAULT_TIMEOUT_MS,
    show_default=True,
    envvar="HOSTPROBE_TIMEOUT_MS",
    type=click.IntRange(min=1),
    help="Дедлайн всего прогона в миллисекундах",
)
@click.option("--fail-on-detect", is_flag=True, help="Код выхода 1, если есть находки")
@click.pass_context
def check(
    ctx: click.Context,
    details: bool,
    verbose: bool,
    debug: bool,
    timeout_ms: int,
    fail_on_detect: bool,
) -> None:
    """Запустить все зонды и вывести результат."""
    started = time.perf_counter()
    if debug:
        logging.getLogger().setLevel(logging.DEBUG)

    # Индикаторы разбираем первыми: они нужны даже при срыве дедлайна
    lights = parse_lights()

    timeout = DEBUG_TIMEOUT_S if debug else timeout_ms / 1000
    # Импорт каталога не входит в дедлайн
    probes = all_probes()
    with CheckContext.with_timeout(timeout) as check_ctx:
        result = run_batch(probes, check_ctx)

    if debug:
        click.echo(render.debug_report(result, lights, time.perf_counter() - started), err=True)

    if details or verbose:
        click.echo(render.details(result, lights, verbose=verbose))
    else:
        click.echo(render.status_line(result, lights))

    if not result.complete and not debug:
        ctx.exit(EXIT_INCOMPLETE)
    if fail_on_detect and count_detected(result.outcomes) > 0:
        ctx.exit(EXIT_DETECTED)


@cli.command(name="list")
def list_cmd() -> None:
    """Показать зарегистрированные зонды и переменные их отключения."""
    probes = all_probes()
    click.echo(render.probe_list(probes))
    click.echo(f"\nВсего зондов: {len(probes)}")


@cli.command(name="list-custom")
def list_custom() -> None:
    """Показать стили и псевдонимы символов для HOSTPROBE_LIGHT_*."""
    click.echo(render.light_catalog())


@cli.command(name="clear-custom")
def clear_custom() -> None:
    """Вывести команды shell, снимающие все HOSTPROBE_LIGHT_* переменные."""
    output = render.clear_codes(parse_lights())
    if output:
        click.echo(output)
