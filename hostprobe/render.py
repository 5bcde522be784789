"""Текстовый вывод результатов прогона."""

from __future__ import annotations

from typing import Sequence

import click

from hostprobe.config import SLOW_PROBE_THRESHOLD_S, disable_var
from hostprobe.lights import EMOJI_ALIASES, STYLE_MAP, glyph_from_code, style_kwargs
from hostprobe.models import BatchResult, Light
from hostprobe.runner import count_detected, filter_detected
from hostprobes.base import BaseProbe

_RULE = "━" * 52


def status_line(result: BatchResult, lights: Sequence[Light]) -> str:
    """Короткая строка для приглашения shell: `🚨 <число>` и символы индикаторов."""
    count = count_detected(result.outcomes)
    parts = []
    if count > 0:
        parts.append("🚨 " + click.style(str(count), fg="bright_black"))
    if lights:
        parts.append("".join(click.style(light.glyph, **style_kwargs(light)) for light in lights))
    return " ".join(parts)


def details(result: BatchResult, lights: Sequence[Light], verbose: bool = False) -> str:
    """Подробный отчёт по сработавшим зондам и индикаторам."""
    detected = filter_detected(result.outcomes)
    if not detected and not lights:
        return "✅ Проблем не найдено"

    lines: list[str] = []
    if detected:
        lines += ["Найдены проблемы:", ""]
        for outcome in detected:
            probe = outcome.probe
            lines.append(f"{probe.emoji} {probe.diagnostic()}")
            lines.append(f"   → Исправление: {probe.remediation()}")
            if verbose:
                extra = probe.verbose_remediation()
                if extra:
                    lines += ["", f"   🔧 {extra}"]
                lines.append(f"   🔕 Отключить: {disable_var(probe.name)}=1")
            lines.append("")

    if lights:
        for light in lights:
            lines.append(f"{light.glyph} {light.name} - {light.diagnostic}")
        lines.append("")

    if not result.complete:
        lines.append("⏱️  Часть проверок не уложилась в дедлайн")
    if detected and not verbose:
        lines.append("💡 Подробнее: флаг -v")
    return "\n".join(lines).rstrip("\n")


def debug_report(result: BatchResult, lights: Sequence[Light], elapsed: float) -> str:
    """Отладочный отчёт: время каждого зонда, самые медленные, превышения порога."""
    timed = sorted(result.outcomes, key=lambda o: o.duration or 0.0, reverse=True)

    lines = [
        _RULE,
        "🐛 ОТЛАДКА",
        _RULE,
        "",
        f"⏱️  Общее время: {elapsed * 1000:.2f} мс",
        f"   Прогон завершён полностью: {'да' if result.complete else 'нет'}",
        "",
        "📦 ИНДИКАТОРЫ:",
    ]
    if lights:
        lines.append(f"   Найдено: {len(lights)}")
        lines += [f"      {light.glyph} {light.name} - {light.diagnostic}" for light in lights]
    else:
        lines.append("   Переменные HOSTPROBE_LIGHT_* не заданы")

    lines += [
        "",
        f"🔍 ЗОНДЫ ({count_detected(result.outcomes)} сработало, {len(result.outcomes)} всего):",
        "",
    ]
    for outcome in timed:
        mark = "🚨" if outcome.detected else "  "
        lines.append(f"   {mark} {outcome.probe.title:<35} {_fmt_duration(outcome.duration)}")

    if len(timed) >= 3:
        lines += ["", "📊 Самые медленные:"]
        for i, outcome in enumerate(timed[:3], start=1):
            lines.append(f"      {i}. {outcome.probe.title:<35} {_fmt_duration(outcome.duration)}")

    slow = sum(1 for o in result.outcomes if (o.duration or 0.0) > SLOW_PROBE_THRESHOLD_S)
    if slow:
        lines.append(f"\n   ⚠️  {slow} зонд(ов) дольше {SLOW_PROBE_THRESHOLD_S * 1000:.0f} мс")

    lines += ["", _RULE]
    return "\n".join(lines)


def probe_list(probes: Sequence[BaseProbe]) -> str:
    """Таблица зарегистрированных зондов с переменными отключения."""
    lines = [f"{'ID':<24} {'КАТЕГОРИЯ':<10} ОТКЛЮЧЕНИЕ"]
    for probe in probes:
        lines.append(f"{probe.name:<24} {probe.category:<10} {disable_var(probe.name)}")
    return "\n".join(lines)


def light_catalog() -> str:
    """Поддерживаемые стили и псевдонимы символов для индикаторов."""
    lines = ["Стили:"]
    for name in sorted(STYLE_MAP):
        lines.append("   " + click.style(name, **STYLE_MAP[name]))
    lines += ["", "Псевдонимы символов:", f"{'ПСЕВДОНИМ':<20} {'HEX':<10} СИМВОЛ", "-" * 44]
    for alias in sorted(EMOJI_ALIASES):
        lines.append(f"{alias:<20} {EMOJI_ALIASES[alias]:<10} {glyph_from_code(alias) or '?'}")
    return "\n".join(lines)


def clear_codes(lights: Sequence[Light]) -> str:
    """Команды shell, снимающие все индикаторы."""
    return "\n".join(light.unset for light in lights)


def _fmt_duration(duration: float | None) -> str:
    if duration is None:
        return "не успел"
    return f"{duration * 1000:8.3f} мс"
