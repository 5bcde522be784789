"""Параллельный запуск зондов под общим дедлайном."""

from __future__ import annotations

import logging
import queue
import threading
import time
from typing import Optional, Sequence

from hostprobe.context import CheckContext
from hostprobe.models import BatchResult, Outcome
from hostprobes.base import BaseProbe

logger = logging.getLogger(__name__)

#: Шаг ожидания очереди, если у контекста нет дедлайна (ловим явную отмену)
_POLL_INTERVAL = 0.05


def run_batch(probes: Sequence[BaseProbe], ctx: CheckContext) -> BatchResult:
    """Запустить зонды параллельно и собрать результаты до дедлайна.

    На каждый зонд — отдельный поток. Результаты возвращаются в порядке
    входного списка, а не в порядке завершения. Если контекст сработал
    раньше, чем пришли все результаты, недостающие заменяются заглушками
    detected=False и complete=False. Опоздавшие потоки не прерываются:
    они доработают в фоне, но их результаты уже никто не прочитает.

    Args:
        probes: Свежие экземпляры зондов; каждый используется одним потоком.
        ctx: Сигнал отмены, обычно с дедлайном.

    Returns:
        BatchResult ровно с len(probes) элементами.
    """
    if not probes:
        return BatchResult(outcomes=[], complete=True)

    total = len(probes)
    slots: list[Optional[Outcome]] = [None] * total
    # Ёмкость = числу зондов, поэтому put_nowait в потоках никогда не блокирует
    results: queue.Queue = queue.Queue(maxsize=total)

    for idx, probe in enumerate(probes):
        worker = threading.Thread(
            target=_run_one,
            args=(idx, probe, ctx, results),
            name=f"hostprobe-{probe.name or idx}",
            daemon=True,
        )
        worker.start()

    received = 0
    while received < total and not ctx.done():
        try:
            idx, outcome = results.get(timeout=_wait_slice(ctx))
        except queue.Empty:
            continue
        slots[idx] = outcome
        received += 1

    if received == total:
        return BatchResult(outcomes=slots, complete=True)

    # Дедлайн: забираем то, что успело прийти одновременно с ним
    while True:
        try:
            idx, outcome = results.get_nowait()
        except queue.Empty:
            break
        slots[idx] = outcome
        received += 1

    complete = received == total
    if not complete:
        stragglers = [probes[i].name for i, slot in enumerate(slots) if slot is None]
        logger.info("Прогон прерван: не успели %d из %d (%s)",
                    len(stragglers), total, ", ".join(stragglers))

    outcomes = [
        slot if slot is not None else Outcome(probe=probes[i], detected=False)
        for i, slot in enumerate(slots)
    ]
    return BatchResult(outcomes=outcomes, complete=complete)


def count_detected(outcomes: Sequence[Outcome]) -> int:
    """Число сработавших зондов."""
    return sum(1 for o in outcomes if o.detected)


def filter_detected(outcomes: Sequence[Outcome]) -> list[Outcome]:
    """Только сработавшие зонды, в исходном порядке."""
    return [o for o in outcomes if o.detected]


def _wait_slice(ctx: CheckContext) -> float:
    remaining = ctx.remaining()
    if remaining is None:
        return _POLL_INTERVAL
    return min(remaining, _POLL_INTERVAL)


def _run_one(idx: int, probe: BaseProbe, ctx: CheckContext, results: queue.Queue) -> None:
    """Выполнить один зонд внутри границы сбоев и опубликовать результат."""
    logger.debug("Запуск зонда %s", probe.name)
    start = time.perf_counter()
    try:
        detected = bool(probe.check(ctx))
    except BaseException as exc:
        logger.warning("[%s] сбой зонда: %s", probe.name, exc, exc_info=True)
        detected = False
    duration = time.perf_counter() - start

    logger.debug("[%s] detected=%s за %.3f мс", probe.name, detected, duration * 1000)
    results.put_nowait((idx, Outcome(probe=probe, detected=detected, duration=duration)))
