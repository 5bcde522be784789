"""Настройки hostprobe: переменные окружения и таймауты по умолчанию."""

from __future__ import annotations

import os
from typing import Mapping, Optional

#: Префикс переменных, отключающих отдельные зонды
DISABLE_PREFIX = "HOSTPROBE_DISABLE_"
#: Префикс переменных пользовательских индикаторов
LIGHT_PREFIX = "HOSTPROBE_LIGHT_"

#: Дедлайн прогона по умолчанию: приглашение shell не должно подвисать
DEFAULT_TIMEOUT_MS = 10
#: В режиме отладки дедлайн фактически снят
DEBUG_TIMEOUT_S = 30.0
#: Зонды медленнее этого порога подсвечиваются в отладочном отчёте
SLOW_PROBE_THRESHOLD_S = 0.005

#: Код выхода, когда не все зонды успели до дедлайна (как у timeout(1))
EXIT_INCOMPLETE = 124
#: Код выхода при --fail-on-detect, если есть находки
EXIT_DETECTED = 1


def disable_var(name: str) -> str:
    """Имя переменной, отключающей зонд: `disk-space` → `HOSTPROBE_DISABLE_DISK_SPACE`."""
    return DISABLE_PREFIX + name.upper().replace("-", "_")


def is_disabled(name: str, environ: Optional[Mapping[str, str]] = None) -> bool:
    """Отключён ли зонд. Любое непустое значение переменной отключает его."""
    env = os.environ if environ is None else environ
    return bool(env.get(disable_var(name), ""))
