"""Зонд debug-enabled — включены отладочные переменные окружения."""

from __future__ import annotations

import os

from hostprobe.context import CheckContext
from hostprobes.base import BaseProbe

_DEBUG_VARS = ("DEBUG", "TRACE", "VERBOSE")


class DebugEnabled(BaseProbe):
    """Значение не важно: достаточно, что переменная задана."""

    name = "debug-enabled"
    title = "Debug Mode Enabled"
    emoji = "🐛"
    category = "opsec"

    def __init__(self) -> None:
        self.found: list[str] = []

    def check(self, ctx: CheckContext) -> bool:
        if self.disabled():
            return False
        self.found = [var for var in _DEBUG_VARS if var in os.environ]
        return bool(self.found)

    def diagnostic(self) -> str:
        return (
            "Заданы отладочные переменные (" + ", ".join(self.found) + "): "
            "логи разрастаются и могут утекать данные"
        )

    def remediation(self) -> str:
        return "Снимите DEBUG, TRACE и VERBOSE вне отладки"
