"""Зонд ld-preload — внедрение библиотек через переменные загрузчика."""

from __future__ import annotations

import os
import sys

from hostprobe.context import CheckContext
from hostprobes.base import BaseProbe

# Платформа → переменная загрузчика
_PRELOAD_VARS = {
    "linux": "LD_PRELOAD",
    "darwin": "DYLD_INSERT_LIBRARIES",
}


class LdPreload(BaseProbe):
    """Проверяет LD_PRELOAD (Linux) и DYLD_INSERT_LIBRARIES (macOS)."""

    name = "ld-preload"
    title = "Trojan Horse"
    emoji = "🐴"
    category = "opsec"

    def __init__(self, platform: str = sys.platform) -> None:
        self.platform = platform
        self.var = ""
        self.value = ""

    def check(self, ctx: CheckContext) -> bool:
        if self.disabled():
            return False
        var = _PRELOAD_VARS.get(self.platform)
        if var is None:
            return False
        value = os.environ.get(var, "")
        if not value:
            return False
        self.var, self.value = var, value
        return True

    def diagnostic(self) -> str:
        return f"{self.var} = {self.value}"

    def remediation(self) -> str:
        return f"Снимите {self.var}, если вы не отлаживаете что-то намеренно"
