"""Зонд history-disabled — история shell отключена или фильтруется."""

from __future__ import annotations

import os

from hostprobe.context import CheckContext
from hostprobes.base import BaseProbe

_SKIPPING_HISTCONTROL = ("ignorespace", "ignoreboth")


class HistoryDisabled(BaseProbe):
    """HISTFILE в /dev/null или HISTCONTROL, пропускающий команды с пробелом."""

    name = "history-disabled"
    title = "Blind Spot"
    emoji = "🕶️"
    category = "opsec"

    def __init__(self) -> None:
        self.reason = ""

    def check(self, ctx: CheckContext) -> bool:
        if self.disabled():
            return False

        if os.environ.get("HISTFILE") == "/dev/null":
            self.reason = "HISTFILE указывает на /dev/null (история отключена)"
            return True

        histcontrol = os.environ.get("HISTCONTROL", "")
        if histcontrol in _SKIPPING_HISTCONTROL:
            self.reason = f"HISTCONTROL={histcontrol}: команды с пробелом в начале не пишутся"
            return True
        return False

    def diagnostic(self) -> str:
        return self.reason or "История shell отключена"

    def remediation(self) -> str:
        return "Включите историю shell: она нужна для аудита и разбора инцидентов"
