"""Зонд history-permissions — история shell доступна другим пользователям."""

from __future__ import annotations

import stat
from pathlib import Path

from hostprobe.context import CheckContext
from hostprobes.base import BaseProbe

_HISTORY_FILES = (".bash_history", ".zsh_history")


class HistoryPermissions(BaseProbe):
    """Любой бит группы или остальных на файле истории считается проблемой."""

    name = "history-permissions"
    title = "Shell History World-Readable"
    emoji = "📜"
    category = "opsec"

    def __init__(self) -> None:
        self.found: list[str] = []

    def check(self, ctx: CheckContext) -> bool:
        if self.disabled():
            return False
        try:
            home = Path.home()
        except (KeyError, RuntimeError):
            return False

        self.found = []
        for name in _HISTORY_FILES:
            if ctx.done():
                return False
            try:
                mode = (home / name).stat().st_mode
            except OSError:
                continue
            if stat.S_IMODE(mode) & 0o077:
                self.found.append(name)
        return bool(self.found)

    def diagnostic(self) -> str:
        return "Файлы истории читаются другими пользователями: " + ", ".join(self.found)

    def remediation(self) -> str:
        return "Выполните: chmod 600 ~/.bash_history ~/.zsh_history"
