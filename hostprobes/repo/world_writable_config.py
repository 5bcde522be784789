"""Зонд world-writable-config — rc-файлы shell доступны на запись всем."""

from __future__ import annotations

import stat
import sys
from pathlib import Path

from hostprobe.context import CheckContext
from hostprobes.base import BaseProbe

_RC_FILES = (".bashrc", ".zshrc", ".profile", ".bash_profile", ".zprofile")


class WorldWritableConfig(BaseProbe):
    name = "world-writable-config"
    title = "World Writable Config"
    emoji = "🖊️"
    category = "repo"

    def __init__(self) -> None:
        self.found: list[str] = []

    def check(self, ctx: CheckContext) -> bool:
        if self.disabled() or sys.platform == "win32":
            return False
        try:
            home = Path.home()
        except (KeyError, RuntimeError):
            return False

        self.found = []
        for name in _RC_FILES:
            if ctx.done():
                return False
            try:
                mode = (home / name).stat().st_mode
            except OSError:
                continue
            if mode & stat.S_IWOTH:
                self.found.append(name)
        return bool(self.found)

    def diagnostic(self) -> str:
        if not self.found:
            return "Найдены rc-файлы, доступные на запись всем"
        return "Доступен на запись всем: " + self.found[0]

    def remediation(self) -> str:
        return "Исправьте права: chmod 644 <файл>"
