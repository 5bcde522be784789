"""Зонд root-owned-home — файлы домашнего каталога принадлежат root."""

from __future__ import annotations

import sys
from pathlib import Path

from hostprobe.context import CheckContext
from hostprobes.base import BaseProbe

_HOME_ENTRIES = (".bashrc", ".zshrc", ".profile", ".bash_profile", ".config", ".ssh")


class RootOwnedHome(BaseProbe):
    """Обычно остаётся после `sudo` без `-H`: файлы потом не отредактировать."""

    name = "root-owned-home"
    title = "Root Squatter"
    emoji = "🍄"
    category = "iam"

    def __init__(self, root_uid: int = 0) -> None:
        self.root_uid = root_uid
        self.found: list[str] = []

    def check(self, ctx: CheckContext) -> bool:
        if self.disabled() or sys.platform == "win32":
            return False
        try:
            home = Path.home()
        except (KeyError, RuntimeError):
            return False

        self.found = []
        for name in _HOME_ENTRIES:
            if ctx.done():
                return False
            try:
                uid = (home / name).stat().st_uid
            except OSError:
                continue
            if uid == self.root_uid:
                self.found.append(name)
        return bool(self.found)

    def diagnostic(self) -> str:
        if not self.found:
            return "В домашнем каталоге есть файлы root"
        return "Принадлежит root: " + self.found[0]

    def remediation(self) -> str:
        return "Верните владельца: sudo chown -R $USER:$USER <файл>"
