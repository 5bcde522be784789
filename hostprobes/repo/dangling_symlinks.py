"""Зонд dangling-symlinks — битые символические ссылки в рабочем каталоге."""

from __future__ import annotations

import os

from hostprobe.context import CheckContext
from hostprobes.base import BaseProbe


class DanglingSymlinks(BaseProbe):
    name = "dangling-symlinks"
    title = "Dangling Symlinks"
    emoji = "💔"
    category = "repo"

    def __init__(self) -> None:
        self.link = ""

    def check(self, ctx: CheckContext) -> bool:
        if self.disabled():
            return False
        try:
            entries = list(os.scandir("."))
        except OSError:
            return False

        for entry in entries:
            if ctx.done():
                return False
            if not entry.is_symlink():
                continue
            # exists() идёт по ссылке: False — цели нет
            if not os.path.exists(entry.path):
                self.link = entry.name
                return True
        return False

    def diagnostic(self) -> str:
        return f"Ссылка указывает на несуществующую цель: {self.link}"

    def remediation(self) -> str:
        return "Удалите или исправьте битые ссылки в текущем каталоге"
