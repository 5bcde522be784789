"""Зонд untracked-crypto-keys — ключи в рабочем каталоге без .gitignore."""

from __future__ import annotations

import os

from hostprobe.context import CheckContext
from hostprobes.base import BaseProbe
from hostprobes.fsutil import gitignore_patterns, is_ignored

KEY_EXTENSIONS = (".pem", ".key", ".p12", ".pfx", ".jks", ".keystore")


class UntrackedCryptoKeys(BaseProbe):
    """Сканирует только верхний уровень текущего каталога."""

    name = "untracked-crypto-keys"
    title = "Dead Letter"
    emoji = "🗝️"
    category = "repo"

    def __init__(self) -> None:
        self.found: list[str] = []

    def check(self, ctx: CheckContext) -> bool:
        if self.disabled():
            return False

        self.found = []
        try:
            entries = sorted(os.scandir("."), key=lambda e: e.name)
        except OSError:
            return False

        patterns = None
        for entry in entries:
            if ctx.done():
                return False
            try:
                if entry.is_dir():
                    continue
            except OSError:
                continue
            if not entry.name.endswith(KEY_EXTENSIONS):
                continue
            if patterns is None:
                patterns = gitignore_patterns(".gitignore")
            if not is_ignored(entry.name, patterns):
                self.found.append(entry.name)

        return bool(self.found)

    def diagnostic(self) -> str:
        if not self.found:
            return "Найдены ключи, не указанные в .gitignore"
        return "Ключ не в .gitignore: " + self.found[0]

    def remediation(self) -> str:
        return "Добавьте файлы ключей в .gitignore, чтобы не закоммитить их"
