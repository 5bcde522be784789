"""Зонд env-not-ignored — .env в рабочем каталоге не исключён из git."""

from __future__ import annotations

from pathlib import Path

from hostprobe.context import CheckContext
from hostprobes.base import BaseProbe
from hostprobes.fsutil import gitignore_patterns


class EnvNotIgnored(BaseProbe):
    """Ищет .env в текущем каталоге и его упоминание в .gitignore."""

    name = "env-not-ignored"
    title = "Unignored Secret"
    emoji = "📝"
    category = "repo"

    def check(self, ctx: CheckContext) -> bool:
        if self.disabled():
            return False
        if not Path(".env").exists():
            return False
        for line in gitignore_patterns(".gitignore"):
            if ctx.done():
                return False
            if ".env" in line:
                return False
        return True

    def diagnostic(self) -> str:
        return "Файл .env есть, но не указан в .gitignore"

    def remediation(self) -> str:
        return "Добавьте '.env' в .gitignore, чтобы не закоммитить его случайно"
