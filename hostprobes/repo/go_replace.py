"""Зонд go-replace — директива replace в go.mod."""

from __future__ import annotations

from hostprobe.context import CheckContext
from hostprobes.base import BaseProbe
from hostprobes.fsutil import read_limited

MAX_GOMOD_BYTES = 256 * 1024


class GoReplace(BaseProbe):
    """replace на локальный путь ломает сборку на чужих машинах."""

    name = "go-replace"
    title = "Go Replace Directive"
    emoji = "🔄"
    category = "repo"

    def __init__(self) -> None:
        self.directive = ""

    def check(self, ctx: CheckContext) -> bool:
        if self.disabled():
            return False
        try:
            data = read_limited("go.mod", MAX_GOMOD_BYTES)
        except OSError:
            return False

        for raw in data.splitlines():
            if ctx.done():
                return False
            line = raw.strip()
            if line.startswith("//"):
                continue
            if line.startswith("replace "):
                self.directive = line[len("replace "):]
                return True
        return False

    def diagnostic(self) -> str:
        return f"go.mod содержит replace: {self.directive}"

    def remediation(self) -> str:
        return "Уберите директивы replace из go.mod перед коммитом"
