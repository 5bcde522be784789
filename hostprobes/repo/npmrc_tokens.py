"""Зонд npmrc-tokens — токены npm в .npmrc проекта."""

from __future__ import annotations

from pathlib import Path

from hostprobe.context import CheckContext
from hostprobes.base import BaseProbe
from hostprobes.fsutil import read_limited

MAX_NPMRC_BYTES = 128 * 1024
MAX_LINES = 100

_TOKEN_MARKERS = ("_auth=", "_authToken=")


class NpmrcTokens(BaseProbe):
    """Токены уместны в ~/.npmrc, но не в .npmrc корня проекта."""

    name = "npmrc-tokens"
    title = "NPM RC Tokens"
    emoji = "📦"
    category = "repo"

    def __init__(self) -> None:
        self.line = ""

    def check(self, ctx: CheckContext) -> bool:
        if self.disabled():
            return False

        try:
            if Path.cwd().resolve() == Path.home().resolve():
                return False
        except (OSError, KeyError, RuntimeError):
            pass

        try:
            data = read_limited(".npmrc", MAX_NPMRC_BYTES)
        except OSError:
            return False

        for raw in data.splitlines()[:MAX_LINES]:
            if ctx.done():
                return False
            line = raw.strip()
            if not line or line.startswith(("#", ";")):
                continue
            if any(marker in line for marker in _TOKEN_MARKERS):
                self.line = line
                return True
        return False

    def diagnostic(self) -> str:
        return ".npmrc проекта содержит токены (место им в ~/.npmrc)"

    def remediation(self) -> str:
        return "Перенесите токены в ~/.npmrc и добавьте .npmrc в .gitignore"
