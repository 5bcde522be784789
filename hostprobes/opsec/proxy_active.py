"""Зонд proxy-active — трафик идёт через прокси."""

from __future__ import annotations

import os

from hostprobe.context import CheckContext
from hostprobes.base import BaseProbe

_PROXY_VARS = (
    "HTTP_PROXY",
    "HTTPS_PROXY",
    "ALL_PROXY",
    "http_proxy",
    "https_proxy",
    "all_proxy",
)


class ProxyActive(BaseProbe):
    """Сообщает о заданных переменных прокси."""

    name = "proxy-active"
    title = "Man in the Middle"
    emoji = "🕵️"
    category = "opsec"

    def __init__(self) -> None:
        self.found: list[str] = []

    def check(self, ctx: CheckContext) -> bool:
        if self.disabled():
            return False
        self.found = [var for var in _PROXY_VARS if os.environ.get(var)]
        return bool(self.found)

    def diagnostic(self) -> str:
        if not self.found:
            return "В окружении задан прокси"
        return "Заданы переменные прокси: " + ", ".join(self.found)

    def remediation(self) -> str:
        return "Убедитесь, что прокси ожидаем; иначе снимите переменные"
