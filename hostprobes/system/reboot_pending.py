"""Зонд reboot-pending — установленные обновления ждут перезагрузки."""

from __future__ import annotations

import os
import sys

from hostprobe.context import CheckContext
from hostprobes.base import BaseProbe

REBOOT_MARKER = "/var/run/reboot-required"


class RebootPending(BaseProbe):
    name = "reboot-pending"
    title = "Reboot Pending"
    emoji = "♻️"
    category = "system"

    def __init__(self, marker: str = REBOOT_MARKER) -> None:
        self.marker = marker

    def check(self, ctx: CheckContext) -> bool:
        if self.disabled() or not sys.platform.startswith("linux"):
            return False
        return os.path.exists(self.marker)

    def diagnostic(self) -> str:
        return "Нужна перезагрузка, чтобы применить исправления безопасности"

    def remediation(self) -> str:
        return "Перезагрузите систему, чтобы активировать обновлённое ядро"
