"""Зонд disk-space — корневой раздел почти заполнен."""

from __future__ import annotations

import os
import sys

from hostprobe.context import CheckContext
from hostprobes.base import BaseProbe

#: Порог заполненности в процентах (строго больше)
THRESHOLD_PERCENT = 90


def percent_used(path: str) -> int:
    """Процент занятого места по statvfs; 0, если размер неизвестен.

    Raises:
        OSError: statvfs недоступен для пути.
    """
    st = os.statvfs(path)
    total = st.f_blocks * st.f_frsize
    if total <= 0:
        return 0
    used = total - st.f_bfree * st.f_frsize
    return min(100, used * 100 // total)


class DiskSpace(BaseProbe):
    """Переполненный диск ломает логи и аудит."""

    name = "disk-space"
    title = "Full Tank"
    emoji = "💾"
    category = "system"

    def __init__(self, path: str = "/") -> None:
        self.path = path
        self.percent = 0

    def check(self, ctx: CheckContext) -> bool:
        if self.disabled() or sys.platform == "win32":
            return False
        try:
            self.percent = percent_used(self.path)
        except OSError:
            return False
        return self.percent > THRESHOLD_PERCENT

    def diagnostic(self) -> str:
        return f"{self.path} заполнен на {self.percent}%"

    def remediation(self) -> str:
        return "Освободите место, иначе логи и журнал аудита начнут теряться"
