"""Зонд permissive-umask — слишком разрешающая маска создания файлов."""

from __future__ import annotations

import os
import threading

from hostprobe.context import CheckContext
from hostprobes.base import BaseProbe

# os.umask() меняет состояние всего процесса: читаем его только под замком
_umask_lock = threading.Lock()

_PERMISSIVE = (0o000, 0o002)


def read_umask() -> int:
    """Текущая umask процесса (на мгновение подменяется и восстанавливается)."""
    with _umask_lock:
        current = os.umask(0)
        os.umask(current)
    return current


class PermissiveUmask(BaseProbe):
    """Сообщает об umask 0000 и 0002: новые файлы доступны на запись группе или всем."""

    name = "permissive-umask"
    title = "Loose Cannon"
    emoji = "😷"
    category = "opsec"

    def __init__(self) -> None:
        self.umask = 0

    def check(self, ctx: CheckContext) -> bool:
        if self.disabled():
            return False
        self.umask = read_umask()
        return self.umask in _PERMISSIVE

    def diagnostic(self) -> str:
        return f"Разрешающая umask: {self.umask:04o}"

    def remediation(self) -> str:
        return "Установите umask 0022 или 0027"
