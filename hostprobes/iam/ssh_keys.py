"""Зонд ssh-keys — закрытые SSH-ключи с правами шире 0600."""

from __future__ import annotations

import stat
from pathlib import Path

from hostprobe.context import CheckContext
from hostprobes.base import BaseProbe

KEY_FILES = (
    "id_rsa",
    "id_dsa",
    "id_ecdsa",
    "id_ed25519",
    "id_ecdsa_sk",
    "id_ed25519_sk",
)


class SshKeys(BaseProbe):
    """Проверяет права стандартных ключей в ~/.ssh; сообщает о первом нарушении."""

    name = "ssh-keys"
    title = "Open Door"
    emoji = "🔑"
    category = "iam"

    def __init__(self) -> None:
        self.key_path = ""
        self.mode = 0

    def check(self, ctx: CheckContext) -> bool:
        if self.disabled():
            return False
        try:
            ssh_dir = Path.home() / ".ssh"
        except (KeyError, RuntimeError):
            return False
        if not ssh_dir.is_dir():
            return False

        for name in KEY_FILES:
            if ctx.done():
                return False
            path = ssh_dir / name
            try:
                st = path.stat()
            except OSError:
                continue
            if not stat.S_ISREG(st.st_mode):
                continue
            mode = stat.S_IMODE(st.st_mode)
            if mode != 0o600:
                self.key_path = str(path)
                self.mode = mode
                return True
        return False

    def diagnostic(self) -> str:
        return f"{Path(self.key_path).name} имеет права 0{self.mode:o} (нужно 0600)"

    def remediation(self) -> str:
        return f"Выполните: chmod 600 {self.key_path}"
