"""Зонд root-login — shell запущен от root."""

from __future__ import annotations

import os
from typing import Optional

from hostprobe.context import CheckContext
from hostprobes.base import BaseProbe


class RootLogin(BaseProbe):
    name = "root-login"
    title = "Root Login"
    emoji = "👑"
    category = "iam"

    def __init__(self, euid: Optional[int] = None) -> None:
        self.euid = euid

    def check(self, ctx: CheckContext) -> bool:
        if self.disabled():
            return False
        euid = self.euid
        if euid is None:
            geteuid = getattr(os, "geteuid", None)
            if geteuid is None:
                return False
            euid = geteuid()
        return euid == 0

    def diagnostic(self) -> str:
        return "Shell работает от root (UID 0)"

    def remediation(self) -> str:
        return "Работайте под обычным пользователем и повышайте права через sudo"
