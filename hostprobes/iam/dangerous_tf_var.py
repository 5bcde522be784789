"""Зонд dangerous-tf-var — секреты Terraform в переменных TF_VAR_*."""

from __future__ import annotations

import os

from hostprobe.context import CheckContext
from hostprobes.base import BaseProbe

_SECRET_MARKERS = (
    "access_key",
    "secret_key",
    "password",
    "token",
    "api_key",
    "private_key",
    "secret",
    "credential",
)


class DangerousTfVar(BaseProbe):
    """Секрет, переданный через TF_VAR_*, оседает в истории shell."""

    name = "dangerous-tf-var"
    title = "Dangerous TF_VAR"
    emoji = "🔐"
    category = "iam"

    def __init__(self) -> None:
        self.found: list[str] = []

    def check(self, ctx: CheckContext) -> bool:
        if self.disabled():
            return False

        self.found = []
        for var in sorted(os.environ):
            if ctx.done():
                return False
            if not var.startswith("TF_VAR_"):
                continue
            lowered = var.lower()
            if any(marker in lowered for marker in _SECRET_MARKERS):
                self.found.append(var)
        return bool(self.found)

    def diagnostic(self) -> str:
        if not self.found:
            return "Секреты Terraform в переменных окружения"
        return f"Секрет Terraform в окружении: {self.found[0]} (попадёт в историю shell)"

    def remediation(self) -> str:
        return "Передавайте секреты через .tfvars или менеджер секретов, а не TF_VAR_*"
