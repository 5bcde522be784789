"""Зонд terraform-state-local — состояние Terraform лежит в рабочем каталоге."""

from __future__ import annotations

from pathlib import Path

from hostprobe.context import CheckContext
from hostprobes.base import BaseProbe

STATE_FILES = ("terraform.tfstate", "terraform.tfstate.backup")


class TerraformStateLocal(BaseProbe):
    name = "terraform-state-local"
    title = "Local Terraform State"
    emoji = "🏗️"
    category = "repo"

    def __init__(self) -> None:
        self.found = ""

    def check(self, ctx: CheckContext) -> bool:
        if self.disabled():
            return False
        for name in STATE_FILES:
            if Path(name).exists():
                self.found = name
                return True
        return False

    def diagnostic(self) -> str:
        return f"{self.found or STATE_FILES[0]} лежит локально (в команде нужен удалённый backend)"

    def remediation(self) -> str:
        return "Настройте удалённый backend (S3/GCS) и выполните 'terraform init -migrate-state'"
