"""Зонд naked-credentials — секреты в открытом виде в переменных окружения."""

from __future__ import annotations

import os

from hostprobe.config import DISABLE_PREFIX, LIGHT_PREFIX
from hostprobe.context import CheckContext
from hostprobes.base import BaseProbe

# Имена, которые сами по себе означают секрет
_SECRET_NAMES = frozenset({
    "AWS_SECRET_ACCESS_KEY",
    "AWS_SESSION_TOKEN",
    "GOOGLE_APPLICATION_CREDENTIALS",
    "GITHUB_TOKEN",
    "GITLAB_TOKEN",
    "DOCKER_PASSWORD",
    "NPM_TOKEN",
    "SLACK_TOKEN",
    "STRIPE_SECRET_KEY",
    "TWILIO_AUTH_TOKEN",
})

_SECRET_SUFFIXES = ("_TOKEN", "_SECRET", "_KEY", "_PASSWORD", "_APIKEY", "_API_KEY")

# Наши собственные переменные секретами не считаются
_OWN_PREFIXES = (DISABLE_PREFIX, LIGHT_PREFIX)


def _looks_secret(var: str) -> bool:
    if var in _SECRET_NAMES:
        return True
    if var.startswith("XDG_"):
        return False
    return var.endswith(_SECRET_SUFFIXES)


class NakedCredentials(BaseProbe):
    """Ищет переменные окружения, похожие на сырые секреты."""

    name = "naked-credentials"
    title = "Naked Credential"
    emoji = "🩲"
    category = "iam"

    def __init__(self) -> None:
        self.found: list[str] = []

    def check(self, ctx: CheckContext) -> bool:
        if self.disabled():
            return False

        self.found = []
        for var, value in sorted(os.environ.items()):
            if ctx.done():
                return False
            if not value or var.startswith(_OWN_PREFIXES):
                continue
            if _looks_secret(var):
                self.found.append(var)
        return bool(self.found)

    def diagnostic(self) -> str:
        if not self.found:
            return "В окружении найдены секреты в открытом виде"
        return "Секреты в окружении: " + ", ".join(self.found)

    def remediation(self) -> str:
        return "Используйте credential helper, связку ключей или менеджер секретов"
