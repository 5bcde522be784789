"""Зонд privileged-path — опасные элементы PATH."""

from __future__ import annotations

import os
import stat
import sys

from hostprobe.context import CheckContext
from hostprobes.base import BaseProbe

# Системные каталоги, которые должны идти в начале PATH (порядок важен)
TRUSTED_SYSTEM_PATHS = (
    "/usr/local/bin",
    "/usr/local/sbin",
    "/usr/bin",
    "/usr/sbin",
    "/bin",
    "/sbin",
)


def _user_bin_dirs() -> dict[str, str]:
    """Пользовательские bin-каталоги → подпись для вывода."""
    result: dict[str, str] = {}
    home = os.environ.get("HOME", "")
    if home:
        result[os.path.join(home, "bin")] = "$HOME/bin"
        result[os.path.join(home, ".local", "bin")] = "$HOME/.local/bin"
        result[os.path.join(home, ".cargo", "bin")] = "$HOME/.cargo/bin"

    gopath = os.environ.get("GOPATH", "")
    if gopath:
        gopaths = gopath.split(os.pathsep)
    elif home:
        gopaths = [os.path.join(home, "go")]
    else:
        gopaths = []
    for gp in gopaths:
        if gp:
            result[os.path.join(gp, "bin")] = "$GOPATH/bin"

    cargo_home = os.environ.get("CARGO_HOME", "")
    if cargo_home:
        result[os.path.join(cargo_home, "bin")] = "$CARGO_HOME/bin"
    return result


def suggest_corrected_path(current: str) -> str:
    """PATH с системными каталогами в начале, без '.', пустых элементов и дублей."""
    if not current:
        return ":".join(TRUSTED_SYSTEM_PATHS)

    entries = current.split(os.pathsep)
    system = [p for p in TRUSTED_SYSTEM_PATHS if p in entries]
    seen = set(system)
    user: list[str] = []
    for p in entries:
        if p in ("", ".") or p in seen:
            continue
        seen.add(p)
        user.append(p)
    return ":".join(system + user)


class PrivilegedPath(BaseProbe):
    """Ищет в PATH '.', пустые и world-writable элементы и bin-каталоги пользователя перед системными."""

    name = "privileged-path"
    title = "Privileged Path"
    emoji = "💣"
    category = "iam"

    def __init__(self) -> None:
        self.findings: list[str] = []

    def check(self, ctx: CheckContext) -> bool:
        if self.disabled() or sys.platform == "win32":
            return False

        path_env = os.environ.get("PATH", "")
        if not path_env:
            return False

        entries = path_env.split(os.pathsep)
        self.findings = []

        first_system = next(
            (i for i, p in enumerate(entries) if p in TRUSTED_SYSTEM_PATHS), -1
        )
        user_bins = _user_bin_dirs()

        for i, p in enumerate(entries):
            if ctx.done():
                return False
            before_system = first_system != -1 and i < first_system

            if p == "":
                if before_system:
                    self.findings.append("Пустой элемент PATH (::) перед системными каталогами (означает текущий каталог)")
                else:
                    self.findings.append("Пустой элемент PATH (::) (означает текущий каталог)")
                continue

            if p == ".":
                if before_system:
                    self.findings.append("Текущий каталог '.' в PATH перед системными каталогами")
                else:
                    self.findings.append("Текущий каталог '.' в PATH")
                continue

            world_writable = False
            try:
                st = os.stat(p)
            except OSError:
                st = None
            if st is not None and stat.S_ISDIR(st.st_mode) and st.st_mode & stat.S_IWOTH:
                world_writable = True
                mode = stat.S_IMODE(st.st_mode)
                if before_system and p in user_bins:
                    self.findings.append(
                        f"World-writable пользовательский каталог {user_bins[p]} "
                        f"стоит перед системными: {p} (mode {mode:04o})"
                    )
                    continue
                self.findings.append(f"World-writable элемент PATH: {p} (mode {mode:04o})")

            if not world_writable and before_system and p in user_bins:
                self.findings.append(f"Пользовательский каталог {user_bins[p]} стоит перед системными")

        return bool(self.findings)

    def diagnostic(self) -> str:
        if not self.findings:
            return "В PATH найдены потенциально опасные элементы"
        if len(self.findings) == 1:
            return self.findings[0]
        return "Несколько проблем PATH: " + "; ".join(self.findings)

    def remediation(self) -> str:
        return (
            "Уберите '.' и world-writable каталоги из PATH, "
            "пользовательские bin-каталоги перенесите после /usr/bin"
        )

    def verbose_remediation(self) -> str:
        path_env = os.environ.get("PATH", "")
        if not path_env:
            return ""
        corrected = suggest_corrected_path(path_env)
        return (
            "Исправленный PATH:\n\n"
            f'   export PATH="{corrected}"\n\n'
            "Чтобы закрепить, добавьте команду в ~/.bashrc или ~/.zshrc."
        )
