"""Зонд zombie-processes — избыток процессов-зомби."""

from __future__ import annotations

import os
import sys
from pathlib import Path

from hostprobe.context import CheckContext
from hostprobes.base import BaseProbe

#: Сколько зомби ещё считается нормой
MAX_ZOMBIES = 5


def process_state(stat_line: str) -> str:
    """Поле state из /proc/<pid>/stat; пусто, если строка не разбирается.

    Имя процесса в скобках может содержать пробелы и ')', поэтому
    отсчитываем от последней закрывающей скобки.
    """
    paren = stat_line.rfind(")")
    if paren == -1:
        return ""
    fields = stat_line[paren + 1:].split()
    return fields[0] if fields else ""


class ZombieProcesses(BaseProbe):
    """Считает процессы в состоянии Z по /proc (только Linux)."""

    name = "zombie-processes"
    title = "Zombie Apocalypse"
    emoji = "🧟"
    category = "system"

    def __init__(self, proc_root: str | Path = "/proc") -> None:
        self.proc_root = Path(proc_root)
        self.count = 0

    def check(self, ctx: CheckContext) -> bool:
        if self.disabled() or not sys.platform.startswith("linux"):
            return False
        try:
            entries = list(os.scandir(self.proc_root))
        except OSError:
            return False

        zombies = 0
        for entry in entries:
            if ctx.done():
                return False
            if not entry.name.isdigit():
                continue
            try:
                stat_line = (self.proc_root / entry.name / "stat").read_text(errors="ignore")
            except OSError:
                continue
            if process_state(stat_line) == "Z":
                zombies += 1

        self.count = zombies
        return zombies > MAX_ZOMBIES

    def diagnostic(self) -> str:
        return f"Слишком много процессов-зомби: {self.count}"

    def remediation(self) -> str:
        return "Найдите родительские процессы, которые не забирают завершившихся потомков"
