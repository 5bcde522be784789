"""Зонд pycache-pollution — байткод Python внутри git-репозитория."""

from __future__ import annotations

from pathlib import Path

from hostprobe.context import CheckContext
from hostprobes.base import BaseProbe
from hostprobes.fsutil import gitignore_patterns, is_python_project, walk_dirs

MAX_DEPTH = 6
MAX_DIRS = 500

_SKIP_DIRS = frozenset({"node_modules", "venv", "env"})


def has_bytecode(directory: Path) -> bool:
    try:
        return any(p.suffix == ".pyc" for p in directory.iterdir())
    except OSError:
        return False


class PycachePollution(BaseProbe):
    """__pycache__ с .pyc в репозитории, где он не исключён через .gitignore."""

    name = "pycache-pollution"
    title = "PyCache Pollution"
    emoji = "🗑️"
    category = "repo"

    def __init__(self) -> None:
        self.directory = ""

    def check(self, ctx: CheckContext) -> bool:
        if self.disabled():
            return False
        if not Path(".git").exists() or not is_python_project():
            return False
        if any("__pycache__" in line or ".pyc" in line for line in gitignore_patterns()):
            return False

        for directory in walk_dirs(ctx, ".", MAX_DEPTH, MAX_DIRS, skip=_SKIP_DIRS.__contains__):
            if directory.name == "__pycache__" and has_bytecode(directory):
                self.directory = directory.as_posix()
                return True
        return False

    def diagnostic(self) -> str:
        return f"Байткод Python не исключён из git: {self.directory}"

    def remediation(self) -> str:
        return "Добавьте '__pycache__/' и '*.pyc' в .gitignore и уберите их из индекса: git rm -r --cached"
