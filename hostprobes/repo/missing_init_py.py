"""Зонд missing-init-py — каталог с модулями Python без __init__.py."""

from __future__ import annotations

from pathlib import Path

from hostprobe.context import CheckContext
from hostprobes.base import BaseProbe
from hostprobes.fsutil import is_python_project, walk_dirs

MAX_DEPTH = 6
MAX_DIRS = 500

_SKIP_DIRS = frozenset({"__pycache__", "venv", "env", "node_modules", "dist", "build"})


def looks_like_package(directory: Path) -> bool:
    """В каталоге есть .py-модуль, не считая test_*.py и setup.py."""
    try:
        files = [p for p in directory.iterdir() if p.is_file()]
    except OSError:
        return False
    for path in files:
        if path.suffix != ".py":
            continue
        if path.name.startswith("test_") or path.name == "setup.py":
            continue
        return True
    return False


class MissingInitPy(BaseProbe):
    """Без __init__.py каталог станет namespace-пакетом, и импорты поведут себя иначе."""

    name = "missing-init-py"
    title = "Missing __init__.py"
    emoji = "🐍"
    category = "repo"

    def __init__(self) -> None:
        self.directory = ""

    def check(self, ctx: CheckContext) -> bool:
        if self.disabled() or not is_python_project():
            return False

        for directory in walk_dirs(ctx, ".", MAX_DEPTH, MAX_DIRS, skip=_SKIP_DIRS.__contains__):
            if looks_like_package(directory) and not (directory / "__init__.py").exists():
                self.directory = directory.as_posix()
                return True
        return False

    def diagnostic(self) -> str:
        return f"В каталоге {self.directory} есть модули Python, но нет __init__.py"

    def remediation(self) -> str:
        return f"Создайте пустой файл: touch {self.directory or '<каталог>'}/__init__.py"
