"""Общие файловые утилиты для зондов."""

from __future__ import annotations

import fnmatch
import os
from pathlib import Path
from typing import Callable, Iterator

from hostprobe.context import CheckContext


def read_limited(path: str | Path, max_bytes: int) -> str:
    """Прочитать не более max_bytes байт текстового файла.

    Raises:
        OSError: Файл недоступен. Зонды перехватывают это сами.
    """
    with open(path, "rb") as fh:
        data = fh.read(max_bytes)
    return data.decode("utf-8", errors="ignore")


def gitignore_patterns(gitignore: str | Path = ".gitignore") -> list[str]:
    """Значимые строки .gitignore; пустой список, если файла нет."""
    try:
        text = Path(gitignore).read_text(encoding="utf-8", errors="ignore")
    except OSError:
        return []
    patterns = []
    for line in text.splitlines():
        line = line.strip()
        if line and not line.startswith("#"):
            patterns.append(line)
    return patterns


def is_ignored(filename: str, patterns: list[str]) -> bool:
    """Эвристика «файл упомянут в .gitignore».

    Совпадение засчитывается при точном равенстве, совпадении glob-шаблона
    или если строка просто содержит имя файла.
    """
    for line in patterns:
        if line == filename:
            return True
        if "*" in line and fnmatch.fnmatchcase(filename, line):
            return True
        if filename in line:
            return True
    return False


_PYTHON_MARKERS = ("setup.py", "pyproject.toml", "requirements.txt")


def is_python_project(root: str | Path = ".") -> bool:
    """Каталог похож на Python-проект: есть маркер сборки или .py в корне."""
    root = Path(root)
    if any((root / marker).exists() for marker in _PYTHON_MARKERS):
        return True
    try:
        return any(p.suffix == ".py" and p.is_file() for p in root.iterdir())
    except OSError:
        return False


def walk_dirs(
    ctx: CheckContext,
    root: str | Path = ".",
    max_depth: int = 6,
    max_dirs: int = 500,
    skip: Callable[[str], bool] = lambda name: False,
) -> Iterator[Path]:
    """Обойти подкаталоги root в ширину с ограничениями.

    Скрытые каталоги и те, для которых skip(name) истинно, не посещаются.
    Обход прекращается при срабатывании ctx или после max_dirs каталогов.

    Yields:
        Path каждого посещённого подкаталога (без самого root).
    """
    pending = [(Path(root), 0)]
    visited = 0
    while pending:
        current, depth = pending.pop(0)
        try:
            entries = sorted(os.scandir(current), key=lambda e: e.name)
        except OSError:
            continue
        for entry in entries:
            if ctx.done():
                return
            try:
                if not entry.is_dir(follow_symlinks=False):
                    continue
            except OSError:
                continue
            if entry.name.startswith(".") or skip(entry.name):
                continue
            if depth + 1 > max_depth:
                continue
            visited += 1
            if visited > max_dirs:
                return
            path = Path(entry.path)
            yield path
            pending.append((path, depth + 1))
