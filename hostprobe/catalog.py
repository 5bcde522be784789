"""Каталог зондов: автообнаружение классов в пакете hostprobes."""

from __future__ import annotations

import importlib
import pkgutil
from typing import Iterable

from hostprobes.base import BaseProbe

#: Категории в порядке вывода
CATEGORIES = ("iam", "opsec", "repo", "system")


def discover_probe_classes(category: str) -> list[type[BaseProbe]]:
    """Автообнаружение классов зондов заданной категории.

    Сканирует пакет `hostprobes.<category>` и собирает все классы,
    наследующие BaseProbe и имеющие name. Порядок детерминирован:
    по имени модуля, затем по имени класса.
    """
    pkg_name = f"hostprobes.{category}"
    try:
        pkg = importlib.import_module(pkg_name)
    except ModuleNotFoundError:
        raise ValueError(f"Категория '{category}' не поддерживается (пакет {pkg_name} не найден)")

    classes: list[type[BaseProbe]] = []
    for module_info in sorted(pkgutil.iter_modules(pkg.__path__), key=lambda m: m.name):
        module = importlib.import_module(f"{pkg_name}.{module_info.name}")
        for attr_name in sorted(dir(module)):
            attr = getattr(module, attr_name)
            if (
                isinstance(attr, type)
                and issubclass(attr, BaseProbe)
                and attr is not BaseProbe
                and attr.name
                and attr.__module__ == module.__name__
            ):
                classes.append(attr)

    return classes


def all_probes(categories: Iterable[str] = CATEGORIES) -> list[BaseProbe]:
    """Свежие экземпляры всех зарегистрированных зондов.

    Вызывать перед каждым прогоном: экземпляры не переиспользуются.
    """
    return [cls() for category in categories for cls in discover_probe_classes(category)]
