"""Базовый класс для всех зондов hostprobe."""

from __future__ import annotations

from abc import ABC, abstractmethod

from hostprobe.config import is_disabled
from hostprobe.context import CheckContext


class BaseProbe(ABC):
    """Интерфейс зонда. Один зонд = одна проверка гигиены локальной машины.

    Экземпляр живёт ровно один прогон: создаётся непосредственно перед ним,
    используется одним потоком и не переиспользуется. check() может сохранять
    детали в полях экземпляра; diagnostic() и remediation() читают их и
    имеют смысл только после возврата из check().
    """

    #: Уникальный идентификатор зонда (kebab-case)
    name: str = ""
    #: Человекочитаемое название
    title: str = ""
    #: Значок для подробного вывода
    emoji: str = "⚠️"
    #: Категория каталога: iam, opsec, repo, system
    category: str = ""

    @abstractmethod
    def check(self, ctx: CheckContext) -> bool:
        """Выполнить проверку.

        Args:
            ctx: Сигнал отмены. Долгие циклы обязаны опрашивать ctx.done()
                на каждой итерации и возвращать False после срабатывания.

        Returns:
            True, если проблема обнаружена. Ошибки ввода-вывода и разбора
            означают «не обнаружено», а не исключение.
        """
        ...

    @abstractmethod
    def diagnostic(self) -> str:
        """Короткое описание обнаруженной проблемы."""
        ...

    @abstractmethod
    def remediation(self) -> str:
        """Подсказка, как исправить проблему."""
        ...

    def verbose_remediation(self) -> str:
        """Развёрнутая инструкция для подробного режима; пусто, если её нет."""
        return ""

    def disabled(self) -> bool:
        """Отключён ли зонд переменной окружения HOSTPROBE_DISABLE_<ID>."""
        return is_disabled(self.name)

    def __repr__(self) -> str:
        return f"<Probe {self.name!r} category={self.category!r}>"
