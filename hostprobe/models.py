"""Модели данных hostprobe: Outcome, BatchResult, Light."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from hostprobes.base import BaseProbe


class Outcome(BaseModel):
    """Результат одного зонда в прогоне."""

    probe: BaseProbe = Field(..., description="Экземпляр зонда, выполнившего проверку")
    detected: bool = Field(False, description="Обнаружена ли проблема")
    error: Optional[str] = Field(None, description="Зарезервировано; сбои зондов сюда не попадают")
    duration: Optional[float] = Field(
        None, ge=0.0, description="Время check() в секундах; None — зонд не успел"
    )

    model_config = {"arbitrary_types_allowed": True}

    @property
    def synthetic(self) -> bool:
        """Заглушка для зонда, не уложившегося в дедлайн."""
        return self.duration is None


class BatchResult(BaseModel):
    """Итог прогона: по одному Outcome на входной зонд, в порядке входа."""

    outcomes: list[Outcome] = Field(default_factory=list)
    complete: bool = Field(True, description="Все ли зонды вернулись до дедлайна")

    def detected(self) -> list[Outcome]:
        """Вернуть только сработавшие зонды."""
        return [o for o in self.outcomes if o.detected]

    def count(self) -> int:
        """Число сработавших зондов."""
        return sum(1 for o in self.outcomes if o.detected)

    def by_name(self, name: str) -> Optional[Outcome]:
        """Вернуть результат зонда по идентификатору."""
        for outcome in self.outcomes:
            if outcome.probe.name == name:
                return outcome
        return None


class Light(BaseModel):
    """Пользовательский индикатор из переменной HOSTPROBE_LIGHT_*."""

    name: str = Field(..., description="Имя индикатора")
    glyph: str = Field(..., description="Символ для вывода")
    diagnostic: str = Field(..., description="Пояснение из значения переменной")
    styles: list[str] = Field(default_factory=list, description="Имена стилей из STYLE_MAP")
    unset: str = Field(..., description="Команда shell для снятия индикатора")
