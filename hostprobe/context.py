"""Контекст проверки: сигнал отмены с необязательным дедлайном."""

from __future__ import annotations

import threading
import time
from typing import Optional


class CheckContext:
    """Сигнал отмены, общий для всех зондов одного прогона.

    Срабатывает либо явно через cancel(), либо по истечении дедлайна.
    Зонды только читают его; отменяет контекст владелец (вызывающий код).
    Безопасен для одновременного чтения из многих потоков.
    """

    def __init__(self, deadline: Optional[float] = None) -> None:
        #: Момент срабатывания по time.monotonic(); None — дедлайна нет
        self.deadline = deadline
        self._fired = threading.Event()

    @classmethod
    def background(cls) -> CheckContext:
        """Контекст без дедлайна: срабатывает только при явной отмене."""
        return cls()

    @classmethod
    def with_timeout(cls, seconds: float) -> CheckContext:
        """Контекст, срабатывающий через `seconds` секунд."""
        return cls(deadline=time.monotonic() + seconds)

    def cancel(self) -> None:
        self._fired.set()

    def done(self) -> bool:
        """Сработал ли сигнал (отмена или истёкший дедлайн)."""
        if self._fired.is_set():
            return True
        if self.deadline is not None and time.monotonic() >= self.deadline:
            self._fired.set()
            return True
        return False

    def remaining(self) -> Optional[float]:
        """Секунды до дедлайна (не меньше нуля) или None, если дедлайна нет."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Ждать срабатывания не дольше `timeout` секунд. Возвращает done()."""
        remaining = self.remaining()
        if remaining is not None:
            timeout = remaining if timeout is None else min(timeout, remaining)
        self._fired.wait(timeout)
        return self.done()

    def __enter__(self) -> CheckContext:
        return self

    def __exit__(self, *exc_info) -> None:
        self.cancel()

    def __repr__(self) -> str:
        return f"<CheckContext done={self.done()} remaining={self.remaining()!r}>"
