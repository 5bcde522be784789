"""Тесты оркестратора: параллельный прогон зондов под дедлайном."""

from __future__ import annotations

import logging
import threading
import time

import pytest

from hostprobe.context import CheckContext
from hostprobe.models import BatchResult, Outcome
from hostprobe.runner import count_detected, filter_detected, run_batch
from hostprobes.base import BaseProbe


class FixedProbe(BaseProbe):
    """Возвращает заданный ответ после задержки."""
    category = "test"

    def __init__(self, name: str, result: bool, delay: float = 0.0):
        self.name = name
        self.title = name.title()
        self.result = result
        self.delay = delay
        self.seen_ctx = None

    def check(self, ctx):
        self.seen_ctx = ctx
        if self.delay:
            time.sleep(self.delay)
        return self.result

    def diagnostic(self):
        return f"{self.name} diagnostic"

    def remediation(self):
        return f"{self.name} fix"


class BlockingProbe(FixedProbe):
    """Игнорирует отмену и висит, пока тест его не отпустит."""

    def __init__(self, name: str = "blocker"):
        super().__init__(name, result=True)
        self.release = threading.Event()

    def check(self, ctx):
        self.release.wait(timeout=5)
        return True


class RaisingProbe(FixedProbe):
    def __init__(self, name: str = "broken"):
        super().__init__(name, result=True)

    def check(self, ctx):
        raise RuntimeError("boom")


class ExitingCheck(FixedProbe):
    """Бросает исключение, не наследующее Exception."""

    def __init__(self, name: str, exc: BaseException):
        super().__init__(name, result=True)
        self.exc = exc

    def check(self, ctx):
        raise self.exc


class PollingProbe(FixedProbe):
    """Честно опрашивает контекст и выходит после отмены."""

    def __init__(self, name: str = "poller"):
        super().__init__(name, result=True)
        self.exited = threading.Event()

    def check(self, ctx):
        try:
            while not ctx.done():
                time.sleep(0.001)
            return False
        finally:
            self.exited.set()


@pytest.fixture
def blockers():
    created: list[BlockingProbe] = []

    def make(name: str = "blocker") -> BlockingProbe:
        probe = BlockingProbe(name)
        created.append(probe)
        return probe

    yield make
    for probe in created:
        probe.release.set()


def _pairs(result: BatchResult) -> list[tuple[str, bool]]:
    return [(o.probe.name, o.detected) for o in result.outcomes]


class TestRunBatchCompleteness:
    def test_empty_batch(self):
        start = time.monotonic()
        result = run_batch([], CheckContext.background())
        assert result.outcomes == []
        assert result.complete is True
        assert time.monotonic() - start < 0.1

    def test_all_outcomes_in_input_order(self):
        probes = [FixedProbe(f"p{i}", i % 2 == 0) for i in range(10)]
        result = run_batch(probes, CheckContext.background())

        assert result.complete is True
        assert len(result.outcomes) == 10
        assert [o.probe for o in result.outcomes] == probes
        assert [o.detected for o in result.outcomes] == [i % 2 == 0 for i in range(10)]

    def test_five_fast_probes_within_deadline(self):
        probes = [FixedProbe(f"p{i}", i in (1, 3), delay=0.001) for i in range(5)]
        result = run_batch(probes, CheckContext.with_timeout(1.0))

        assert result.complete is True
        assert _pairs(result) == [
            ("p0", False), ("p1", True), ("p2", False), ("p3", True), ("p4", False),
        ]

    def test_real_outcomes_carry_duration(self):
        result = run_batch([FixedProbe("slow", False, delay=0.01)], CheckContext.background())
        outcome = result.outcomes[0]
        assert outcome.duration is not None
        assert outcome.duration >= 0.005
        assert outcome.error is None
        assert outcome.synthetic is False

    def test_every_probe_receives_same_context(self):
        ctx = CheckContext.background()
        probes = [FixedProbe(f"p{i}", False) for i in range(3)]
        run_batch(probes, ctx)
        assert all(p.seen_ctx is ctx for p in probes)


class TestRunBatchOrdering:
    def test_staggered_completion_keeps_input_order(self):
        # Первый завершается последним
        probes = [FixedProbe(f"p{i}", True, delay=0.01 * (5 - i)) for i in range(6)]
        result = run_batch(probes, CheckContext.with_timeout(5.0))

        assert result.complete is True
        assert [o.probe.name for o in result.outcomes] == [f"p{i}" for i in range(6)]


class TestRunBatchFaults:
    def test_raising_probe_is_not_detected(self):
        probes = [FixedProbe("a", True), RaisingProbe(), FixedProbe("c", False)]
        result = run_batch(probes, CheckContext.background())

        assert result.complete is True
        assert _pairs(result) == [("a", True), ("broken", False), ("c", False)]
        assert result.outcomes[1].error is None

    def test_fault_is_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="hostprobe.runner"):
            run_batch([RaisingProbe("kaput")], CheckContext.background())
        assert "kaput" in caplog.text

    @pytest.mark.parametrize("exc", [SystemExit(3), KeyboardInterrupt()])
    def test_base_exception_is_contained(self, exc):
        checks = [FixedProbe("a", True), ExitingCheck("exiting", exc), FixedProbe("c", True)]
        start = time.monotonic()
        result = run_batch(checks, CheckContext.background())

        assert time.monotonic() - start < 1.0
        assert result.complete is True
        assert _pairs(result) == [("a", True), ("exiting", False), ("c", True)]
        assert result.outcomes[1].synthetic is False

    def test_many_faults_do_not_block_batch(self):
        probes = [RaisingProbe(f"bad{i}") for i in range(5)] + [FixedProbe("good", True)]
        result = run_batch(probes, CheckContext.with_timeout(5.0))
        assert result.complete is True
        assert count_detected(result.outcomes) == 1


class TestRunBatchDeadline:
    def test_blocking_probe_is_synthesized(self, blockers):
        blocker = blockers("p3")
        probes = [FixedProbe("p1", True, delay=0.001), FixedProbe("p2", False, delay=0.001), blocker]

        deadline = 0.2
        start = time.monotonic()
        result = run_batch(probes, CheckContext.with_timeout(deadline))
        elapsed = time.monotonic() - start

        assert result.complete is False
        assert _pairs(result) == [("p1", True), ("p2", False), ("p3", False)]
        assert elapsed < deadline + 0.5

    def test_synthetic_outcome_references_original_probe(self, blockers):
        blocker = blockers()
        result = run_batch([blocker], CheckContext.with_timeout(0.02))

        outcome = result.outcomes[0]
        assert outcome.probe is blocker
        assert outcome.detected is False
        assert outcome.error is None
        assert outcome.synthetic is True
        assert outcome.probe.name == "blocker"

    def test_already_cancelled_context(self, blockers):
        ctx = CheckContext.background()
        ctx.cancel()
        probes = [blockers("b1"), blockers("b2")]

        result = run_batch(probes, ctx)

        assert result.complete is False
        assert _pairs(result) == [("b1", False), ("b2", False)]

    def test_explicit_cancel_without_deadline(self, blockers):
        ctx = CheckContext.background()
        timer = threading.Timer(0.05, ctx.cancel)
        timer.start()
        try:
            start = time.monotonic()
            result = run_batch([FixedProbe("fast", True), blockers()], ctx)
        finally:
            timer.cancel()

        assert time.monotonic() - start < 1.0
        assert result.complete is False
        assert _pairs(result) == [("fast", True), ("blocker", False)]

    def test_polling_probe_exits_after_deadline(self):
        probe = PollingProbe()
        result = run_batch([probe], CheckContext.with_timeout(0.02))

        assert len(result.outcomes) == 1
        assert result.outcomes[0].detected is False
        assert probe.exited.wait(timeout=1.0)


class TestAggregation:
    def _outcomes(self, flags):
        return [Outcome(probe=FixedProbe(f"p{i}", flag), detected=flag) for i, flag in enumerate(flags)]

    def test_count_detected(self):
        assert count_detected(self._outcomes([True, False, True])) == 2
        assert count_detected([]) == 0

    def test_filter_detected_preserves_order(self):
        outcomes = self._outcomes([False, True, False, True])
        detected = filter_detected(outcomes)
        assert [o.probe.name for o in detected] == ["p1", "p3"]

    @pytest.mark.parametrize("flags", [[], [True], [False], [True, False, True, True], [False] * 4])
    def test_count_of_filtered_is_count(self, flags):
        outcomes = self._outcomes(flags)
        assert count_detected(filter_detected(outcomes)) == count_detected(outcomes)

    def test_batch_result_helpers(self):
        result = BatchResult(outcomes=self._outcomes([True, False]), complete=True)
        assert result.count() == 1
        assert [o.probe.name for o in result.detected()] == ["p0"]
