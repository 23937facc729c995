# tests/test_dispatcher.py
from __future__ import annotations

import time
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

import pytest

from tasksim.catalog import InvalidTaskIndex, TaskCatalog, TaskDefinition
from tasksim.dispatcher import Dispatcher, DispatcherClosedError
from tasksim.lifecycle import LifecycleController
from tasksim.sink import ResultSink, TaskResult


@dataclass(frozen=True)
class _Exploding(TaskDefinition):
    def compute(self) -> str:
        raise RuntimeError("boom")


def _sink(tmp_path: Path) -> ResultSink:
    return ResultSink(tmp_path / "results.txt", tmp_path / "errors.txt")


@pytest.fixture
def sink(tmp_path: Path) -> ResultSink:
    return _sink(tmp_path)


@pytest.fixture
def dispatcher(sink: ResultSink) -> Iterator[Dispatcher]:
    """Fast catalog: task 0 = 10ms, 1 = 50ms, 2 = 300ms, 3 = 2000ms."""
    d = Dispatcher(TaskCatalog.from_delays([10, 50, 300, 2000]), sink)
    yield d
    d.abandon()
    d.shutdown(wait=False)


def test_launch_records_result_and_last_completed(
    dispatcher: Dispatcher, sink: ResultSink
) -> None:
    future = dispatcher.launch("alpha", 0)

    assert future.result(timeout=2) == TaskResult("alpha", "Result of task 0")
    dispatcher.drain()
    assert sink.results() == ["alpha: Result of task 0"]
    assert sink.errors() == []
    assert dispatcher.last_completed() == TaskResult("alpha", "Result of task 0")


def test_launch_does_not_block(dispatcher: Dispatcher) -> None:
    start = time.monotonic()
    dispatcher.launch("slow", 3)
    elapsed = time.monotonic() - start

    assert elapsed < 0.5
    assert dispatcher.pending_count() == 1
    assert dispatcher.last_completed() is None


def test_invalid_index_creates_no_pending_task(
    dispatcher: Dispatcher, sink: ResultSink
) -> None:
    with pytest.raises(InvalidTaskIndex):
        dispatcher.launch("bob", 9)

    assert dispatcher.pending_count() == 0
    dispatcher.drain()
    assert sink.results() == []
    assert sink.errors() == []
    assert dispatcher.last_completed() is None


def test_results_are_in_completion_order(
    dispatcher: Dispatcher, sink: ResultSink
) -> None:
    dispatcher.launch("slow", 2)
    dispatcher.launch("fast", 0)

    dispatcher.drain()

    assert sink.results() == ["fast: Result of task 0", "slow: Result of task 2"]
    # Last completed, not last launched.
    assert dispatcher.last_completed() == TaskResult("slow", "Result of task 2")


def test_names_need_not_be_unique(dispatcher: Dispatcher, sink: ResultSink) -> None:
    dispatcher.launch("same", 0)
    dispatcher.launch("same", 1)

    dispatcher.drain()

    assert sink.results() == ["same: Result of task 0", "same: Result of task 1"]


def test_drain_waits_for_all_and_empties_pending(
    dispatcher: Dispatcher, sink: ResultSink
) -> None:
    for name, index in [("a", 0), ("b", 1), ("c", 2), ("d", 1)]:
        dispatcher.launch(name, index)

    dispatcher.close()
    dispatcher.drain()

    assert dispatcher.pending_count() == 0
    assert len(sink.results()) == 4


def test_failure_goes_to_error_log_only(tmp_path: Path) -> None:
    sink = _sink(tmp_path)
    catalog = TaskCatalog(
        (
            TaskDefinition(0, 10, "Result of task 0"),
            _Exploding(1, 10, "Result of task 1"),
        )
    )
    dispatcher = Dispatcher(catalog, sink)

    ok = dispatcher.launch("ok", 0)
    assert ok.result(timeout=2) is not None
    failed = dispatcher.launch("bad", 1)

    assert failed.result(timeout=2) is None
    dispatcher.drain()
    dispatcher.shutdown()

    assert sink.results() == ["ok: Result of task 0"]
    assert sink.errors() == ["Task 'bad' (1) failed: boom"]
    assert dispatcher.last_completed() == TaskResult("ok", "Result of task 0")


def test_launch_after_close_is_rejected(
    dispatcher: Dispatcher, sink: ResultSink
) -> None:
    dispatcher.close()

    with pytest.raises(DispatcherClosedError):
        dispatcher.launch("late", 0)

    assert dispatcher.pending_count() == 0
    assert sink.results() == []


def test_abandon_suppresses_all_further_effects(
    dispatcher: Dispatcher, sink: ResultSink
) -> None:
    futures = [dispatcher.launch("a", 2), dispatcher.launch("b", 3)]

    dispatcher.abandon()
    dispatcher.shutdown(wait=False)

    for future in futures:
        assert future.result(timeout=2) is None
    time.sleep(0.4)

    assert dispatcher.pending_count() == 0
    assert sink.results() == []
    assert dispatcher.last_completed() is None
    with pytest.raises(DispatcherClosedError):
        dispatcher.launch("c", 0)


def test_failure_does_not_disturb_other_pending_tasks(tmp_path: Path) -> None:
    sink = _sink(tmp_path)
    catalog = TaskCatalog(
        (
            TaskDefinition(0, 200, "Result of task 0"),
            _Exploding(1, 10, "Result of task 1"),
        )
    )
    dispatcher = Dispatcher(catalog, sink)

    ok = dispatcher.launch("ok", 0)
    bad = dispatcher.launch("bad", 1)
    assert bad.result(timeout=2) is None
    assert not ok.done()

    dispatcher.close()
    dispatcher.drain()
    dispatcher.shutdown()

    assert ok.result() == TaskResult("ok", "Result of task 0")
    assert sink.results() == ["ok: Result of task 0"]
    assert sink.errors() == ["Task 'bad' (1) failed: boom"]
    assert dispatcher.last_completed() == TaskResult("ok", "Result of task 0")


def test_force_stop_cancels_queued_work(tmp_path: Path) -> None:
    sink = _sink(tmp_path)
    dispatcher = Dispatcher(TaskCatalog.from_delays([300]), sink, max_workers=1)
    controller = LifecycleController(dispatcher)

    running = dispatcher.launch("first", 0)
    queued = dispatcher.launch("second", 0)

    start = time.monotonic()
    controller.force_stop()
    elapsed = time.monotonic() - start

    assert elapsed < 0.5
    assert queued.cancelled()
    assert running.result(timeout=2) is None
    assert dispatcher.pending_count() == 0

    time.sleep(0.5)
    assert sink.results() == []
    assert sink.errors() == []
    assert dispatcher.last_completed() is None


class _ReadOnlyResults(ResultSink):
    def record_result(self, result: TaskResult) -> None:
        raise PermissionError(f"read-only: {self.results_path}")


def test_unwritable_results_log_is_reported_as_failure(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    sink = _ReadOnlyResults(tmp_path / "results.txt", tmp_path / "errors.txt")
    dispatcher = Dispatcher(TaskCatalog.from_delays([10]), sink)

    future = dispatcher.launch("alpha", 0)

    assert future.result(timeout=2) is None
    dispatcher.drain()
    dispatcher.shutdown()
    assert dispatcher.last_completed() is None
    assert sink.results() == []
    [line] = sink.errors()
    assert line.startswith("Task 'alpha' (0) failed: read-only")
    assert "Task 'alpha' (0) failed" in caplog.text
