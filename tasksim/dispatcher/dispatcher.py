from __future__ import annotations

import logging
import threading
from concurrent import futures

from tasksim.catalog import TaskCatalog, TaskDefinition
from tasksim.sink import ResultSink, TaskResult

from .types import DispatcherClosedError, TaskExecutionFailure

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 6

PendingTask = futures.Future  # resolves to TaskResult | None


class Dispatcher:
    def __init__(
        self,
        catalog: TaskCatalog,
        sink: ResultSink,
        *,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ):
        self.catalog = catalog
        self.sink = sink
        self._pool = futures.ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="tasksim-worker"
        )
        self._lock = threading.Lock()
        self._pending: set[PendingTask] = set()
        self._last_result: TaskResult | None = None
        self._closed = False
        self._abandoned = threading.Event()

    def launch(self, name: str, index: int) -> PendingTask:
        definition = self.catalog.lookup(index)

        with self._lock:
            if self._closed:
                raise DispatcherClosedError(name)
            future = self._pool.submit(self._execute, name, definition)
            self._pending.add(future)

        future.add_done_callback(self._forget)
        logger.debug(
            "launched %r as task %d (%d ms)", name, index, definition.delay_ms
        )
        return future

    def last_completed(self) -> TaskResult | None:
        with self._lock:
            return self._last_result

    def pending_count(self) -> int:
        with self._lock:
            return len(self._pending)

    def close(self) -> None:
        with self._lock:
            self._closed = True

    def drain(self) -> None:
        with self._lock:
            snapshot = set(self._pending)

        done, _ = futures.wait(snapshot)

        # Done callbacks may still be in flight when wait() returns.
        with self._lock:
            self._pending.difference_update(done)

    def abandon(self) -> None:
        with self._lock:
            self._closed = True
            self._abandoned.set()
            abandoned = len(self._pending)
            self._pending.clear()

        if abandoned:
            logger.info("abandoned %d pending task(s)", abandoned)

    def shutdown(self, *, wait: bool = True) -> None:
        self._pool.shutdown(wait=wait, cancel_futures=not wait)

    def _forget(self, future: PendingTask) -> None:
        with self._lock:
            self._pending.discard(future)

    def _execute(self, name: str, definition: TaskDefinition) -> TaskResult | None:
        try:
            # The delay doubles as a wait on the abandon flag.
            if self._abandoned.wait(definition.delay_s):
                return None
            label = definition.compute()
        except Exception as exc:
            self._fail(TaskExecutionFailure(name, definition.index, exc))
            return None

        result = TaskResult(name, label)
        with self._lock:
            if self._abandoned.is_set():
                return None
            try:
                self.sink.record_result(result)
            except OSError as exc:
                failure = TaskExecutionFailure(name, definition.index, exc)
            else:
                self._last_result = result
                failure = None

        if failure is not None:
            self._fail(failure)
            return None

        logger.debug("completed %r: %s", name, label)
        return result

    def _fail(self, failure: TaskExecutionFailure) -> None:
        logger.warning("%s", failure)
        with self._lock:
            if self._abandoned.is_set():
                return
            try:
                self.sink.record_error(str(failure))
            except OSError:
                logger.exception("could not write to error log: %s", failure)
