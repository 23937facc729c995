from __future__ import annotations

import logging
import threading

from tasksim.dispatcher import Dispatcher

from .types import LifecycleState

logger = logging.getLogger(__name__)


class LifecycleController:
    """Owns the RUNNING -> DRAINING -> STOPPED shutdown sequence.

    ``graceful_stop`` blocks until every task launched before the call has
    resolved. ``force_stop`` never waits: in-flight work is abandoned and has
    no further effect on the logs or the last result, whatever the worker
    threads do afterwards.
    """

    def __init__(self, dispatcher: Dispatcher):
        self.dispatcher = dispatcher
        self._state = LifecycleState.RUNNING
        self._lock = threading.Lock()

    @property
    def state(self) -> LifecycleState:
        with self._lock:
            return self._state

    def is_running(self) -> bool:
        return self.state == LifecycleState.RUNNING

    def graceful_stop(self) -> None:
        if not self._transition(LifecycleState.RUNNING, LifecycleState.DRAINING):
            return

        print("Finishing gracefully...")
        self.dispatcher.close()
        logger.info("draining %d pending task(s)", self.dispatcher.pending_count())
        self.dispatcher.drain()
        print("All tasks completed.")

        # force_stop may have won the race while we were draining.
        if self._transition(LifecycleState.DRAINING, LifecycleState.STOPPED):
            self.dispatcher.shutdown(wait=True)
            print("Application stopped.")

    def force_stop(self) -> None:
        with self._lock:
            if self._state == LifecycleState.STOPPED:
                return
            previous = self._state
            self._state = LifecycleState.STOPPED

        logger.info("state %s -> %s", previous.name, LifecycleState.STOPPED.name)
        print("Forcing application to stop...")
        # Cancel queued work before waking the workers, or a woken worker
        # could pick up the next queued task.
        self.dispatcher.close()
        self.dispatcher.shutdown(wait=False)
        self.dispatcher.abandon()
        print("Application stopped.")

    def _transition(self, expected: LifecycleState, target: LifecycleState) -> bool:
        with self._lock:
            if self._state != expected:
                return False
            self._state = target

        logger.info("state %s -> %s", expected.name, target.name)
        return True
