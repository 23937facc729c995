from .dispatcher import DEFAULT_MAX_WORKERS, Dispatcher, PendingTask
from .types import DispatcherClosedError, DispatcherError, TaskExecutionFailure

__all__ = [
    "DEFAULT_MAX_WORKERS",
    "Dispatcher",
    "PendingTask",
    "DispatcherError",
    "DispatcherClosedError",
    "TaskExecutionFailure",
]
