from .sink import ResultSink
from .types import TaskResult

__all__ = ["ResultSink", "TaskResult"]
