from __future__ import annotations

import threading
from pathlib import Path

from .types import TaskResult


class ResultSink:
    """Append-only results log plus a separate append-only error log.

    Every write opens the file in append mode under that file's lock, so
    concurrent completions never interleave partial lines. The two files are
    independent: clearing the results log leaves the error log alone.
    """

    def __init__(self, results_path: str | Path, errors_path: str | Path):
        self.results_path = Path(results_path)
        self.errors_path = Path(errors_path)
        self._results_lock = threading.Lock()
        self._errors_lock = threading.Lock()

        for path in (self.results_path, self.errors_path):
            path.parent.mkdir(parents=True, exist_ok=True)
            path.touch(exist_ok=True)

    def record_result(self, result: TaskResult) -> None:
        self._append(self.results_path, self._results_lock, result.as_line())

    def record_error(self, message: str) -> None:
        self._append(self.errors_path, self._errors_lock, message)

    def clear(self) -> None:
        with self._results_lock:
            self.results_path.write_text("", encoding="utf-8")

    def results(self) -> list[str]:
        with self._results_lock:
            return self.results_path.read_text(encoding="utf-8").splitlines()

    def errors(self) -> list[str]:
        with self._errors_lock:
            return self.errors_path.read_text(encoding="utf-8").splitlines()

    @staticmethod
    def _append(path: Path, lock: threading.Lock, line: str) -> None:
        with lock:
            with path.open("a", encoding="utf-8") as fh:
                fh.write(f"{line}\n")
