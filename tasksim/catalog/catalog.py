from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from .types import InvalidTaskIndex, TaskDefinition

DEFAULT_DELAYS_MS: tuple[int, ...] = (300, 500, 1000, 1500, 2000, 2500)


@dataclass(frozen=True)
class TaskCatalog:
    definitions: tuple[TaskDefinition, ...]

    @classmethod
    def from_delays(cls, delays_ms: Iterable[int]) -> TaskCatalog:
        definitions = tuple(
            TaskDefinition(index, delay, f"Result of task {index}")
            for index, delay in enumerate(delays_ms)
        )
        return cls(definitions)

    @classmethod
    def default(cls) -> TaskCatalog:
        return cls.from_delays(DEFAULT_DELAYS_MS)

    def __iter__(self) -> Iterator[TaskDefinition]:
        return iter(self.definitions)

    def __len__(self) -> int:
        return len(self.definitions)

    def lookup(self, index: int) -> TaskDefinition:
        # Negative indexes would silently wrap around on a tuple.
        if not 0 <= index < len(self.definitions):
            raise InvalidTaskIndex(index, len(self.definitions))

        return self.definitions[index]
