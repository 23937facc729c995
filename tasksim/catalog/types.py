from dataclasses import dataclass


@dataclass(frozen=True)
class TaskDefinition:
    index: int
    delay_ms: int
    label: str

    @property
    def delay_s(self) -> float:
        return self.delay_ms / 1000

    def compute(self) -> str:
        return self.label


class CatalogError(Exception):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)


class InvalidTaskIndex(CatalogError):
    def __init__(self, index: int, size: int):
        super().__init__(f"Invalid task index: {index} (expected 0..{size - 1})")
        self.index = index
        self.size = size
