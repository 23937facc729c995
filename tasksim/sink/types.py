from dataclasses import dataclass


@dataclass(frozen=True)
class TaskResult:
    name: str
    result: str

    def as_line(self) -> str:
        return f"{self.name}: {self.result}"
