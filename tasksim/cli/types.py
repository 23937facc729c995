from dataclasses import dataclass


@dataclass(frozen=True)
class TaskCommand:
    name: str
    index: int


@dataclass(frozen=True)
class GetCommand:
    pass


@dataclass(frozen=True)
class FinishCommand:
    graceful: bool


@dataclass(frozen=True)
class CleanCommand:
    pass


@dataclass(frozen=True)
class HelpCommand:
    pass


Command = TaskCommand | GetCommand | FinishCommand | CleanCommand | HelpCommand


class CommandError(Exception):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)


class MalformedCommand(CommandError):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)


class UnknownCommand(CommandError):
    def __init__(self, line: str):
        super().__init__("Invalid command.")
        self.line = line
