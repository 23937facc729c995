from __future__ import annotations

import logging
from collections.abc import Iterable

from tasksim.catalog import CatalogError
from tasksim.dispatcher import Dispatcher, DispatcherError
from tasksim.lifecycle import LifecycleController
from tasksim.sink import ResultSink

from .types import (
    CleanCommand,
    Command,
    CommandError,
    FinishCommand,
    GetCommand,
    HelpCommand,
    MalformedCommand,
    TaskCommand,
    UnknownCommand,
)

logger = logging.getLogger(__name__)

EXIT_COMMAND = "exit"

HELP_TEXT = """\
Commands:
  task NAME X: Execute task X, name it NAME, and write the result to the results file.
  get: Output the last result and its name to the console.
  finish grace: Stop accepting new tasks, finish all pending tasks, and stop the application.
  finish force: Stop the application immediately.
  clean: Clean the results file.
  help: Output this help message.
  exit: Same as 'finish grace', then leave."""


def parse_command(line: str) -> Command:
    """Turn one input line into a command.

    Raises MalformedCommand when a known command lacks usable arguments and
    UnknownCommand for anything else. Extra trailing tokens are ignored.
    """
    tokens = line.split()
    match tokens:
        case ["task"]:
            raise MalformedCommand("Task name missing.")
        case ["task", _]:
            raise MalformedCommand("Task index missing.")
        case ["task", name, raw_index, *_]:
            try:
                index = int(raw_index)
            except ValueError:
                raise MalformedCommand(f"Invalid task index: {raw_index!r}") from None
            return TaskCommand(name, index)
        case ["get", *_]:
            return GetCommand()
        case ["finish", "grace", *_]:
            return FinishCommand(graceful=True)
        case ["finish", *_]:
            return FinishCommand(graceful=False)
        case ["clean", *_]:
            return CleanCommand()
        case ["help", *_]:
            return HelpCommand()
        case _:
            raise UnknownCommand(line)


class CommandInterpreter:
    def __init__(
        self,
        dispatcher: Dispatcher,
        controller: LifecycleController,
        sink: ResultSink,
    ):
        self.dispatcher = dispatcher
        self.controller = controller
        self.sink = sink

    def run(self, lines: Iterable[str]) -> None:
        for raw in lines:
            line = raw.strip()
            if line == EXIT_COMMAND:
                break
            if not line:
                continue
            self.handle(line)

        # exit and end of input both drain outstanding work.
        self.controller.graceful_stop()

    def handle(self, line: str) -> None:
        try:
            command = parse_command(line)
        except CommandError as exc:
            logger.debug("rejected %r: %s", line, exc)
            print(exc)
            return

        self.execute(command)

    def execute(self, command: Command) -> None:
        match command:
            case TaskCommand(name=name, index=index):
                try:
                    self.dispatcher.launch(name, index)
                except (CatalogError, DispatcherError) as exc:
                    print(exc)
            case GetCommand():
                last = self.dispatcher.last_completed()
                if last is None:
                    print("No result available.")
                else:
                    print(f"{last.result} [{last.name}]")
            case FinishCommand(graceful=True):
                self.controller.graceful_stop()
            case FinishCommand():
                self.controller.force_stop()
            case CleanCommand():
                self.sink.clear()
            case HelpCommand():
                print(HELP_TEXT)
            case _:
                raise AssertionError("Unreachable")
