from __future__ import annotations

import argparse
import logging
import sys

from tasksim.catalog import TaskCatalog
from tasksim.config import ConfigError, SimulatorConfig, load_config
from tasksim.dispatcher import Dispatcher
from tasksim.lifecycle import LifecycleController
from tasksim.sink import ResultSink

from .args import build_parser
from .interpreter import CommandInterpreter

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def run_cli(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = resolve_config(args)
        logging.basicConfig(level=config.log_level, format=LOG_FORMAT, stream=sys.stderr)
        sink = ResultSink(config.results_file, config.errors_file)

    except ConfigError as exc:
        print(str(exc), file=sys.stderr)
        return 2

    except OSError as exc:
        print(f"Cannot open log files: {exc}", file=sys.stderr)
        return 2

    dispatcher = Dispatcher(TaskCatalog.default(), sink, max_workers=config.max_workers)
    controller = LifecycleController(dispatcher)
    interpreter = CommandInterpreter(dispatcher, controller, sink)

    print("Application started. Type 'help' for commands.")
    try:
        interpreter.run(sys.stdin)

    except KeyboardInterrupt:
        controller.force_stop()
        return 130

    return 0


def resolve_config(args: argparse.Namespace) -> SimulatorConfig:
    config = load_config(args.config) if args.config else SimulatorConfig()

    if args.results is not None:
        config.results_file = args.results
    if args.errors is not None:
        config.errors_file = args.errors
    if args.workers is not None:
        config.max_workers = args.workers
    if args.log_level is not None:
        config.log_level = args.log_level

    return config


def main() -> None:
    sys.exit(run_cli())
