from __future__ import annotations

import argparse

from tasksim.config import ConfigError, parse_log_level


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {value!r}") from None

    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")

    return number


def _log_level(value: str) -> str:
    try:
        return parse_log_level(value)
    except ConfigError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tasksim",
        description="Read task commands from standard input and run them concurrently.",
    )

    parser.add_argument(
        "--config",
        default=None,
        help="Path to a .yml/.yaml, .toml or .json settings file",
    )
    parser.add_argument(
        "--results",
        default=None,
        help="Results log file (default: results.txt)",
    )
    parser.add_argument(
        "--errors",
        default=None,
        help="Error log file (default: errors.txt)",
    )
    parser.add_argument(
        "--workers",
        type=_positive_int,
        default=None,
        help="Size of the worker pool (default: 6)",
    )
    parser.add_argument(
        "--log-level",
        type=_log_level,
        default=None,
        help="Logging level written to stderr (default: WARNING)",
    )

    return parser
