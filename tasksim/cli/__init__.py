from .commands import main, run_cli
from .interpreter import CommandInterpreter, parse_command

__all__ = ["main", "run_cli", "CommandInterpreter", "parse_command"]
