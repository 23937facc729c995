from .loader import build_config, load_config, parse_log_level
from .types import ConfigError, SimulatorConfig, UnsupportedConfigFormatError

__all__ = [
    "load_config",
    "build_config",
    "parse_log_level",
    "SimulatorConfig",
    "ConfigError",
    "UnsupportedConfigFormatError",
]
