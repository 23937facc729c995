import json
import tomllib
from pathlib import Path
from typing import Any, Mapping

import yaml

from .types import (
    LOG_LEVELS,
    ConfigError,
    SimulatorConfig,
    UnsupportedConfigFormatError,
)


def load_config(path: str | Path) -> SimulatorConfig:
    pure_path = Path(path).expanduser().resolve()

    if not pure_path.exists():
        raise ConfigError(f"Config file not found: {pure_path}")

    if not pure_path.is_file():
        raise ConfigError(f"Config path is not a file: {pure_path}")

    fmt = _detect_format(pure_path)
    raw_file = _parse_file(pure_path, fmt)
    return build_config(raw_file)


def _detect_format(path: Path) -> str:
    fmt = path.suffix
    match fmt:
        case ".yaml" | ".yml":
            return "yaml"
        case ".toml":
            return "toml"
        case ".json":
            return "json"
        case _:
            raise UnsupportedConfigFormatError(
                f"Non supported file extension: {fmt}\n Expected format: .yml/.yaml, .toml, .json"
            )


def _parse_file(path: Path, fmt: str) -> Mapping[str, Any]:
    text = path.read_text(encoding="utf-8")
    match fmt:
        case "yaml":
            try:
                raw_file = yaml.safe_load(text)
            except yaml.YAMLError as exc:
                raise ConfigError(f"{path}: invalid YAML") from exc
        case "toml":
            try:
                raw_file = tomllib.loads(text)
            except tomllib.TOMLDecodeError as exc:
                raise ConfigError(f"{path}: invalid TOML") from exc
        case "json":
            try:
                raw_file = json.loads(text)
            except json.JSONDecodeError as exc:
                raise ConfigError(f"{path}: invalid JSON") from exc
        case _:
            raise AssertionError("Unreachable")

    # An empty YAML document is a valid "use the defaults" file.
    if raw_file is None and fmt == "yaml":
        return {}

    if not isinstance(raw_file, Mapping):
        raise ConfigError(
            f"{path}: parsed succesfully but top-level value is not an object: {type(raw_file)}"
        )

    return raw_file


def build_config(raw: Mapping[str, Any]) -> SimulatorConfig:
    keys = {"results_file", "errors_file", "max_workers", "log_level"}
    config = SimulatorConfig()

    for field in raw.keys():
        if field not in keys:
            raise ConfigError(f"Can't process: {field}")

    for field in ("results_file", "errors_file"):
        if field in raw:
            setattr(config, field, _require_path(field, raw[field]))

    if "max_workers" in raw:
        workers = raw["max_workers"]
        # bool is an int subclass
        if isinstance(workers, bool) or not isinstance(workers, int):
            raise ConfigError(f"max_workers should be an integer, got {type(workers)}")

        if workers < 1:
            raise ConfigError(f"max_workers must be at least 1, got {workers}")

        config.max_workers = workers

    if "log_level" in raw:
        config.log_level = parse_log_level(raw["log_level"])

    return config


def parse_log_level(value: Any) -> str:
    if not isinstance(value, str):
        raise ConfigError(f"log_level should be a string, got {type(value)}")

    level = value.strip().upper()
    if level not in LOG_LEVELS:
        raise ConfigError(
            f"Unknown log_level: {value!r}, expected one of {', '.join(LOG_LEVELS)}"
        )

    return level


def _require_path(field: str, value: Any) -> str:
    if not isinstance(value, str):
        raise ConfigError(f"{field} should be a string")

    if len(value.strip()) < 1:
        raise ConfigError(f"{field}: Please provide a path or remove this field")

    return value.strip()
