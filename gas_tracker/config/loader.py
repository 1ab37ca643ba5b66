"""
Configuration management and loading.

Reads harness settings from YAML and validates them strictly.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict

import yaml

from gas_tracker.host.runtime import DEFAULT_MAX_PAGES


class TimestampMode(Enum):
    """Where the recorded timestamp is taken from."""
    OBSERVED = "observed"            # per-workload capture point
    BRACKET_START = "bracket_start"  # alongside the opening meter sample


@dataclass(frozen=True)
class HostConfig:
    """Stable memory limits for the process host."""
    max_pages: int = DEFAULT_MAX_PAGES
    initial_pages: int = 0

    def __post_init__(self):
        """Validate page limits."""
        if self.max_pages <= 0:
            raise ValueError("max_pages must be > 0")
        if self.initial_pages < 0:
            raise ValueError("initial_pages cannot be negative")
        if self.initial_pages > self.max_pages:
            raise ValueError("initial_pages cannot exceed max_pages")


@dataclass(frozen=True)
class TrackerConfig:
    """Measurement behaviour of the tracker service."""
    timestamp_mode: TimestampMode = TimestampMode.OBSERVED
    strict_storage: bool = False


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "WARNING"

    def __post_init__(self):
        if not isinstance(logging.getLevelName(self.level), int):
            raise ValueError(f"Unknown logging level: {self.level}")


@dataclass(frozen=True)
class AppConfig:
    """Complete harness configuration."""
    host: HostConfig = field(default_factory=HostConfig)
    tracker: TrackerConfig = field(default_factory=TrackerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def default_config() -> AppConfig:
    return AppConfig()


def load_config(path: str) -> AppConfig:
    """Load and validate harness configuration from a YAML file.

    Every section is optional, but unknown keys are rejected so a typo
    never silently falls back to a default.

    Args:
        path: Path to YAML configuration file

    Returns:
        Validated AppConfig object

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML is invalid
        ValueError: If configuration is invalid
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        try:
            raw_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Invalid YAML in config file {path}: {e}")

    if raw_config is None:
        return default_config()

    if not isinstance(raw_config, dict):
        raise ValueError("Configuration root must be a dictionary")

    allowed_top_keys = {'host', 'tracker', 'logging'}
    unknown_keys = set(raw_config.keys()) - allowed_top_keys
    if unknown_keys:
        raise ValueError(f"Unknown configuration keys: {unknown_keys}")

    host = _parse_host_config(_section(raw_config, 'host', {'max_pages', 'initial_pages'}))
    tracker = _parse_tracker_config(_section(raw_config, 'tracker', {'timestamp_mode', 'strict_storage'}))
    logging_config = _parse_logging_config(_section(raw_config, 'logging', {'level'}))

    return AppConfig(host=host, tracker=tracker, logging=logging_config)


def _section(raw_config: Dict, name: str, allowed_keys: set) -> Dict:
    """Extract an optional section and reject unknown keys in it."""
    data = raw_config.get(name)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"'{name}' must be a dictionary")

    unknown_keys = set(data.keys()) - allowed_keys
    if unknown_keys:
        raise ValueError(f"Unknown keys in {name}: {unknown_keys}")
    return data


def _parse_host_config(data: Dict) -> HostConfig:
    values = {}
    for key in ('max_pages', 'initial_pages'):
        if key in data:
            value = data[key]
            # bool is an int subclass; reject it explicitly
            if not isinstance(value, int) or isinstance(value, bool):
                raise ValueError(f"'{key}' in host must be an integer")
            values[key] = value
    return HostConfig(**values)


def _parse_tracker_config(data: Dict) -> TrackerConfig:
    values = {}

    if 'timestamp_mode' in data:
        mode_str = data['timestamp_mode']
        if not isinstance(mode_str, str):
            raise ValueError("'timestamp_mode' in tracker must be a string")
        try:
            values['timestamp_mode'] = TimestampMode(mode_str.lower())
        except ValueError:
            valid_modes = [mode.value for mode in TimestampMode]
            raise ValueError(f"'timestamp_mode' in tracker must be one of: {valid_modes}")

    if 'strict_storage' in data:
        strict = data['strict_storage']
        if not isinstance(strict, bool):
            raise ValueError("'strict_storage' in tracker must be a boolean")
        values['strict_storage'] = strict

    return TrackerConfig(**values)


def _parse_logging_config(data: Dict) -> LoggingConfig:
    if 'level' not in data:
        return LoggingConfig()

    level = data['level']
    if not isinstance(level, str):
        raise ValueError("'level' in logging must be a string")
    return LoggingConfig(level=level.upper())
