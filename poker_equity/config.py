"""
config.py

Load simulation settings from config.yaml, with environment overrides
(a .env file is honoured via python-dotenv)
"""
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from .errors import ConfigError

DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(__file__), '..', 'config.yaml')

ENV_OVERRIDES = {
    'POKER_EQUITY_ITERATIONS': ('simulation', 'iterations', int),
    'POKER_EQUITY_WORKERS': ('simulation', 'workers', int),
    'POKER_EQUITY_SEED': ('simulation', 'seed', int),
    'POKER_EQUITY_LOG_LEVEL': ('logging', 'level', str),
}


@dataclass
class SimulationConfig:
    iterations: int = 100_000
    workers: int = 1
    seed: Optional[int] = None
    use_numba: bool = False
    time_limit: Optional[float] = None


@dataclass
class LoggingConfig:
    level: str = "INFO"
    log_dir: str = "logs"
    log_to_file: bool = True


@dataclass
class AppConfig:
    simulation: SimulationConfig = field(default_factory=SimulationConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    situation: Dict[str, Any] = field(default_factory=dict)


def _section(raw: Dict[str, Any], name: str, cls):
    values = raw.get(name) or {}
    if not isinstance(values, dict):
        raise ConfigError(f"Config section '{name}' must be a mapping")
    known = {key: value for key, value in values.items() if key in cls.__dataclass_fields__}
    return cls(**known)


def _apply_env_overrides(raw: Dict[str, Any]):
    for env_name, (section, key, cast) in ENV_OVERRIDES.items():
        value = os.getenv(env_name)
        if value is None or value == '':
            continue
        try:
            raw.setdefault(section, {})[key] = cast(value)
        except ValueError:
            raise ConfigError(f"{env_name}={value!r} is not a valid {cast.__name__}") from None


def load_config(path: Optional[str] = None, use_env: bool = True) -> AppConfig:
    """Read the YAML config; a missing file means all defaults"""
    path = path or DEFAULT_CONFIG_PATH
    raw: Dict[str, Any] = {}
    if os.path.exists(path):
        try:
            with open(path, 'r', encoding='utf-8') as f:
                raw = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Could not parse {path}: {exc}") from exc
    if not isinstance(raw, dict):
        raise ConfigError(f"{path} must contain a mapping at the top level")

    if use_env:
        load_dotenv()
        _apply_env_overrides(raw)

    return AppConfig(
        simulation=_section(raw, 'simulation', SimulationConfig),
        logging=_section(raw, 'logging', LoggingConfig),
        situation=raw.get('situation') or {},
    )
