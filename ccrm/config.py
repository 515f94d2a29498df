"""
Configuration for the CCRM platform.

A single AppConfig value is built at process start and handed to the
components that need it; nothing reads configuration from global state.
"""

import json
import os
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Mapping, Optional

from .core.exceptions import ConfigurationError

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}

_ENV_KEYS = {
    "CCRM_DATA_PATH": "data_path",
    "CCRM_MAX_CREDITS": "max_credits_per_semester",
    "CCRM_SEED": "seed_sample_data",
    "CCRM_HOST": "host",
    "CCRM_PORT": "port",
    "CCRM_LOG_LEVEL": "log_level",
}


def _to_bool(value: Any, key: str) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in {"1", "true", "yes", "on"}:
        return True
    if text in {"0", "false", "no", "off"}:
        return False
    raise ConfigurationError(f"{key} must be a boolean, got {value!r}", details={"key": key})


def _to_int(value: Any, key: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{key} must be an integer, got {value!r}", details={"key": key})
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{key} must be an integer, got {value!r}", details={"key": key})


@dataclass(frozen=True)
class AppConfig:
    """Process-wide settings."""
    data_path: str = "./data/"
    max_credits_per_semester: Optional[int] = None
    seed_sample_data: bool = True
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"

    def __post_init__(self):
        if not 1 <= self.port <= 65535:
            raise ConfigurationError(f"port out of range: {self.port}", details={"key": "port"})
        if self.max_credits_per_semester is not None and self.max_credits_per_semester <= 0:
            raise ConfigurationError(
                "max_credits_per_semester must be positive",
                details={"key": "max_credits_per_semester"},
            )
        if self.log_level.upper() not in _LOG_LEVELS:
            raise ConfigurationError(f"unknown log level: {self.log_level}", details={"key": "log_level"})

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AppConfig":
        """Build a config from a mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        values: Dict[str, Any] = {}
        for key, value in data.items():
            if key not in known:
                continue
            if key == "port":
                value = _to_int(value, key)
            elif key == "max_credits_per_semester":
                value = None if value in (None, "") else _to_int(value, key)
            elif key == "seed_sample_data":
                value = _to_bool(value, key)
            else:
                value = str(value)
            values[key] = value
        return cls(**values)

    @classmethod
    def from_file(cls, path: str) -> "AppConfig":
        """Load a JSON configuration file."""
        try:
            with open(path, 'r') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Cannot read configuration {path}: {e}", details={"path": path})
        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration {path} must hold a JSON object", details={"path": path})
        return cls.from_dict(data)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AppConfig":
        environ = os.environ if environ is None else environ
        return cls.from_dict({
            name: environ[var] for var, name in _ENV_KEYS.items() if var in environ
        })

    def merged(self, **overrides: Any) -> "AppConfig":
        """Return a copy with the non-None overrides applied."""
        data = asdict(self)
        data.update({k: v for k, v in overrides.items() if v is not None})
        return AppConfig.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
