"""Configuration loading and validation."""

import logging
import math
import os
import sys
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..errors.exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_GRACE_SECONDS = 30.0
DEFAULT_CONFIG_PATH = Path("gracekill.yaml")


class EscalationConfig(BaseModel):
    """Escalation settings."""
    grace_seconds: float = DEFAULT_GRACE_SECONDS
    max_workers: int = 1  # >1 delivers signals for many PIDs in parallel

    @field_validator('grace_seconds')
    @classmethod
    def validate_grace(cls, v: float) -> float:
        if not math.isfinite(v) or v < 0:
            raise ValueError(f"grace_seconds must be a finite number >= 0, got {v}")
        return v

    @field_validator('max_workers')
    @classmethod
    def validate_workers(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"max_workers must be >= 1, got {v}")
        return v


class LoggingConfig(BaseModel):
    """Diagnostics settings."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    use_colors: bool = Field(default_factory=lambda: sys.stderr.isatty())

    @field_validator('level', mode='before')
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v


class GracekillConfig(BaseSettings):
    """Main gracekill configuration."""
    model_config = SettingsConfigDict(
        env_prefix="GRACEKILL_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    escalation: EscalationConfig = Field(default_factory=EscalationConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def _load_config_from_file(config_path: Path) -> GracekillConfig:
    """Parse and validate one YAML config file."""
    try:
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(config_path, str(e)) from e

    if not isinstance(data, dict):
        raise ConfigError(config_path, "top level must be a mapping")

    data = _expand_env_vars(data)
    try:
        return GracekillConfig(**data)
    except ValidationError as e:
        raise ConfigError(config_path, str(e)) from e


def load_config(config_path: Path = DEFAULT_CONFIG_PATH) -> GracekillConfig:
    """Load gracekill configuration from YAML file.

    Environment variables (GRACEKILL_ESCALATION__GRACE_SECONDS, ...) fill in
    anything the file leaves out. A missing file means defaults.
    """
    config_path = Path(config_path)
    if not config_path.exists():
        logger.debug(f"Config file not found: {config_path}, using defaults")
        try:
            return GracekillConfig()
        except ValidationError as e:
            raise ConfigError("environment", str(e)) from e

    return _load_config_from_file(config_path)


def _expand_env_vars(data: Any, _path: str = "") -> Any:
    """Recursively expand ${VAR} strings in config data.

    Args:
        data: Config data to process
        _path: Internal tracking for error messages (e.g., "escalation.grace_seconds")
    """
    if isinstance(data, dict):
        return {k: _expand_env_vars(v, f"{_path}.{k}" if _path else k) for k, v in data.items()}
    elif isinstance(data, list):
        return [_expand_env_vars(item, f"{_path}[{i}]") for i, item in enumerate(data)]
    elif isinstance(data, str) and data.startswith("${") and data.endswith("}"):
        env_var = data[2:-1]
        value = os.environ.get(env_var)
        if value is None:
            logger.warning(
                f"Environment variable '{env_var}' not set (referenced at config path: {_path or 'root'}). "
                f"The literal string '{data}' will be used."
            )
            return data
        return value
    return data
