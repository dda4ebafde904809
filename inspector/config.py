"""Configuration system for Config Inspector."""

import logging
from pathlib import Path
from typing import Optional, Dict, List
import yaml
from pydantic import BaseModel, Field, field_validator, ConfigDict

from .exceptions import ConfigError

logger = logging.getLogger(__name__)


class RemoteConfig(BaseModel):
    """Configuration server connection settings."""
    base_url: str = "http://localhost:8889"
    timeout: float = 30.0
    verify_ssl: bool = True
    headers: Dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(from_attributes=True)

    @field_validator('timeout')
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("timeout must be positive")
        return v


class RunnerConfig(BaseModel):
    """Concurrent validation settings."""
    max_workers: Optional[int] = None
    item_timeout: Optional[float] = None

    model_config = ConfigDict(from_attributes=True)

    @field_validator('max_workers')
    @classmethod
    def validate_max_workers(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v < 1:
            raise ValueError("max_workers must be at least 1")
        return v

    @field_validator('item_timeout')
    @classmethod
    def validate_item_timeout(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v <= 0:
            raise ValueError("item_timeout must be positive")
        return v


class OutputConfig(BaseModel):
    """Report output settings."""
    format: str = "human"

    model_config = ConfigDict(from_attributes=True)

    @field_validator('format')
    @classmethod
    def validate_format(cls, v: str) -> str:
        allowed = {'human', 'json'}
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(f"format must be one of {allowed}")
        return v_lower


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: str = "WARNING"
    file_path: Optional[str] = None
    console_enabled: bool = True

    model_config = ConfigDict(from_attributes=True)

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        allowed = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}
        v_upper = v.upper()
        if v_upper not in allowed:
            raise ValueError(f"Log level must be one of {allowed}")
        return v_upper


class InspectorConfig(BaseModel):
    """Main inspector configuration."""
    repo_path: str = "."
    remote: RemoteConfig = Field(default_factory=RemoteConfig)
    runner: RunnerConfig = Field(default_factory=RunnerConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    checklists: List[str] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class ConfigLoader:
    """Load and validate configuration from YAML files."""

    @staticmethod
    def load_config(
        config_path: str,
        local_override_path: Optional[str] = None
    ) -> InspectorConfig:
        """Load configuration with optional local overrides.

        Args:
            config_path: Path to main config file
            local_override_path: Optional path to local override file

        Returns:
            Validated InspectorConfig

        Raises:
            ConfigError: If config loading or validation fails
        """
        try:
            config_dict = ConfigLoader._load_yaml(config_path)

            if local_override_path and Path(local_override_path).exists():
                logger.info(f"Loading local config overrides from {local_override_path}")
                override_dict = ConfigLoader._load_yaml(local_override_path)
                config_dict = ConfigLoader.merge_configs(config_dict, override_dict)

            config = InspectorConfig(**config_dict)

            logger.info("Configuration loaded successfully")
            return config

        except ConfigError:
            raise
        except Exception as e:
            logger.error(f"Failed to load configuration: {e}")
            raise ConfigError(f"Failed to load configuration: {e}")

    @staticmethod
    def _load_yaml(path: str) -> dict:
        """Load YAML file."""
        try:
            with open(path, 'r') as f:
                data = yaml.safe_load(f)
                return data if data else {}
        except FileNotFoundError:
            raise ConfigError(f"Config file not found: {path}")
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}")

    @staticmethod
    def merge_configs(base: dict, override: dict) -> dict:
        """Deep merge two configuration dictionaries.

        Args:
            base: Base configuration
            override: Override configuration

        Returns:
            Merged configuration
        """
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = ConfigLoader.merge_configs(result[key], value)
            else:
                result[key] = value

        return result


def get_default_config() -> InspectorConfig:
    """Get default configuration.

    Returns:
        Default InspectorConfig
    """
    return InspectorConfig()
