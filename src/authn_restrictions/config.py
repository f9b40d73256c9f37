"""Engine configuration for authn-restrictions.

Defines configuration models for the engine defaults and logging. The
engine works without any configuration file; a JSON file only overrides
defaults.

Example usage:
    # Load from config file
    config = EngineConfig.load_from_file(config_path)

    # Save configuration
    config.save_to_file(config_path)
"""

from __future__ import annotations

__all__ = [
    "EngineConfig",
    "LoggingConfig",
    "default_log_dir",
]

import json
from pathlib import Path
from typing import Literal

from platformdirs import user_log_dir
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from authn_restrictions.constants import (
    APP_NAME,
    DECISIONS_LOG_FILENAME,
    DEFAULT_CONTAINER_NAME,
    LEGACY_CONTAINER_NAME_ANNOTATION,
    SYSTEM_LOG_FILENAME,
)
from authn_restrictions.exceptions import ConfigurationFileError


def default_log_dir() -> str:
    """OS-appropriate log directory (XDG state on Linux, ~/Library/Logs on macOS)."""
    return user_log_dir(APP_NAME, appauthor=False)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Attributes:
        log_level: Console verbosity of the system logger.
        file_logging: Write system.jsonl and decisions.jsonl under log_dir.
        log_dir: Directory for JSONL log files.
    """

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    file_logging: bool = False
    log_dir: str = Field(default_factory=default_log_dir)

    model_config = ConfigDict(frozen=True)

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_level(cls, v: object) -> object:
        return v.upper() if isinstance(v, str) else v

    @property
    def system_log_path(self) -> Path:
        return Path(self.log_dir).expanduser() / SYSTEM_LOG_FILENAME

    @property
    def decisions_log_path(self) -> Path:
        return Path(self.log_dir).expanduser() / DECISIONS_LOG_FILENAME


class EngineConfig(BaseModel):
    """Top-level engine configuration.

    Attributes:
        default_container_name: Container name used when no annotation sets one.
        legacy_container_annotation: Pre-authn-k8s container name annotation.
        logging: Logging configuration.
    """

    default_container_name: str = DEFAULT_CONTAINER_NAME
    legacy_container_annotation: str = LEGACY_CONTAINER_NAME_ANNOTATION
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("default_container_name", "legacy_container_annotation")
    @classmethod
    def reject_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Value cannot be empty or whitespace-only")
        return v

    @classmethod
    def load_from_file(cls, config_path: Path) -> "EngineConfig":
        """Load and validate configuration from a JSON file.

        Args:
            config_path: Path to the JSON configuration file.

        Returns:
            Validated EngineConfig.

        Raises:
            ConfigurationFileError: If the file is missing, unreadable,
                not JSON, or fails validation.
        """
        if not config_path.exists():
            raise ConfigurationFileError(f"Configuration file not found at {config_path}")

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationFileError(f"Invalid JSON in configuration file {config_path}: {e}") from e
        except OSError as e:
            raise ConfigurationFileError(f"Could not read configuration file {config_path}: {e}") from e

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            errors = [f"  - {'.'.join(str(x) for x in err['loc'])}: {err['msg']}" for err in e.errors()]
            raise ConfigurationFileError(
                f"Invalid configuration file {config_path}:\n" + "\n".join(errors)
            ) from e

    def save_to_file(self, config_path: Path) -> None:
        """Write configuration as indented JSON, creating parent directories."""
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(self.model_dump_json(indent=2) + "\n", encoding="utf-8")
