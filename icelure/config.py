"""Configuration loading for Ice Lure Notes.

Settings live in ``~/.config/icelure/config.toml``:

    [storage]
    db_path = "~/.config/icelure/icelure.db"

    [export]
    directory = "~/Documents"
    date_format = "%Y-%m-%d"

    [logging]
    level = "WARNING"

Every section and key is optional.
"""

import logging
from pathlib import Path
from typing import Optional

import toml
from pydantic import BaseModel, Field, ValidationError, field_validator

from icelure.errors import ConfigError

CONFIG_DIR = Path.home() / ".config" / "icelure"
DEFAULT_CONFIG_PATH = CONFIG_DIR / "config.toml"
DEFAULT_DB_PATH = CONFIG_DIR / "icelure.db"


class StorageConfig(BaseModel):
    """Where the journal database lives."""

    db_path: Path = Field(default=DEFAULT_DB_PATH, description="SQLite database file")

    @field_validator("db_path")
    @classmethod
    def expand_user(cls, value: Path) -> Path:
        return value.expanduser()


class ExportConfig(BaseModel):
    """CSV export settings."""

    directory: Path = Field(default=Path("."), description="Default export directory")
    date_format: str = Field(default="%Y-%m-%d", min_length=1, description="Date column format")

    @field_validator("directory")
    @classmethod
    def expand_user(cls, value: Path) -> Path:
        return value.expanduser()


class LoggingConfig(BaseModel):
    """Log output settings."""

    level: str = Field(default="WARNING", description="Root log level")

    @field_validator("level")
    @classmethod
    def known_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level '{value}'")
        return level


class AppConfig(BaseModel):
    """Application configuration."""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"frozen": True}


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load the configuration file.

    Args:
        config_path: Path to the TOML file. Uses the default location
            if not provided.

    Returns:
        AppConfig. Defaults are used when the file does not exist.

    Raises:
        ConfigError: If the file cannot be parsed or holds invalid values.
    """
    path = config_path or DEFAULT_CONFIG_PATH
    if not path.exists():
        return AppConfig()

    try:
        data = toml.load(path)
    except (toml.TomlDecodeError, OSError) as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e

    try:
        return AppConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config file {path}: {e}") from e
