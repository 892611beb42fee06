"""
Configuration management for the SLIP framer.

A single TOML file holds a [framer] table (datagram size limit, frame dump)
and a [logging] table. Missing tables or keys fall back to defaults.
"""

import logging
import os
from pathlib import Path
from typing import Optional

import tomli
import tomli_w
from pydantic import BaseModel, Field, field_validator

from slip_framer.slip import MAX_DATAGRAM_SIZE, MIN_DATAGRAM_SIZE

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
CONFIG_ENV = "SLIP_FRAMER_CONFIG"


class FramerConfig(BaseModel):
    """Framer configuration."""

    max_datagram_size: int = Field(
        default=MAX_DATAGRAM_SIZE,
        ge=MIN_DATAGRAM_SIZE,
        description="Maximum datagram size in bytes (END included)",
    )
    frame_dump: bool = Field(default=False, description="Log every datagram at DEBUG level")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", description="One of LOG_LEVELS, case-insensitive")
    format: str = Field(
        default="%(asctime)s %(levelname)s %(name)s: %(message)s",
        description="logging.Formatter format string",
    )

    @field_validator("level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"unknown log level '{value}', expected one of {', '.join(LOG_LEVELS)}")
        return level


class Config(BaseModel):
    """Complete slip_framer configuration."""

    framer: FramerConfig = Field(default_factory=FramerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_toml(cls, path: Path) -> "Config":
        """
        Parse a TOML file into a Config.

        Raises:
            tomli.TOMLDecodeError: If the file is not valid TOML.
            pydantic.ValidationError: If a value is out of range.
        """
        with open(path, "rb") as f:
            return cls.model_validate(tomli.load(f))

    def to_toml(self, path: Path) -> None:
        """Write this Config as TOML, creating parent directories."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "wb") as f:
            tomli_w.dump(self.model_dump(), f)


def get_config_path() -> Path:
    """
    Resolve the default configuration file.

    $SLIP_FRAMER_CONFIG wins; otherwise $XDG_CONFIG_HOME/slip_framer/config.toml
    (XDG_CONFIG_HOME defaults to ~/.config).
    """
    explicit = os.getenv(CONFIG_ENV)
    if explicit:
        return Path(explicit).expanduser()

    config_home = os.getenv("XDG_CONFIG_HOME") or os.path.expanduser("~/.config")
    return Path(config_home) / "slip_framer" / "config.toml"


def load_config(path: Optional[Path] = None) -> Config:
    """Load config from path (or the default location); defaults if absent."""
    path = path or get_config_path()
    if not path.exists():
        return Config()
    return Config.from_toml(path)


def save_config(config: Config, path: Optional[Path] = None) -> None:
    """Save config to path (or the default location)."""
    config.to_toml(path or get_config_path())


def configure_logging(config: LoggingConfig) -> None:
    """Apply logging configuration to the root logger."""
    logging.basicConfig(level=config.level, format=config.format)
