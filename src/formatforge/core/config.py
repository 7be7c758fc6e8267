"""
FormatForge configuration management.

Provides centralized configuration with validation using Pydantic.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

DEFAULT_CONFIG_PATH = Path.home() / ".formatforge" / "config.json"


class LoggingConfig(BaseModel):
    """Configuration for structured logging."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    file_enabled: bool = False
    console_enabled: bool = True
    json_format: bool = False
    log_directory: Path = Field(default_factory=lambda: Path.home() / ".formatforge" / "logs")

    @field_validator("log_directory", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        return Path(v).expanduser().resolve()


class PluginConfig(BaseModel):
    """Configuration for plugin discovery."""

    entry_points_enabled: bool = True
    entry_point_prefix: str = Field(default="formatforge", min_length=1)
    plugin_directories: list[Path] = Field(default_factory=list)
    disabled_categories: list[str] = Field(default_factory=list)

    @field_validator("plugin_directories", mode="before")
    @classmethod
    def expand_paths(cls, v: list[str | Path]) -> list[Path]:
        return [Path(p).expanduser().resolve() for p in v]

    @field_validator("disabled_categories")
    @classmethod
    def check_categories(cls, v: list[str]) -> list[str]:
        from formatforge.plugins.categories import PluginCategory

        return [PluginCategory.from_name(name).value for name in v]


class FormatForgeConfig(BaseModel):
    """Main FormatForge configuration."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    plugins: PluginConfig = Field(default_factory=PluginConfig)

    @classmethod
    def load(cls, config_path: Path | None = None) -> FormatForgeConfig:
        """Load configuration from file or create default."""
        if config_path is None:
            config_path = DEFAULT_CONFIG_PATH

        if config_path.exists():
            with open(config_path) as f:
                data = json.load(f)
            return cls.model_validate(data)

        return cls()

    def save(self, config_path: Path | None = None) -> None:
        """Save configuration to file."""
        if config_path is None:
            config_path = DEFAULT_CONFIG_PATH

        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w") as f:
            json.dump(self.model_dump(mode="json"), f, indent=2, default=str)

    def ensure_directories(self) -> None:
        """Create all required directories."""
        if self.logging.file_enabled:
            self.logging.log_directory.mkdir(parents=True, exist_ok=True)


def get_default_config() -> FormatForgeConfig:
    """Get the default configuration."""
    return FormatForgeConfig()


def load_config(config_path: Path | None = None) -> FormatForgeConfig:
    """Load or create configuration."""
    config = FormatForgeConfig.load(config_path)
    config.ensure_directories()
    return config
