"""
FormatForge Core.

Contains configuration and logging shared by the registry and the CLI.
"""

from formatforge.core.config import FormatForgeConfig, LoggingConfig, PluginConfig
from formatforge.core.logging import get_logger, setup_logging

__all__ = [
    "FormatForgeConfig",
    "LoggingConfig",
    "PluginConfig",
    "get_logger",
    "setup_logging",
]
