"""
FormatForge CLI Module.

Provides command-line interface for browsing the plugin registry.
"""

from formatforge.cli.main import main, cli

__all__ = ["main", "cli"]
