"""
FormatForge - Central registry of disk and media format plugins.

Aggregates filesystem, partition, image, filter and archive plugins into
catalogs keyed by canonical plugin name.
"""

__version__ = "1.0.0"
__author__ = "FormatForge Team"

from formatforge.core.config import FormatForgeConfig
from formatforge.plugins.registry import PluginRegistry, build_registry

__all__ = ["FormatForgeConfig", "PluginRegistry", "build_registry", "__version__"]
