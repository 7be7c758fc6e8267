"""
FormatForge Plugin System.

Capability contracts, plugin sources and the central registry that
catalogs every installed format plugin.
"""

from formatforge.plugins.catalog import (
    Catalog,
    CatalogEntry,
    InstanceEntry,
    TypeEntry,
    canonical_name,
)
from formatforge.plugins.categories import EntryKind, PluginCategory
from formatforge.plugins.registry import (
    PluginRegistry,
    SkipEvent,
    SkipReason,
    build_registry,
)
from formatforge.plugins.source import (
    DirectoryPluginSource,
    EntryPointPluginSource,
    PluginCandidate,
    PluginSource,
    StaticPluginSource,
)

__all__ = [
    "Catalog",
    "CatalogEntry",
    "InstanceEntry",
    "TypeEntry",
    "canonical_name",
    "EntryKind",
    "PluginCategory",
    "PluginRegistry",
    "SkipEvent",
    "SkipReason",
    "build_registry",
    "DirectoryPluginSource",
    "EntryPointPluginSource",
    "PluginCandidate",
    "PluginSource",
    "StaticPluginSource",
]
