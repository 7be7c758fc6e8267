"""
FormatForge Plugin Registry.

Holds every installed format plugin in ten per-category catalogs keyed by
canonical (lower-cased) plugin name.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable, Iterable

from formatforge.core.logging import OperationLogger, get_logger
from formatforge.plugins.catalog import (
    Catalog,
    CatalogEntry,
    InstanceEntry,
    TypeEntry,
    canonical_name,
    type_name,
)
from formatforge.plugins.categories import EntryKind, PluginCategory
from formatforge.plugins.interfaces import Plugin
from formatforge.plugins.source import (
    DirectoryPluginSource,
    EntryPointPluginSource,
    PluginCandidate,
    PluginSource,
)

if TYPE_CHECKING:
    from formatforge.core.config import FormatForgeConfig

logger = get_logger(__name__)


class SkipReason(Enum):
    """Why a candidate was left out of a catalog."""

    CONSTRUCTION_FAILED = "construction_failed"
    NOT_CAPABLE = "not_capable"
    MISSING_NAME = "missing_name"
    DUPLICATE_NAME = "duplicate_name"


@dataclass(frozen=True)
class SkipEvent:
    """A candidate that was not registered."""

    category: PluginCategory
    plugin_type: type
    reason: SkipReason
    name: str | None = None
    error: str | None = None


DiagnosticSink = Callable[[SkipEvent], None]


def _ignore(event: SkipEvent) -> None:
    pass


class PluginRegistry:
    """
    Central catalog of format plugins.

    Populate it with :meth:`add_plugins` during a single initialization phase
    and publish it to readers afterwards. There is no internal locking:
    concurrent merges, or merges racing with readers, must be serialized by
    the caller. Once populated, lookups are safe from any number of threads.
    """

    def __init__(self, diagnostic_sink: DiagnosticSink | None = None) -> None:
        self.diagnostic_sink = diagnostic_sink or _ignore

        self.filesystems = Catalog(PluginCategory.FILESYSTEMS)
        self.read_only_filesystems = Catalog(PluginCategory.READ_ONLY_FILESYSTEMS)
        self.partitions = Catalog(PluginCategory.PARTITIONS)
        self.media_images = Catalog(PluginCategory.MEDIA_IMAGES)
        self.writable_images = Catalog(PluginCategory.WRITABLE_IMAGES)
        self.filters = Catalog(PluginCategory.FILTERS)
        self.floppy_images = Catalog(PluginCategory.FLOPPY_IMAGES)
        self.writable_floppy_images = Catalog(PluginCategory.WRITABLE_FLOPPY_IMAGES)
        self.archives = Catalog(PluginCategory.ARCHIVES)
        self.byte_addressable_images = Catalog(PluginCategory.BYTE_ADDRESSABLE_IMAGES)

    def catalog(self, category: PluginCategory) -> Catalog:
        """Get the catalog for a category."""
        return getattr(self, category.value)

    def catalogs(self) -> dict[PluginCategory, Catalog]:
        """All catalogs, in category order."""
        return {category: self.catalog(category) for category in PluginCategory}

    def add_plugins(self, source: PluginSource) -> None:
        """
        Merge the candidates offered by ``source`` into the catalogs.

        Each candidate is built once to read its name. Candidates that fail
        to build, lack the category's capability, have no name, or reuse a
        name already in the catalog are skipped. Nothing is ever replaced,
        so merging the same source twice is a no-op.
        """
        with OperationLogger("plugin registration", logger, source=type(source).__name__) as op:
            added = 0
            for category in PluginCategory:
                for candidate in source.candidates(category):
                    if self._add_candidate(category, candidate):
                        added += 1
            op.update(added=added)

    def _add_candidate(self, category: PluginCategory, candidate: PluginCandidate) -> bool:
        plugin_type = candidate.plugin_type

        try:
            plugin = candidate.build()
        except Exception as e:
            self._skip(category, plugin_type, SkipReason.CONSTRUCTION_FAILED, error=str(e))
            return False

        if plugin is None:
            self._skip(category, plugin_type, SkipReason.CONSTRUCTION_FAILED)
            return False

        if not isinstance(plugin, category.capability):
            self._skip(category, plugin_type, SkipReason.NOT_CAPABLE)
            return False

        try:
            name = canonical_name(plugin.name)
        except Exception as e:
            self._skip(category, plugin_type, SkipReason.MISSING_NAME, error=str(e))
            return False

        if name is None:
            self._skip(category, plugin_type, SkipReason.MISSING_NAME)
            return False

        entry: CatalogEntry
        if category.entry_kind is EntryKind.INSTANCE:
            entry = InstanceEntry(plugin)
        else:
            entry = TypeEntry(plugin_type, candidate.factory)

        if not self.catalog(category).add(name, entry):
            self._skip(category, plugin_type, SkipReason.DUPLICATE_NAME, name=name)
            return False

        logger.debug(
            "Registered plugin",
            category=category.value,
            name=name,
            plugin_type=type_name(plugin_type),
        )
        return True

    def _skip(
        self,
        category: PluginCategory,
        plugin_type: type,
        reason: SkipReason,
        name: str | None = None,
        error: str | None = None,
    ) -> None:
        logger.debug(
            "Skipping plugin",
            category=category.value,
            plugin_type=type_name(plugin_type),
            reason=reason.value,
            name=name,
            error=error,
        )
        self.diagnostic_sink(
            SkipEvent(
                category=category,
                plugin_type=plugin_type,
                reason=reason,
                name=name,
                error=error,
            )
        )

    def get_entry(self, category: PluginCategory, name: str) -> CatalogEntry | None:
        """Look up an entry by display name in any case."""
        key = canonical_name(name)
        if key is None:
            return None
        return self.catalog(category).get(key)

    def get_plugin(self, category: PluginCategory, name: str) -> Plugin | None:
        """
        Get a usable plugin by display name in any case.

        Returns the shared instance for instance categories and a newly
        constructed plugin for type categories.
        """
        entry = self.get_entry(category, name)
        if entry is None:
            return None
        return entry.instantiate()

    def summary(self) -> dict[str, int]:
        """Number of registered plugins per category."""
        return {category.value: len(self.catalog(category)) for category in PluginCategory}

    def __len__(self) -> int:
        return sum(len(catalog) for catalog in self.catalogs().values())


class _FilteredSource(PluginSource):
    """Hides some categories of another source."""

    def __init__(self, source: PluginSource, hidden: set[PluginCategory]) -> None:
        self.source = source
        self.hidden = hidden

    def candidates(self, category: PluginCategory) -> list[PluginCandidate]:
        if category in self.hidden:
            return []
        return self.source.candidates(category)


def build_registry(
    config: FormatForgeConfig,
    sources: Iterable[PluginSource] = (),
    diagnostic_sink: DiagnosticSink | None = None,
) -> PluginRegistry:
    """
    Create a registry populated from the configured plugin sources.

    Explicit ``sources`` are merged first, then installed entry points, then
    each configured plugin directory in order; earlier sources win name
    collisions.
    """
    registry = PluginRegistry(diagnostic_sink=diagnostic_sink)
    plugin_config = config.plugins

    all_sources: list[PluginSource] = list(sources)
    if plugin_config.entry_points_enabled:
        all_sources.append(EntryPointPluginSource(plugin_config.entry_point_prefix))
    all_sources.extend(DirectoryPluginSource(path) for path in plugin_config.plugin_directories)

    hidden = {PluginCategory.from_name(name) for name in plugin_config.disabled_categories}
    for source in all_sources:
        registry.add_plugins(_FilteredSource(source, hidden) if hidden else source)

    logger.info("Plugin registry ready", **registry.summary())
    return registry
