"""
FormatForge plugin sources.

A plugin source offers, per category, the candidate plugin types the
registry should consider. Discovery lives here and is always handed to the
registry explicitly.
"""

from __future__ import annotations

import hashlib
import importlib.util
import inspect
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass
from importlib import metadata
from pathlib import Path
from typing import Callable, Iterable, Mapping

from formatforge.core.logging import get_logger
from formatforge.plugins.categories import PluginCategory
from formatforge.plugins.interfaces import Plugin

logger = get_logger(__name__)


@dataclass(frozen=True)
class PluginCandidate:
    """A plugin type together with the factory that builds it."""

    plugin_type: type
    factory: Callable[[], object]

    @classmethod
    def of(cls, plugin_type: type) -> PluginCandidate:
        """Candidate built by calling the type with no arguments."""
        return cls(plugin_type=plugin_type, factory=plugin_type)

    def build(self) -> object:
        return self.factory()


class PluginSource(ABC):
    """
    Supplier of plugin candidates, one accessor per category.

    Every accessor returns None by default, meaning the source has nothing
    for that category. Subclasses override the ones they contribute to.
    """

    def get_all_filesystem_plugins(self) -> Iterable[PluginCandidate] | None:
        return None

    def get_all_read_only_filesystem_plugins(self) -> Iterable[PluginCandidate] | None:
        return None

    def get_all_partition_plugins(self) -> Iterable[PluginCandidate] | None:
        return None

    def get_all_media_image_plugins(self) -> Iterable[PluginCandidate] | None:
        return None

    def get_all_writable_image_plugins(self) -> Iterable[PluginCandidate] | None:
        return None

    def get_all_filter_plugins(self) -> Iterable[PluginCandidate] | None:
        return None

    def get_all_floppy_image_plugins(self) -> Iterable[PluginCandidate] | None:
        return None

    def get_all_writable_floppy_image_plugins(self) -> Iterable[PluginCandidate] | None:
        return None

    def get_all_archive_plugins(self) -> Iterable[PluginCandidate] | None:
        return None

    def get_all_byte_addressable_plugins(self) -> Iterable[PluginCandidate] | None:
        return None

    def candidates(self, category: PluginCategory) -> list[PluginCandidate]:
        """Candidates for ``category``; an absent list is treated as empty."""
        offered = getattr(self, category.accessor)()
        if offered is None:
            return []
        return list(offered)


class CategoryPluginSource(PluginSource):
    """Source whose accessors all route through :meth:`offer`."""

    @abstractmethod
    def offer(self, category: PluginCategory) -> Iterable[PluginCandidate] | None:
        """Return the candidates for ``category``."""

    def get_all_filesystem_plugins(self) -> Iterable[PluginCandidate] | None:
        return self.offer(PluginCategory.FILESYSTEMS)

    def get_all_read_only_filesystem_plugins(self) -> Iterable[PluginCandidate] | None:
        return self.offer(PluginCategory.READ_ONLY_FILESYSTEMS)

    def get_all_partition_plugins(self) -> Iterable[PluginCandidate] | None:
        return self.offer(PluginCategory.PARTITIONS)

    def get_all_media_image_plugins(self) -> Iterable[PluginCandidate] | None:
        return self.offer(PluginCategory.MEDIA_IMAGES)

    def get_all_writable_image_plugins(self) -> Iterable[PluginCandidate] | None:
        return self.offer(PluginCategory.WRITABLE_IMAGES)

    def get_all_filter_plugins(self) -> Iterable[PluginCandidate] | None:
        return self.offer(PluginCategory.FILTERS)

    def get_all_floppy_image_plugins(self) -> Iterable[PluginCandidate] | None:
        return self.offer(PluginCategory.FLOPPY_IMAGES)

    def get_all_writable_floppy_image_plugins(self) -> Iterable[PluginCandidate] | None:
        return self.offer(PluginCategory.WRITABLE_FLOPPY_IMAGES)

    def get_all_archive_plugins(self) -> Iterable[PluginCandidate] | None:
        return self.offer(PluginCategory.ARCHIVES)

    def get_all_byte_addressable_plugins(self) -> Iterable[PluginCandidate] | None:
        return self.offer(PluginCategory.BYTE_ADDRESSABLE_IMAGES)


def as_candidate(item: type | PluginCandidate) -> PluginCandidate:
    """Wrap a bare plugin type into a candidate."""
    if isinstance(item, PluginCandidate):
        return item
    return PluginCandidate.of(item)


class StaticPluginSource(CategoryPluginSource):
    """Source backed by a fixed mapping of category to plugin types."""

    def __init__(
        self,
        plugins: Mapping[PluginCategory, Iterable[type | PluginCandidate] | None],
    ) -> None:
        self._plugins: dict[PluginCategory, list[PluginCandidate] | None] = {}
        for category, items in plugins.items():
            self._plugins[category] = (
                None if items is None else [as_candidate(item) for item in items]
            )

    def offer(self, category: PluginCategory) -> list[PluginCandidate] | None:
        return self._plugins.get(category)


class EntryPointPluginSource(CategoryPluginSource):
    """
    Source reading installed entry points.

    Distributions publish plugins under one group per category, e.g.::

        [project.entry-points."formatforge.filesystems"]
        iso9660 = "my_package.iso9660:ISO9660"
    """

    def __init__(self, prefix: str = "formatforge") -> None:
        self.prefix = prefix

    def group(self, category: PluginCategory) -> str:
        return f"{self.prefix}.{category.value}"

    def offer(self, category: PluginCategory) -> list[PluginCandidate]:
        group = self.group(category)
        found: list[PluginCandidate] = []
        for entry_point in metadata.entry_points(group=group):
            try:
                loaded = entry_point.load()
            except Exception as e:
                logger.warning(
                    "Failed to load plugin entry point",
                    group=group,
                    entry_point=entry_point.name,
                    error=str(e),
                )
                continue
            if not isinstance(loaded, type):
                logger.warning(
                    "Plugin entry point is not a class",
                    group=group,
                    entry_point=entry_point.name,
                )
                continue
            found.append(PluginCandidate.of(loaded))
        return found


class DirectoryPluginSource(CategoryPluginSource):
    """
    Source importing plugin modules from a directory.

    Every ``*.py`` file not starting with an underscore is imported once and
    each concrete class it defines is offered to every category whose
    capability it implements.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self._classes: list[type] | None = None

    def module_name(self, plugin_file: Path) -> str:
        """Import name for a plugin file, unique per plugin directory."""
        digest = hashlib.sha1(str(self.path.resolve()).encode("utf-8")).hexdigest()[:10]
        return f"formatforge_plugin_{digest}_{plugin_file.stem}"

    def load(self) -> list[type]:
        """Import the directory's modules and return their plugin classes."""
        if self._classes is not None:
            return self._classes

        self._classes = []
        if not self.path.exists() or not self.path.is_dir():
            logger.warning("Plugin path not found", path=str(self.path))
            return self._classes

        for plugin_file in sorted(self.path.glob("*.py")):
            if plugin_file.name.startswith("_"):
                continue

            try:
                spec = importlib.util.spec_from_file_location(
                    self.module_name(plugin_file),
                    plugin_file,
                )
                if spec is None or spec.loader is None:
                    continue

                module = importlib.util.module_from_spec(spec)
                sys.modules[spec.name] = module
                spec.loader.exec_module(module)
            except Exception as e:
                logger.warning(
                    "Failed to load plugin file",
                    path=str(plugin_file),
                    error=str(e),
                )
                continue

            # Look for concrete Plugin subclasses defined in the file itself
            for _, attr in inspect.getmembers(module, inspect.isclass):
                if (
                    attr.__module__ == module.__name__
                    and issubclass(attr, Plugin)
                    and not inspect.isabstract(attr)
                ):
                    self._classes.append(attr)

        logger.debug("Loaded plugin directory", path=str(self.path), classes=len(self._classes))
        return self._classes

    def offer(self, category: PluginCategory) -> list[PluginCandidate]:
        return [
            PluginCandidate.of(cls)
            for cls in self.load()
            if issubclass(cls, category.capability)
        ]
