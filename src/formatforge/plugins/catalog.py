"""
FormatForge plugin catalogs.

A catalog maps canonical plugin names to entries. Entries are either a
shared plugin instance or a deferred type entry that builds a fresh plugin
on every use.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterator, Union

from formatforge.plugins.categories import EntryKind, PluginCategory
from formatforge.plugins.interfaces import Plugin


def canonical_name(name: Any) -> str | None:
    """Return the catalog key for a display name, or None if it has none."""
    if not isinstance(name, str) or not name:
        return None
    return name.lower()


def type_name(handle: Any) -> str:
    """Dotted name of a plugin type handle; handles may be any callable."""
    qualname = getattr(handle, "__qualname__", None)
    if qualname is None:
        return repr(handle)
    return f"{getattr(handle, '__module__', '?')}.{qualname}"


@dataclass(frozen=True)
class InstanceEntry:
    """A plugin object shared by every caller."""

    plugin: Plugin

    kind = EntryKind.INSTANCE

    @property
    def plugin_type(self) -> type[Plugin]:
        return type(self.plugin)

    def instantiate(self) -> Plugin:
        return self.plugin


@dataclass(frozen=True)
class TypeEntry:
    """A plugin type constructed fresh by each caller."""

    plugin_type: type[Plugin]
    factory: Callable[[], Plugin]

    kind = EntryKind.TYPE

    def instantiate(self) -> Plugin:
        return self.factory()


CatalogEntry = Union[InstanceEntry, TypeEntry]


class Catalog:
    """
    Name-ordered mapping of canonical plugin names to catalog entries.

    Entries are only ever added; the first entry stored under a name is
    kept for the lifetime of the catalog.
    """

    def __init__(self, category: PluginCategory) -> None:
        self.category = category
        self._entries: dict[str, CatalogEntry] = {}

    def add(self, name: str, entry: CatalogEntry) -> bool:
        """Store ``entry`` under ``name`` unless the name is taken."""
        if name in self._entries:
            return False
        self._entries[name] = entry
        return True

    def get(self, name: str) -> CatalogEntry | None:
        """Look up an entry by canonical name."""
        return self._entries.get(name)

    def names(self) -> list[str]:
        """All canonical names in lexicographic order."""
        return sorted(self._entries)

    def items(self) -> list[tuple[str, CatalogEntry]]:
        return [(name, self._entries[name]) for name in self.names()]

    def entries(self) -> list[CatalogEntry]:
        return [self._entries[name] for name in self.names()]

    def __getitem__(self, name: str) -> CatalogEntry:
        return self._entries[name]

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"Catalog({self.category.value}, {self.names()!r})"
