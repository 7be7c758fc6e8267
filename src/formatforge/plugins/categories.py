"""
FormatForge plugin categories.

Each category knows its catalog attribute, its capability class, whether
its catalog stores shared instances or deferred type entries, and which
plugin source accessor feeds it.
"""

from __future__ import annotations

from enum import Enum, auto

from formatforge.plugins import interfaces


class EntryKind(Enum):
    """How a category stores its plugins."""

    INSTANCE = auto()
    TYPE = auto()


class PluginCategory(Enum):
    """The ten plugin categories known to the registry."""

    FILESYSTEMS = "filesystems"
    READ_ONLY_FILESYSTEMS = "read_only_filesystems"
    PARTITIONS = "partitions"
    MEDIA_IMAGES = "media_images"
    WRITABLE_IMAGES = "writable_images"
    FILTERS = "filters"
    FLOPPY_IMAGES = "floppy_images"
    WRITABLE_FLOPPY_IMAGES = "writable_floppy_images"
    ARCHIVES = "archives"
    BYTE_ADDRESSABLE_IMAGES = "byte_addressable_images"

    @property
    def capability(self) -> type[interfaces.Plugin]:
        return _CAPABILITIES[self]

    @property
    def entry_kind(self) -> EntryKind:
        return _ENTRY_KINDS[self]

    @property
    def accessor(self) -> str:
        """Name of the plugin source method that lists this category."""
        return _ACCESSORS[self]

    @classmethod
    def from_name(cls, text: str) -> PluginCategory:
        """
        Resolve a category from user input.

        Accepts the value or member name in any case, with dashes or
        underscores ("media-images", "MEDIA_IMAGES").
        """
        key = text.strip().lower().replace("-", "_")
        for category in cls:
            if category.value == key:
                return category
        raise ValueError(f"Unknown plugin category: {text}")


_CAPABILITIES: dict[PluginCategory, type[interfaces.Plugin]] = {
    PluginCategory.FILESYSTEMS: interfaces.Filesystem,
    PluginCategory.READ_ONLY_FILESYSTEMS: interfaces.ReadOnlyFilesystem,
    PluginCategory.PARTITIONS: interfaces.PartitionScheme,
    PluginCategory.MEDIA_IMAGES: interfaces.MediaImage,
    PluginCategory.WRITABLE_IMAGES: interfaces.WritableImage,
    PluginCategory.FILTERS: interfaces.Filter,
    PluginCategory.FLOPPY_IMAGES: interfaces.FloppyImage,
    PluginCategory.WRITABLE_FLOPPY_IMAGES: interfaces.WritableFloppyImage,
    PluginCategory.ARCHIVES: interfaces.Archive,
    PluginCategory.BYTE_ADDRESSABLE_IMAGES: interfaces.ByteAddressableImage,
}

# Image and filesystem plugins keep per-open state and are built per use.
_ENTRY_KINDS: dict[PluginCategory, EntryKind] = {
    PluginCategory.FILESYSTEMS: EntryKind.TYPE,
    PluginCategory.READ_ONLY_FILESYSTEMS: EntryKind.TYPE,
    PluginCategory.PARTITIONS: EntryKind.TYPE,
    PluginCategory.MEDIA_IMAGES: EntryKind.TYPE,
    PluginCategory.WRITABLE_IMAGES: EntryKind.TYPE,
    PluginCategory.FILTERS: EntryKind.INSTANCE,
    PluginCategory.FLOPPY_IMAGES: EntryKind.INSTANCE,
    PluginCategory.WRITABLE_FLOPPY_IMAGES: EntryKind.INSTANCE,
    PluginCategory.ARCHIVES: EntryKind.INSTANCE,
    PluginCategory.BYTE_ADDRESSABLE_IMAGES: EntryKind.INSTANCE,
}

_ACCESSORS: dict[PluginCategory, str] = {
    PluginCategory.FILESYSTEMS: "get_all_filesystem_plugins",
    PluginCategory.READ_ONLY_FILESYSTEMS: "get_all_read_only_filesystem_plugins",
    PluginCategory.PARTITIONS: "get_all_partition_plugins",
    PluginCategory.MEDIA_IMAGES: "get_all_media_image_plugins",
    PluginCategory.WRITABLE_IMAGES: "get_all_writable_image_plugins",
    PluginCategory.FILTERS: "get_all_filter_plugins",
    PluginCategory.FLOPPY_IMAGES: "get_all_floppy_image_plugins",
    PluginCategory.WRITABLE_FLOPPY_IMAGES: "get_all_writable_floppy_image_plugins",
    PluginCategory.ARCHIVES: "get_all_archive_plugins",
    PluginCategory.BYTE_ADDRESSABLE_IMAGES: "get_all_byte_addressable_plugins",
}
