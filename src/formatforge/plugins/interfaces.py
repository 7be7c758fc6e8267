"""
FormatForge plugin capability contracts.

Every plugin category is represented by an abstract base class. A candidate
is accepted into a category only when an instance of it is an instance of
that category's capability class.
"""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from typing import Any, BinaryIO


class Plugin(ABC):
    """Base class for every format-handling plugin."""

    id: uuid.UUID | None = None
    author: str = ""

    @property
    @abstractmethod
    def name(self) -> str:
        """Display name of the plugin."""


class Filter(Plugin):
    """Stream transform applied before format detection (e.g. decompression)."""

    @abstractmethod
    def identify(self, path: str) -> bool:
        """Return True if this filter can handle the file at ``path``."""

    @abstractmethod
    def open(self, path: str) -> BinaryIO:
        """Open ``path`` and return the filtered data stream."""


class PartitionScheme(Plugin):
    """Reads a partition table from a media image."""

    @abstractmethod
    def get_information(self, image: MediaImage, sector_offset: int = 0) -> list[Any]:
        """Return the partitions found, or an empty list."""


class Filesystem(Plugin):
    """Identifies a filesystem and describes it."""

    @abstractmethod
    def identify(self, image: MediaImage, partition: Any) -> bool:
        """Return True if the partition holds this filesystem."""

    @abstractmethod
    def get_information(self, image: MediaImage, partition: Any) -> str:
        """Return a human-readable description of the filesystem."""


class ReadOnlyFilesystem(Filesystem):
    """Filesystem that can additionally be mounted to read its contents."""

    @abstractmethod
    def mount(self, image: MediaImage, partition: Any, options: dict[str, str] | None = None) -> None:
        """Mount the filesystem for reading."""

    @abstractmethod
    def read_dir(self, path: str) -> list[str]:
        """List the entries of a directory."""


class BaseImage(Plugin):
    """Common contract for all image formats."""

    @abstractmethod
    def identify(self, stream: BinaryIO) -> bool:
        """Return True if ``stream`` holds an image of this format."""


class MediaImage(BaseImage):
    """Readable media image."""

    @abstractmethod
    def open(self, stream: BinaryIO) -> None:
        """Open the image for reading."""

    @abstractmethod
    def read_sector(self, sector: int) -> bytes:
        """Read one sector."""


class WritableImage(BaseImage):
    """Media image format that can be created and written."""

    @abstractmethod
    def create(self, path: str, sectors: int, sector_size: int) -> None:
        """Create a new image at ``path``."""

    @abstractmethod
    def write_sector(self, data: bytes, sector: int) -> None:
        """Write one sector."""


class FloppyImage(MediaImage):
    """Readable floppy image with track-level access."""

    @abstractmethod
    def read_track(self, cylinder: int, head: int) -> bytes:
        """Read a raw track."""


class WritableFloppyImage(FloppyImage, WritableImage):
    """Floppy image format that can be created and written."""

    @abstractmethod
    def write_track(self, data: bytes, cylinder: int, head: int) -> None:
        """Write a raw track."""


class Archive(Plugin):
    """Reads entries from an archive."""

    @abstractmethod
    def identify(self, stream: BinaryIO) -> bool:
        """Return True if ``stream`` holds an archive of this format."""

    @abstractmethod
    def list_entries(self) -> list[str]:
        """Return the names of the entries in the opened archive."""


class ByteAddressableImage(BaseImage):
    """Image addressed by byte offset instead of by sector (e.g. ROM dumps)."""

    @abstractmethod
    def read_bytes(self, address: int, length: int) -> bytes:
        """Read ``length`` bytes starting at ``address``."""
