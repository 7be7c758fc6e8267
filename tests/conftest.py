"""
Pytest configuration and fixtures for FormatForge tests.
"""

import sys
import tempfile
from pathlib import Path
from typing import Any, Callable, Generator

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from formatforge.plugins.interfaces import Plugin  # noqa: E402
from formatforge.plugins.registry import SkipEvent  # noqa: E402


def _stub(self: Any, *args: Any, **kwargs: Any) -> None:
    return None


def make_plugin(
    capability: type[Plugin],
    display_name: Any,
    class_name: str | None = None,
    **attrs: Any,
) -> type[Plugin]:
    """Build a concrete plugin class for ``capability`` reporting ``display_name``."""
    namespace: dict[str, Any] = {
        method: _stub for method in capability.__abstractmethods__ if method != "name"
    }
    namespace["name"] = property(lambda self: display_name)
    namespace.update(attrs)
    return type(class_name or f"{capability.__name__}Plugin", (capability,), namespace)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def plugin_factory() -> Callable[..., type[Plugin]]:
    """Factory building synthetic plugin classes."""
    return make_plugin


@pytest.fixture
def skip_events() -> list[SkipEvent]:
    """List collecting skip decisions from a registry diagnostic sink."""
    return []


@pytest.fixture
def sample_config(temp_dir: Path) -> "FormatForgeConfig":
    """Create a configuration that loads no external plugins."""
    from formatforge.core.config import FormatForgeConfig, LoggingConfig, PluginConfig

    return FormatForgeConfig(
        logging=LoggingConfig(
            console_enabled=False,
            file_enabled=False,
            log_directory=temp_dir / "logs",
        ),
        plugins=PluginConfig(entry_points_enabled=False),
    )


@pytest.fixture
def plugin_dir(temp_dir: Path) -> Path:
    """Directory holding a few plugin modules, one of them broken."""
    path = temp_dir / "plugins"
    path.mkdir()
    (path / "filters.py").write_text(
        '''
from formatforge.plugins.interfaces import Filter


class GZipFilter(Filter):
    author = "Test Author"

    @property
    def name(self):
        return "GZip"

    def identify(self, path):
        return path.endswith(".gz")

    def open(self, path):
        raise NotImplementedError
''',
        encoding="utf-8",
    )
    (path / "filesystems.py").write_text(
        '''
from formatforge.plugins.interfaces import Filesystem, ReadOnlyFilesystem


class ISO9660(ReadOnlyFilesystem):
    @property
    def name(self):
        return "ISO9660 Filesystem"

    def identify(self, image, partition):
        return False

    def get_information(self, image, partition):
        return ""

    def mount(self, image, partition, options=None):
        pass

    def read_dir(self, path):
        return []


class UDF(Filesystem):
    @property
    def name(self):
        return "UDF"

    def identify(self, image, partition):
        return False

    def get_information(self, image, partition):
        return ""


class _Helper:
    pass
''',
        encoding="utf-8",
    )
    (path / "broken.py").write_text("def oops(:\n", encoding="utf-8")
    (path / "_private.py").write_text("raise RuntimeError('must not be imported')\n", encoding="utf-8")
    return path


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
