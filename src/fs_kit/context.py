"""Application context for dependency injection.

Separates object creation from object use so CLI commands can be tested
with a fake filesystem and an in-memory config.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from fs_kit.config import FsKitConfig
from fs_kit.protocols import FileSystem


def _default_filesystem() -> FileSystem:
    """Create the default filesystem implementation."""
    from fs_kit.filesystem import RealFileSystem

    return RealFileSystem()


@dataclass
class AppContext:
    """Container for application dependencies.

    The filesystem is typed with the FileSystem protocol so test doubles
    can be injected without inheritance.
    """

    config: FsKitConfig = field(default_factory=FsKitConfig)
    filesystem: FileSystem = field(default_factory=_default_filesystem)


def create_context(config_path: Path | None = None) -> AppContext:
    """Factory for application dependencies.

    Args:
        config_path: Override the config file location.

    Returns:
        Configured AppContext.

    Raises:
        ConfigError: If the config file is invalid.
    """
    from fs_kit.filesystem import RealFileSystem

    config = FsKitConfig.from_file(config_path or FsKitConfig.default_path())
    return AppContext(config=config, filesystem=RealFileSystem())
