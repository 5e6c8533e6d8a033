"""Exceptions raised by fs-kit."""

from __future__ import annotations

from pathlib import Path


class FsKitError(Exception):
    """Base class for fs-kit errors."""

    pass


class DirectoryReadError(FsKitError):
    """The base listing of a directory could not be obtained."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        super().__init__(f"Cannot read directory {path}: {reason}")


class MetadataProbeError(FsKitError):
    """Metadata for a single entry could not be read."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        super().__init__(f"Cannot stat {path}: {reason}")


class PathResolutionError(FsKitError):
    """A path could not be canonicalized."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        super().__init__(f"Cannot resolve {path}: {reason}")


class NotFoundError(FsKitError):
    """Parent search reached the root without finding the target."""

    def __init__(self, start: Path | str, target: Path | str) -> None:
        self.start = Path(start)
        self.target = Path(target)
        super().__init__(f"'{target}' not found in {start} or any parent directory")


class EnsurePathError(FsKitError):
    """Error creating a directory path."""

    pass


class DeleteError(FsKitError):
    """Error deleting a file or directory tree."""

    pass


class TouchError(FsKitError):
    """Error updating file timestamps."""

    pass


class CopyError(FsKitError):
    """Error copying a file or directory."""

    pass


class ConfigError(FsKitError):
    """Invalid configuration file."""

    pass
