"""Protocol definitions for core abstractions.

The listing and search engines only talk to the filesystem through the
``FileSystem`` protocol, so test doubles can be injected without touching
real files. ``RealFileSystem`` satisfies it structurally.
"""

from __future__ import annotations

import os
import re
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class FileSystem(Protocol):
    """Protocol for filesystem operations."""

    def listdir(self, path: Path) -> list[str]:
        """List entry names in a directory, in raw listing order.

        Args:
            path: Directory to list.

        Returns:
            Entry names, without "." and "..".

        Raises:
            OSError: If the directory cannot be read.
        """
        ...

    def stat(self, path: Path) -> os.stat_result:
        """Read metadata for a path, following symlinks.

        Args:
            path: Path to inspect.

        Returns:
            Stat result.

        Raises:
            OSError: If the path cannot be inspected (e.g. dangling link).
        """
        ...

    def realpath(self, path: Path) -> Path:
        """Canonicalize a path, resolving symlinks.

        Args:
            path: Path to resolve.

        Returns:
            Absolute canonical path.

        Raises:
            OSError: If the path does not exist.
        """
        ...

    def exists(self, path: Path) -> bool:
        """Check if a path exists.

        Args:
            path: Path to check.

        Returns:
            True if path exists, False otherwise.
        """
        ...

    def ensure_path(self, path: Path, mode: int = 0o777) -> None:
        """Create a directory and all missing parents.

        Args:
            path: Directory to create.
            mode: Permission bits for created directories.
        """
        ...

    def deltree(
        self,
        pattern: Path | str,
        *,
        glob: bool = True,
        max_busy_tries: int = 3,
        emfile_wait: int = 1000,
    ) -> list[Path]:
        """Delete files or directory trees matching a path or glob pattern.

        Args:
            pattern: Path or glob pattern.
            glob: Expand glob wildcards.
            max_busy_tries: Retries for busy/locked errors.
            emfile_wait: Retry budget for EMFILE errors.

        Returns:
            Paths that were removed.
        """
        ...

    def touch(
        self,
        path: Path,
        *,
        time: datetime | float | None = None,
        atime: bool = True,
        mtime: bool = True,
        reference: Path | None = None,
        no_create: bool = False,
    ) -> None:
        """Create a file or update its timestamps, like touch(1).

        Args:
            path: File to touch.
            time: Timestamp to set instead of now.
            atime: Update the access time.
            mtime: Update the modification time.
            reference: Copy timestamps from this file.
            no_create: Do not create a missing file.
        """
        ...

    def copy_file(
        self,
        src: Path,
        dst: Path,
        *,
        clobber: bool = True,
        dereference: bool = True,
        transform: Callable[[bytes], bytes] | None = None,
    ) -> Path:
        """Copy a single file.

        Args:
            src: Source file.
            dst: Destination file or directory.
            clobber: Overwrite an existing destination.
            dereference: Copy the symlink target instead of the link.
            transform: Optional function applied to the file content.

        Returns:
            Path of the written file.
        """
        ...

    def copy_dir(
        self,
        src: Path,
        dst: Path,
        *,
        filter: str | re.Pattern[str] | Callable[[str], bool] | None = None,
        clobber: bool = True,
        dereference: bool = False,
        stop_on_error: bool = True,
    ) -> list[Path]:
        """Copy a directory tree.

        Args:
            src: Source directory.
            dst: Destination directory.
            filter: Glob pattern, regex or predicate on entry names.
            clobber: Overwrite existing files.
            dereference: Follow symlinks.
            stop_on_error: Raise on the first error instead of skipping.

        Returns:
            Paths of the copied files.
        """
        ...
