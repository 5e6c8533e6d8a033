"""Filesystem implementation backed by the standard library.

``RealFileSystem`` provides the raw primitives used by the listing and
search engines, plus thin pass-through collaborators for directory
creation, deletion, touch and copy. It satisfies the FileSystem protocol
structurally.
"""

from __future__ import annotations

import errno
import fnmatch
import glob as globlib
import logging
import os
import re
import shutil
import time as timelib
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from fs_kit.errors import CopyError, DeleteError, EnsurePathError, TouchError

logger = logging.getLogger(__name__)

# Error codes retried by deltree with linear backoff
BUSY_ERRNOS = frozenset({errno.EBUSY, errno.ENOTEMPTY, errno.EPERM})

# Backoff increment between busy retries, in seconds
BUSY_BACKOFF = 0.1

# Backoff increment between EMFILE retries, in seconds
EMFILE_BACKOFF = 0.001

_GLOB_CHARS = re.compile(r"[*?\[]")

NameFilter = str | re.Pattern[str] | Callable[[str], bool]


def _name_predicate(name_filter: NameFilter | None) -> Callable[[str], bool]:
    """Build a predicate from a glob pattern, regex or callable."""
    if name_filter is None:
        return lambda name: True
    if isinstance(name_filter, re.Pattern):
        return lambda name: name_filter.search(name) is not None
    if isinstance(name_filter, str):
        return lambda name: fnmatch.fnmatch(name, name_filter)
    return name_filter


def _to_timestamp(value: datetime | float) -> float:
    if isinstance(value, datetime):
        return value.timestamp()
    return float(value)


class RealFileSystem:
    """Production filesystem implementation.

    Wraps standard library os, pathlib and shutil operations.
    """

    # ------------------------------------------------------------------
    # Primitives
    # ------------------------------------------------------------------

    def listdir(self, path: Path) -> list[str]:
        """List entry names in a directory."""
        return os.listdir(path)

    def stat(self, path: Path) -> os.stat_result:
        """Read metadata for a path, following symlinks."""
        return os.stat(path)

    def realpath(self, path: Path) -> Path:
        """Canonicalize an existing path."""
        return Path(os.path.realpath(path, strict=True))

    def exists(self, path: Path) -> bool:
        """Check if a path exists."""
        return os.path.exists(path)

    # ------------------------------------------------------------------
    # Collaborators
    # ------------------------------------------------------------------

    def ensure_path(self, path: Path, mode: int = 0o777) -> None:
        """Create a directory and all missing parents.

        Raises:
            EnsurePathError: On permission or I/O failure.
        """
        try:
            Path(path).mkdir(mode=mode, parents=True, exist_ok=True)
        except OSError as e:
            raise EnsurePathError(f"Cannot create {path}: {e.strerror or e}") from e

    def deltree(
        self,
        pattern: Path | str,
        *,
        glob: bool = True,
        max_busy_tries: int = 3,
        emfile_wait: int = 1000,
    ) -> list[Path]:
        """Delete files or directory trees matching a path or glob pattern.

        Busy errors (EBUSY, ENOTEMPTY, EPERM) are retried up to
        ``max_busy_tries`` times, waiting 100ms longer on each try. EMFILE
        (too many open files) is retried with a 1ms linear backoff until
        ``emfile_wait`` retries are spent. Missing targets are ignored.

        Raises:
            DeleteError: If a target cannot be removed.
        """
        pattern_str = str(pattern)
        if glob and _GLOB_CHARS.search(pattern_str):
            targets = [Path(p) for p in globlib.glob(pattern_str, include_hidden=True)]
        else:
            targets = [Path(pattern_str)]

        removed: list[Path] = []
        for target in targets:
            if self._remove_with_retries(target, max_busy_tries, emfile_wait):
                removed.append(target)
        return removed

    def _remove_with_retries(
        self, target: Path, max_busy_tries: int, emfile_wait: int
    ) -> bool:
        """Remove one target, retrying busy and EMFILE errors with linear backoff."""
        tries = 0
        emfile_tries = 0
        while True:
            try:
                if target.is_dir() and not target.is_symlink():
                    shutil.rmtree(target)
                else:
                    target.unlink()
                return True
            except FileNotFoundError:
                return False
            except OSError as e:
                if e.errno in BUSY_ERRNOS and tries < max_busy_tries:
                    tries += 1
                    logger.debug("Busy removing %s (try %d): %s", target, tries, e)
                    timelib.sleep(BUSY_BACKOFF * tries)
                    continue
                if e.errno == errno.EMFILE and emfile_tries < emfile_wait:
                    emfile_tries += 1
                    timelib.sleep(EMFILE_BACKOFF * emfile_tries)
                    continue
                raise DeleteError(f"Cannot delete {target}: {e.strerror or e}") from e

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

        Raises:
            TouchError: If the file cannot be created or updated.
        """
        path = Path(path)
        try:
            if not path.exists():
                if no_create:
                    return
                path.touch()

            if reference is not None:
                ref_stat = os.stat(reference)
                new_atime, new_mtime = ref_stat.st_atime, ref_stat.st_mtime
            else:
                now = _to_timestamp(time) if time is not None else timelib.time()
                new_atime = new_mtime = now

            current = os.stat(path)
            os.utime(
                path,
                (
                    new_atime if atime else current.st_atime,
                    new_mtime if mtime else current.st_mtime,
                ),
            )
        except OSError as e:
            raise TouchError(f"Cannot touch {path}: {e.strerror or e}") from e

    def copy_file(
        self,
        src: Path,
        dst: Path,
        *,
        clobber: bool = True,
        dereference: bool = True,
        transform: Callable[[bytes], bytes] | None = None,
    ) -> Path:
        """Copy a single file, optionally transforming its content.

        Raises:
            CopyError: If the destination exists without clobber, or on I/O failure.
        """
        src, dst = Path(src), Path(dst)
        if dst.is_dir():
            dst = dst / src.name
        if dst.exists() and not clobber:
            raise CopyError(f"Destination already exists: {dst}")

        try:
            if transform is None:
                shutil.copy2(src, dst, follow_symlinks=dereference)
            else:
                dst.write_bytes(transform(src.read_bytes()))
                shutil.copymode(src, dst)
        except OSError as e:
            raise CopyError(f"Cannot copy {src} to {dst}: {e.strerror or e}") from e
        return dst

    def copy_dir(
        self,
        src: Path,
        dst: Path,
        *,
        filter: NameFilter | None = None,
        clobber: bool = True,
        dereference: bool = False,
        stop_on_error: bool = True,
    ) -> list[Path]:
        """Copy a directory tree, keeping only entries whose name passes ``filter``.

        Raises:
            CopyError: On the first failure when ``stop_on_error`` is set.
        """
        src, dst = Path(src), Path(dst)
        if not src.is_dir():
            raise CopyError(f"Source is not a directory: {src}")

        accept = _name_predicate(filter)
        copied: list[Path] = []
        for root, dirs, files in os.walk(src, followlinks=dereference):
            dirs[:] = [d for d in dirs if accept(d)]
            target_root = dst / Path(root).relative_to(src)
            try:
                self.ensure_path(target_root)
            except EnsurePathError as e:
                if stop_on_error:
                    raise CopyError(str(e)) from e
                logger.warning("Skipping %s: %s", root, e)
                continue

            for name in files:
                if not accept(name):
                    continue
                try:
                    copied.append(
                        self.copy_file(
                            Path(root) / name,
                            target_root / name,
                            clobber=clobber,
                            dereference=dereference,
                        )
                    )
                except CopyError as e:
                    if stop_on_error:
                        raise
                    logger.warning("Skipping %s: %s", Path(root) / name, e)
        return copied
