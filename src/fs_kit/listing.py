"""Filtered directory listing.

``readdir`` lists a directory and, when the options need it, stats every
entry concurrently before filtering. Entries whose stat fails (dangling
symlinks, races with deletion) are dropped from the result instead of
failing the whole listing.
"""

from __future__ import annotations

import asyncio
import logging
import os
import stat
from dataclasses import replace
from pathlib import Path

from fs_kit.errors import DirectoryReadError, MetadataProbeError
from fs_kit.filesystem import RealFileSystem
from fs_kit.options import ListingOptions
from fs_kit.permissions import stats_has_exe
from fs_kit.protocols import FileSystem
from fs_kit.types import CallerIdentity, DirectoryEntry, EntryKind

logger = logging.getLogger(__name__)

ProbeResult = os.stat_result | MetadataProbeError


def _entry_kind(stats: os.stat_result) -> EntryKind:
    if stat.S_ISDIR(stats.st_mode):
        return EntryKind.DIRECTORY
    if stat.S_ISREG(stats.st_mode):
        return EntryKind.FILE
    return EntryKind.OTHER


def classify_entry(
    name: str,
    stats: ProbeResult,
    options: ListingOptions,
    identity: CallerIdentity,
) -> str | None:
    """Apply listing filters to one probed entry.

    Args:
        name: Entry name.
        stats: Stat result, or the probe error if the stat failed.
        options: Listing options.
        identity: Caller identity used for the executability test.

    Returns:
        The name to emit (with a trailing slash for directories when
        requested), or None if the entry is excluded.
    """
    if isinstance(stats, MetadataProbeError):
        return None

    kind = _entry_kind(stats)
    if kind is EntryKind.DIRECTORY:
        if not options.directories_mode.accepts(True):
            return None
        return name + "/" if options.slash else name

    if kind is EntryKind.FILE:
        if not options.files_mode.accepts(True):
            return None
        if not options.exe_mode.accepts(stats_has_exe(stats, identity)):
            return None
        return name

    return None


def probe_entry(
    name: str, stats: ProbeResult, identity: CallerIdentity
) -> DirectoryEntry:
    """Build a typed entry from a probe result."""
    if isinstance(stats, MetadataProbeError):
        return DirectoryEntry(name=name, kind=EntryKind.UNKNOWN)
    kind = _entry_kind(stats)
    executable = stats_has_exe(stats, identity) if kind is EntryKind.FILE else None
    return DirectoryEntry(name=name, kind=kind, executable=executable)


def filter_entries(
    entries: list[DirectoryEntry], options: ListingOptions
) -> list[DirectoryEntry]:
    """Apply listing filters to already probed entries.

    Same rules as ``classify_entry``: UNKNOWN and special entries are
    dropped once any filter is set, and directory names get a trailing
    slash when requested.
    """
    if not options.needs_metadata:
        return entries

    kept = []
    for entry in entries:
        if entry.kind is EntryKind.DIRECTORY:
            if options.directories_mode.accepts(True):
                kept.append(replace(entry, name=entry.name + "/") if options.slash else entry)
        elif entry.kind is EntryKind.FILE:
            if options.files_mode.accepts(True) and options.exe_mode.accepts(
                bool(entry.executable)
            ):
                kept.append(entry)
    return kept


# ----------------------------------------------------------------------------
# Raw listing and probes
# ----------------------------------------------------------------------------


def _list_names(filesystem: FileSystem, directory: Path) -> list[str]:
    try:
        return filesystem.listdir(directory)
    except OSError as e:
        raise DirectoryReadError(directory, e.strerror or str(e)) from e


def _probe_sync(filesystem: FileSystem, path: Path) -> ProbeResult:
    try:
        return filesystem.stat(path)
    except OSError as e:
        logger.debug("Skipping %s: %s", path, e)
        return MetadataProbeError(path, e.strerror or str(e))


async def _probe(
    filesystem: FileSystem, path: Path, timeout: float | None
) -> ProbeResult:
    try:
        return await asyncio.wait_for(
            asyncio.to_thread(_probe_sync, filesystem, path), timeout
        )
    except asyncio.TimeoutError:
        logger.debug("Skipping %s: stat timed out after %ss", path, timeout)
        return MetadataProbeError(path, f"timed out after {timeout}s")


async def _probe_all(
    filesystem: FileSystem,
    directory: Path,
    names: list[str],
    timeout: float | None,
) -> list[ProbeResult]:
    return await asyncio.gather(
        *(_probe(filesystem, directory / name, timeout) for name in names)
    )


# ----------------------------------------------------------------------------
# Public API
# ----------------------------------------------------------------------------


async def readdir(
    directory: Path | str,
    options: ListingOptions | None = None,
    *,
    filesystem: FileSystem | None = None,
    identity: CallerIdentity | None = None,
    probe_timeout: float | None = None,
) -> list[str]:
    """List a directory, filtering entries by type and executability.

    When ``options`` requires no metadata the raw listing is returned as-is
    and no entry is stat'ed. Otherwise every entry is stat'ed concurrently
    and the result keeps the raw listing order.

    Args:
        directory: Directory to list.
        options: Listing options. Defaults to no filtering.
        filesystem: Filesystem backend. Defaults to RealFileSystem.
        identity: Caller identity for ``exe`` filtering. Defaults to the
            running process.
        probe_timeout: Seconds after which a single stat is abandoned and
            its entry dropped. None waits indefinitely.

    Returns:
        Entry names that pass the filters.

    Raises:
        DirectoryReadError: If the directory cannot be listed.
    """
    options = options or ListingOptions()
    filesystem = filesystem or RealFileSystem()
    directory = Path(directory)

    names = await asyncio.to_thread(_list_names, filesystem, directory)
    if not options.needs_metadata or not names:
        return names

    identity = identity or CallerIdentity.current()
    results = await _probe_all(filesystem, directory, names, probe_timeout)

    filtered = []
    for name, stats in zip(names, results):
        out = classify_entry(name, stats, options, identity)
        if out is not None:
            filtered.append(out)
    return filtered


def readdir_sync(
    directory: Path | str,
    options: ListingOptions | None = None,
    *,
    filesystem: FileSystem | None = None,
    identity: CallerIdentity | None = None,
) -> list[str]:
    """Synchronous variant of ``readdir``.

    Entries are stat'ed one at a time, in listing order. A failing stat
    drops that entry and the listing continues.

    Raises:
        DirectoryReadError: If the directory cannot be listed.
    """
    options = options or ListingOptions()
    filesystem = filesystem or RealFileSystem()
    directory = Path(directory)

    names = _list_names(filesystem, directory)
    if not options.needs_metadata:
        return names

    identity = identity or CallerIdentity.current()
    filtered = []
    for name in names:
        stats = _probe_sync(filesystem, directory / name)
        out = classify_entry(name, stats, options, identity)
        if out is not None:
            filtered.append(out)
    return filtered


async def scan_entries(
    directory: Path | str,
    *,
    filesystem: FileSystem | None = None,
    identity: CallerIdentity | None = None,
    probe_timeout: float | None = None,
) -> list[DirectoryEntry]:
    """List a directory with resolved metadata for every entry.

    Entries whose stat fails are kept with kind UNKNOWN.

    Raises:
        DirectoryReadError: If the directory cannot be listed.
    """
    filesystem = filesystem or RealFileSystem()
    identity = identity or CallerIdentity.current()
    directory = Path(directory)

    names = await asyncio.to_thread(_list_names, filesystem, directory)
    results = await _probe_all(filesystem, directory, names, probe_timeout)
    return [probe_entry(name, stats, identity) for name, stats in zip(names, results)]


def scan_entries_sync(
    directory: Path | str,
    *,
    filesystem: FileSystem | None = None,
    identity: CallerIdentity | None = None,
) -> list[DirectoryEntry]:
    """Synchronous variant of ``scan_entries``."""
    filesystem = filesystem or RealFileSystem()
    identity = identity or CallerIdentity.current()
    directory = Path(directory)

    return [
        probe_entry(name, _probe_sync(filesystem, directory / name), identity)
        for name in _list_names(filesystem, directory)
    ]
