"""Upward search for a file or directory in parent directories."""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path

from fs_kit.errors import NotFoundError, PathResolutionError
from fs_kit.filesystem import RealFileSystem
from fs_kit.protocols import FileSystem

logger = logging.getLogger(__name__)

_SEPARATORS = os.sep + (os.altsep or "")


def _split_arguments(
    start: Path | str, target: Path | str | None
) -> tuple[str, str]:
    """Split the one-argument form into (dirname, basename)."""
    start = os.fspath(start)
    if target is None:
        stripped = start.rstrip(_SEPARATORS) or start[:1]
        return os.path.dirname(stripped), os.path.basename(stripped)
    return start, os.fspath(target)


def _normalize_target(target: str) -> str:
    """Make the target relative, so it is joined under each ancestor."""
    _, target = os.path.splitdrive(target)
    return os.path.normpath(target.lstrip(_SEPARATORS))


def _resolve_start(filesystem: FileSystem, start: str) -> Path:
    if not os.path.isabs(start):
        start = os.path.join(os.getcwd(), start)
    start = os.path.normpath(start)
    try:
        return filesystem.realpath(Path(start))
    except OSError as e:
        raise PathResolutionError(start, e.strerror or str(e)) from e


def _candidates(directory: Path, target: str):
    """Yield ``directory/target`` for the directory and each of its parents."""
    current = str(directory)
    while True:
        yield Path(os.path.normpath(os.path.join(current, target)))
        parent = os.path.dirname(current)
        if parent == current:
            return
        current = parent


def recursive_parent_search_sync(
    start: Path | str,
    target: Path | str | None = None,
    *,
    filesystem: FileSystem | None = None,
) -> Path:
    """Find the nearest ancestor of ``start`` that contains ``target``.

    With a single argument, ``start`` is split: its basename becomes the
    target and its dirname the starting directory. With two arguments both
    are taken literally.

    Args:
        start: Starting directory (absolute or relative to the cwd).
        target: Relative path to look for.
        filesystem: Filesystem backend. Defaults to RealFileSystem.

    Returns:
        Canonical path of the first existing candidate.

    Raises:
        PathResolutionError: If the starting directory cannot be resolved.
        NotFoundError: If no ancestor up to the root contains the target.
    """
    filesystem = filesystem or RealFileSystem()
    start_str, target_str = _split_arguments(start, target)
    target_str = _normalize_target(target_str)
    directory = _resolve_start(filesystem, start_str)

    for candidate in _candidates(directory, target_str):
        logger.debug("Trying %s", candidate)
        if filesystem.exists(candidate):
            return candidate
    raise NotFoundError(directory, target_str)


async def recursive_parent_search(
    start: Path | str,
    target: Path | str | None = None,
    *,
    filesystem: FileSystem | None = None,
) -> Path:
    """Async variant of ``recursive_parent_search_sync``.

    Each existence test runs in a worker thread, one after the other.
    """
    filesystem = filesystem or RealFileSystem()
    start_str, target_str = _split_arguments(start, target)
    target_str = _normalize_target(target_str)
    directory = await asyncio.to_thread(_resolve_start, filesystem, start_str)

    for candidate in _candidates(directory, target_str):
        logger.debug("Trying %s", candidate)
        if await asyncio.to_thread(filesystem.exists, candidate):
            return candidate
    raise NotFoundError(directory, target_str)
