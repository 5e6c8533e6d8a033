"""Permission-bit helpers."""

from __future__ import annotations

import os
import stat

from fs_kit.types import CallerIdentity


def stats_has_exe(stats: os.stat_result, identity: CallerIdentity | None = None) -> bool:
    """Check whether the caller may execute a file.

    A file is executable when the "other" execute bit is set, or when the
    group execute bit is set and the caller's primary group owns the file,
    or when the owner execute bit is set and the caller owns the file. A
    zero uid/gid on the file counts as a match.

    Args:
        stats: Result of ``os.stat`` for the file.
        identity: Caller identity. Defaults to the running process.

    Returns:
        True if executable. Always True without a permission-bit model.
    """
    if identity is None:
        identity = CallerIdentity.current()
    if not identity.has_permission_model:
        return True

    mode = stats.st_mode
    if mode & stat.S_IXOTH:
        return True

    group_match = not stats.st_gid or identity.gid == stats.st_gid
    if group_match and mode & stat.S_IXGRP:
        return True

    owner_match = not stats.st_uid or identity.uid == stats.st_uid
    return bool(owner_match and mode & stat.S_IXUSR)
