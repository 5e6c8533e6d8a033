"""Filesystem convenience toolkit."""

__version__ = "0.1.0"

from fs_kit.errors import (
    DirectoryReadError,
    FsKitError,
    MetadataProbeError,
    NotFoundError,
    PathResolutionError,
)
from fs_kit.listing import readdir, readdir_sync, scan_entries, scan_entries_sync
from fs_kit.options import ListingOptions
from fs_kit.permissions import stats_has_exe
from fs_kit.protocols import FileSystem
from fs_kit.search import recursive_parent_search, recursive_parent_search_sync
from fs_kit.types import CallerIdentity, DirectoryEntry, EntryKind, FilterMode

__all__ = [
    "__version__",
    "CallerIdentity",
    "DirectoryEntry",
    "DirectoryReadError",
    "EntryKind",
    "FileSystem",
    "FilterMode",
    "FsKitError",
    "ListingOptions",
    "MetadataProbeError",
    "NotFoundError",
    "PathResolutionError",
    "readdir",
    "readdir_sync",
    "recursive_parent_search",
    "recursive_parent_search_sync",
    "scan_entries",
    "scan_entries_sync",
    "stats_has_exe",
]
