"""Shared data types for fs-kit."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum

__all__ = ["CallerIdentity", "DirectoryEntry", "EntryKind", "FilterMode"]


class EntryKind(str, Enum):
    """Resolved type of a directory entry."""

    FILE = "file"
    DIRECTORY = "directory"
    OTHER = "other"
    UNKNOWN = "unknown"


class FilterMode(str, Enum):
    """Filtering mode for one listing axis."""

    UNFILTERED = "unfiltered"
    REQUIRE_TRUE = "require_true"
    REQUIRE_FALSE = "require_false"

    @classmethod
    def from_flag(cls, flag: bool | None) -> FilterMode:
        """Convert a tri-state flag (None/True/False) to a filter mode."""
        if flag is None:
            return cls.UNFILTERED
        return cls.REQUIRE_TRUE if flag else cls.REQUIRE_FALSE

    def accepts(self, value: bool) -> bool:
        """Check whether a boolean property passes this filter."""
        if self is FilterMode.UNFILTERED:
            return True
        return value == (self is FilterMode.REQUIRE_TRUE)


@dataclass(frozen=True)
class CallerIdentity:
    """Effective user and primary group of the caller.

    Attributes:
        uid: Effective user id, None without a permission-bit model.
        gid: Primary group id, None without a permission-bit model.
    """

    uid: int | None
    gid: int | None

    @property
    def has_permission_model(self) -> bool:
        """True when uid/gid checks are meaningful on this platform."""
        return self.uid is not None and self.gid is not None

    @classmethod
    def current(cls) -> CallerIdentity:
        """Read the identity of the running process."""
        if not hasattr(os, "geteuid"):
            return cls(uid=None, gid=None)
        return cls(uid=os.geteuid(), gid=os.getgid())


@dataclass
class DirectoryEntry:
    """A directory entry with its resolved metadata.

    Attributes:
        name: Entry name as returned by the listing.
        kind: Resolved entry type (UNKNOWN when the probe failed).
        executable: Executability for files, None otherwise.
    """

    name: str
    kind: EntryKind = EntryKind.UNKNOWN
    executable: bool | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.name:
            raise ValueError("name cannot be empty")
        if self.executable is not None and self.kind is not EntryKind.FILE:
            raise ValueError("executable is only meaningful for files")
