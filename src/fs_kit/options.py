"""Listing options."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from fs_kit.types import FilterMode


class ListingOptions(BaseModel):
    """Options for a filtered directory listing.

    ``files``, ``directories`` and ``exe`` are tri-state: None leaves the
    axis unfiltered, True requires it, False excludes it.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    slash: bool = False
    files: bool | None = None
    directories: bool | None = None
    exe: bool | None = None

    @property
    def files_mode(self) -> FilterMode:
        """Filter mode for regular files."""
        return FilterMode.from_flag(self.files)

    @property
    def directories_mode(self) -> FilterMode:
        """Filter mode for directories."""
        return FilterMode.from_flag(self.directories)

    @property
    def exe_mode(self) -> FilterMode:
        """Filter mode for file executability."""
        return FilterMode.from_flag(self.exe)

    @property
    def needs_metadata(self) -> bool:
        """True when filtering requires a metadata probe per entry."""
        return (
            self.slash
            or self.files is not None
            or self.directories is not None
            or self.exe is not None
        )
