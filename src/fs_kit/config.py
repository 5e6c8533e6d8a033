"""Configuration loading."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from fs_kit.errors import ConfigError
from fs_kit.options import ListingOptions

# Default config location
CONFIG_DIR = Path.home() / ".fs-kit"
CONFIG_FILE = "config.yaml"


class FsKitConfig(BaseModel):
    """User configuration for fs-kit."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    probe_timeout: float | None = Field(default=None, gt=0, alias="probeTimeout")
    max_busy_tries: int = Field(default=3, ge=0, alias="maxBusyTries")
    listing: ListingOptions = Field(default_factory=ListingOptions)

    @classmethod
    def default_path(cls) -> Path:
        """Location of the user config file."""
        return CONFIG_DIR / CONFIG_FILE

    @classmethod
    def from_file(cls, path: Path) -> FsKitConfig:
        """Load configuration from a YAML file.

        A missing file yields the defaults.

        Args:
            path: Path to the YAML file.

        Returns:
            Parsed configuration.

        Raises:
            ConfigError: If the YAML or any value is invalid.
        """
        if not path.exists():
            return cls()

        try:
            data = yaml.safe_load(path.read_text()) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Config in {path} must be a mapping")

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid config in {path}: {e}") from e

    def to_yaml(self) -> str:
        """Serialize to YAML using the file's key names."""
        data = self.model_dump(by_alias=True)
        return yaml.dump(data, default_flow_style=False, sort_keys=False)
