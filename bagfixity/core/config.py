"""
Bag configuration.

A single explicit configuration value describes where a bag lives and how
its declaration files are named. Components receive it (through a Bag)
instead of reading shared state.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ManifestSelector(str, Enum):
    """Algorithm selector accepted by manifest generation."""

    SHA1 = "sha1"
    MD5 = "md5"
    SHA256 = "sha256"
    SHA512 = "sha512"
    DEFAULT = "default"


class BagConfig(BaseModel):
    """Location and layout of a bag on disk."""

    model_config = ConfigDict(frozen=True)

    root: Path = Field(description="Bag root directory")
    payload_dir: str = Field(
        default="data", description="Payload directory, relative to the root"
    )
    bag_info_name: str = Field(
        default="bag-info.txt", description="Bag metadata declaration file"
    )
    bagit_name: str = Field(
        default="bagit.txt", description="BagIt version declaration file"
    )
    algorithm: ManifestSelector = Field(
        default=ManifestSelector.DEFAULT,
        description="Default selector for payload manifest generation",
    )

    @property
    def payload_path(self) -> Path:
        return self.root / self.payload_dir

    @property
    def bag_info_path(self) -> Path:
        return self.root / self.bag_info_name

    @property
    def bagit_path(self) -> Path:
        return self.root / self.bagit_name

    @classmethod
    def from_yaml(cls, path: str | Path, root: str | Path | None = None) -> BagConfig:
        """
        Load bag configuration from a YAML file.

        Expected format:
        ```yaml
        root: /archive/bags/2024-001
        payload_dir: data
        algorithm: sha256
        ```

        Args:
            path: Path to YAML file.
            root: Optional bag root overriding the one in the file.

        Returns:
            Loaded BagConfig.
        """
        import yaml

        content = Path(path).read_text(encoding="utf-8")
        data: dict[str, Any] = yaml.safe_load(content) or {}
        if root is not None:
            data["root"] = root
        return cls.model_validate(data)
