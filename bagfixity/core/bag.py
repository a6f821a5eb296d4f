"""
Bag collaborator interface and the directory-backed implementation.

The manifest layer only needs to know where the bag is, which payload and
tag files it has, and where the two declaration files live.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Protocol, Sequence, runtime_checkable

from bagfixity.core.config import BagConfig
from bagfixity.core.path_codec import resolve_recorded_path

BAGIT_VERSION = "0.97"
TRACKING_TAGMANIFEST = "tagmanifest-sha1.txt"


@runtime_checkable
class Bag(Protocol):
    """Capabilities a bag must expose to the manifest layer."""

    def bag_root(self) -> Path: ...

    def payload_files(self) -> Sequence[Path]: ...

    def tag_files(self) -> list[Path]: ...

    def bag_info_path(self) -> Path: ...

    def bagit_declaration_path(self) -> Path: ...


class DirectoryBag:
    """
    A bag laid out on the local filesystem.

    Structure:
        root/
            bagit.txt
            bag-info.txt
            manifest-<algorithm>.txt
            tagmanifest-<algorithm>.txt
            data/                # payload
                ...

    The tracked tag files are the entries recorded in the tag manifest, so
    the tracked set survives between processes.
    """

    def __init__(self, config: BagConfig):
        self.config = config

    @classmethod
    def from_path(cls, root: str | Path) -> DirectoryBag:
        """Open a bag with the default layout."""
        return cls(BagConfig(root=Path(root)))

    @classmethod
    def create(
        cls,
        config: BagConfig,
        info: dict[str, str] | None = None,
    ) -> DirectoryBag:
        """
        Create the bag directories and declaration files.

        Existing declaration files are left untouched.

        Args:
            config: Bag configuration.
            info: Extra bag-info fields.

        Returns:
            DirectoryBag for the new bag.
        """
        from bagfixity import __version__

        bag = cls(config)
        config.payload_path.mkdir(parents=True, exist_ok=True)

        if not config.bagit_path.exists():
            with config.bagit_path.open("w", encoding="utf-8", newline="\n") as f:
                f.write(f"BagIt-Version: {BAGIT_VERSION}\n")
                f.write("Tag-File-Character-Encoding: UTF-8\n")

        if not config.bag_info_path.exists():
            fields = {
                "Bag-Software-Agent": f"bagfixity v{__version__}",
                "Bagging-Date": date.today().isoformat(),
            }
            fields.update(info or {})
            with config.bag_info_path.open("w", encoding="utf-8", newline="\n") as f:
                for key, value in fields.items():
                    f.write(f"{key}: {value}\n")

        return bag

    def bag_root(self) -> Path:
        return self.config.root

    def payload_files(self) -> list[Path]:
        payload_dir = self.config.payload_path
        if not payload_dir.is_dir():
            return []
        return sorted(p for p in payload_dir.rglob("*") if p.is_file())

    def tag_files(self) -> list[Path]:
        """Tag files currently listed in the tag manifest, in file order."""
        from bagfixity.manifest.store import TagManifestStore

        store = TagManifestStore(self.config.root)
        tracking = self.config.root / TRACKING_TAGMANIFEST
        if not tracking.is_file():
            candidates = store.list_files()
            if not candidates:
                return []
            tracking = candidates[0]

        files: list[Path] = []
        for record in store.read(tracking):
            path = resolve_recorded_path(self.config.root, record.path)
            if path not in files:
                files.append(path)
        return files

    def bag_info_path(self) -> Path:
        return self.config.bag_info_path

    def bagit_declaration_path(self) -> Path:
        return self.config.bagit_path
