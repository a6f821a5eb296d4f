"""
Manifest operations for one bag, wired together.
"""

from __future__ import annotations

from pathlib import Path

from bagfixity.core.bag import Bag, DirectoryBag
from bagfixity.core.config import BagConfig, ManifestSelector
from bagfixity.manifest.fixity import FixityChecker, FixityReport
from bagfixity.manifest.generator import ManifestGenerator, TagManifestGenerator
from bagfixity.manifest.hash import compute_manifest_set_hash
from bagfixity.manifest.store import ManifestStore, TagManifestStore
from bagfixity.manifest.tag_files import ContentWriter, TagFileManager


class BagManifests:
    """
    Entry point for manifest generation, tag file changes and fixity checks.

    All components share the same stores so they agree on file locations.
    Mutating calls must not run concurrently against the same bag.
    """

    def __init__(self, bag: Bag, default_algorithm: str | ManifestSelector | None = None):
        self.bag = bag
        self.default_algorithm = default_algorithm or ManifestSelector.DEFAULT

        root = bag.bag_root()
        self.manifest_store = ManifestStore(root)
        self.tag_store = TagManifestStore(root)
        self.tag_generator = TagManifestGenerator(bag, self.manifest_store, self.tag_store)
        self.generator = ManifestGenerator(bag, self.tag_generator, self.manifest_store)
        self.tag_files = TagFileManager(bag, self.tag_generator)
        self.checker = FixityChecker(bag, self.manifest_store, self.tag_store)

    @classmethod
    def from_config(cls, config: BagConfig) -> BagManifests:
        return cls(DirectoryBag(config), default_algorithm=config.algorithm)

    @classmethod
    def from_path(cls, root: str | Path) -> BagManifests:
        return cls.from_config(BagConfig(root=Path(root)))

    def manifest(self, algorithm: str | ManifestSelector | None = None) -> None:
        self.generator.manifest(algorithm or self.default_algorithm)

    def tagmanifest(self, tags: list[Path] | None = None) -> list[Path]:
        return self.tag_generator.tagmanifest(tags)

    def add_tag_file(
        self,
        path: str | Path,
        source_path: str | Path | None = None,
        content_writer: ContentWriter | None = None,
    ) -> list[Path]:
        return self.tag_files.add_tag_file(path, source_path, content_writer)

    def remove_tag_file(self, path: str | Path) -> list[Path]:
        return self.tag_files.remove_tag_file(path)

    def delete_tag_file(self, path: str | Path) -> list[Path]:
        return self.tag_files.delete_tag_file(path)

    def check(self) -> FixityReport:
        return self.checker.check()

    def is_fixed(self) -> bool:
        return self.checker.is_fixed()

    def manifest_files(self) -> list[Path]:
        return self.manifest_store.list_files()

    def tagmanifest_files(self) -> list[Path]:
        return self.tag_store.list_files()

    def fingerprint(self) -> str:
        """Hash of the current manifest and tag manifest contents."""
        return compute_manifest_set_hash(self.bag.bag_root())
