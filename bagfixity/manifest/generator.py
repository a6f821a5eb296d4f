"""
Manifest generation for payload and tag files.

Payload manifests are rebuilt from the bag's payload files, then the tag
manifests are rebuilt so they list the fresh payload manifests. Tag
manifest regeneration gathers every candidate file first and digests each
one exactly once, so it never re-enters itself.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from bagfixity.core.bag import Bag
from bagfixity.core.config import ManifestSelector
from bagfixity.core.digest import compute_digests
from bagfixity.core.errors import UnsupportedAlgorithmError
from bagfixity.core.path_codec import encode_path, relative_bag_path
from bagfixity.manifest.store import ManifestStore, TagManifestStore

logger = logging.getLogger(__name__)

# sha512 writes SHA-256 manifests for compatibility with existing bags.
SELECTOR_ALGORITHMS: dict[str, tuple[str, ...]] = {
    ManifestSelector.SHA1.value: ("sha1",),
    ManifestSelector.MD5.value: ("md5",),
    ManifestSelector.SHA256.value: ("sha256",),
    ManifestSelector.SHA512.value: ("sha256",),
    ManifestSelector.DEFAULT.value: ("sha1", "md5"),
}


def resolve_selector(algorithm: str | ManifestSelector) -> tuple[str, ...]:
    """
    Map a manifest selector to the digest algorithms it writes.

    Raises:
        UnsupportedAlgorithmError: If the selector is unknown.
    """
    key = algorithm.value if isinstance(algorithm, ManifestSelector) else algorithm
    try:
        return SELECTOR_ALGORITHMS[key]
    except KeyError:
        raise UnsupportedAlgorithmError(key, tuple(SELECTOR_ALGORITHMS)) from None


class TagManifestGenerator:
    """Rebuilds ``tagmanifest-*.txt`` from the tracked tag files."""

    def __init__(
        self,
        bag: Bag,
        manifest_store: ManifestStore | None = None,
        tag_store: TagManifestStore | None = None,
    ):
        self.bag = bag
        self.manifest_store = manifest_store or ManifestStore(bag.bag_root())
        self.tag_store = tag_store or TagManifestStore(bag.bag_root())

    def working_set(self, tags: Iterable[str | Path]) -> list[Path]:
        """
        Tag files plus every payload manifest and both declaration files.

        Entries are deduplicated by exact path and keep first-seen order.
        Payload manifests that no longer exist are dropped from the tags
        since the current ones are folded in afterwards.
        """
        root = self.bag.bag_root()
        candidates: list[Path] = []
        extras = [
            *self.manifest_store.list_files(),
            self.bag.bag_info_path(),
            self.bag.bagit_declaration_path(),
        ]
        for path in [*(Path(t) for t in tags), *extras]:
            stale_manifest = (
                path.parent == Path(root)
                and self.manifest_store.algorithm_of(path) is not None
                and not path.exists()
            )
            if stale_manifest:
                continue
            if path not in candidates:
                candidates.append(path)
        return candidates

    def tagmanifest(self, tags: Iterable[str | Path] | None = None) -> list[Path]:
        """
        Regenerate all tag manifests.

        Every file is digested before the old tag manifests are removed, so a
        missing or unreadable tag file leaves them untouched.

        Args:
            tags: Tag files to track, as bag paths. Defaults to the bag's
                currently tracked tag files. The given sequence is not modified.

        Returns:
            The new tracked tag-file set.
        """
        tags = list(self.bag.tag_files() if tags is None else tags)

        tracked = self.working_set(tags)
        entries = [self._digest(path) for path in tracked]

        self.tag_store.clear()
        for rel_path, digests in entries:
            self._write(rel_path, digests)

        logger.info("Wrote tag manifests for %d file(s) in %s", len(tracked), self.bag.bag_root())
        return tracked

    def record(self, path: str | Path) -> None:
        """Append SHA-1 and MD5 records for one existing tag file."""
        self._write(*self._digest(path))

    def _digest(self, path: str | Path) -> tuple[str, dict[str, str]]:
        rel_path = encode_path(relative_bag_path(self.bag.bag_root(), path))
        return rel_path, compute_digests(self.tag_store.ALGORITHMS, path)

    def _write(self, rel_path: str, digests: dict[str, str]) -> None:
        for algorithm in self.tag_store.ALGORITHMS:
            self.tag_store.append(algorithm, rel_path, digests[algorithm])
        logger.debug("Recorded tag file %s", rel_path)


class ManifestGenerator:
    """Rebuilds ``manifest-*.txt`` from the bag's payload files."""

    def __init__(
        self,
        bag: Bag,
        tag_generator: TagManifestGenerator | None = None,
        store: ManifestStore | None = None,
    ):
        self.bag = bag
        self.store = store or ManifestStore(bag.bag_root())
        self.tag_generator = tag_generator or TagManifestGenerator(
            bag, manifest_store=self.store
        )

    def manifest(self, algorithm: str | ManifestSelector = ManifestSelector.DEFAULT) -> None:
        """
        Regenerate all payload manifests, then the tag manifests.

        Args:
            algorithm: Selector: sha1, md5, sha256, sha512 or default
                (SHA-1 and MD5).

        Raises:
            UnsupportedAlgorithmError: If the selector is unknown. Nothing on
                disk is touched in that case.
        """
        algorithms = resolve_selector(algorithm)
        if algorithm == ManifestSelector.SHA512:
            logger.warning("Selector 'sha512' writes SHA-256 manifests (manifest-sha256.txt)")

        root = self.bag.bag_root()
        self.store.clear()

        count = 0
        for path in self.bag.payload_files():
            rel_path = encode_path(relative_bag_path(root, path))
            digests = compute_digests(algorithms, path)
            for name in algorithms:
                self.store.append(name, rel_path, digests[name])
            count += 1

        logger.info(
            "Wrote %s manifest(s) for %d payload file(s) in %s",
            "/".join(algorithms),
            count,
            root,
        )
        self.tag_generator.tagmanifest()
