"""
Manifest-set fingerprints.

A short hash over every manifest and tag manifest of a bag, for telling
whether two bags (or one bag at two points in time) record the same
checksums.
"""

from __future__ import annotations

from pathlib import Path

import xxhash

from bagfixity.manifest.store import ManifestStore, TagManifestStore


def _manifest_files(bag_root: Path) -> list[Path]:
    files = ManifestStore(bag_root).list_files() + TagManifestStore(bag_root).list_files()
    return sorted(files, key=lambda p: p.name)


def compute_manifest_set_hash(bag_root: str | Path) -> str:
    """
    Compute a hash of all manifest files of a bag.

    File names and contents are both hashed, in name order.

    Args:
        bag_root: Bag root directory.

    Returns:
        Hex-encoded hash string.
    """
    hasher = xxhash.xxh64()
    for path in _manifest_files(Path(bag_root)):
        hasher.update(path.name.encode("utf-8"))
        hasher.update(b"\0")
        with open(path, "rb") as f:
            for chunk in iter(lambda: f.read(65536), b""):
                hasher.update(chunk)
        hasher.update(b"\0")
    return hasher.hexdigest()


def compare_manifest_sets(
    bag_root_a: str | Path,
    bag_root_b: str | Path,
) -> dict[str, bool]:
    """
    Compare the manifests of two bags.

    Returns:
        Dict of comparison results by component.
    """
    root_a, root_b = Path(bag_root_a), Path(bag_root_b)

    def names(store_cls: type, root: Path) -> list[str]:
        return [p.name for p in store_cls(root).list_files()]

    return {
        "manifest_names_match": names(ManifestStore, root_a) == names(ManifestStore, root_b),
        "tagmanifest_names_match": names(TagManifestStore, root_a)
        == names(TagManifestStore, root_b),
        "overall_hash_match": compute_manifest_set_hash(root_a)
        == compute_manifest_set_hash(root_b),
    }
