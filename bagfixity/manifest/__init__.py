"""Manifest system: stores, generators, tag file management, fixity checks."""

from bagfixity.manifest.bag_manifests import BagManifests
from bagfixity.manifest.fixity import FailureKind, FixityChecker, FixityFailure, FixityReport
from bagfixity.manifest.generator import ManifestGenerator, TagManifestGenerator
from bagfixity.manifest.hash import compare_manifest_sets, compute_manifest_set_hash
from bagfixity.manifest.store import ManifestRecord, ManifestStore, TagManifestStore
from bagfixity.manifest.tag_files import TagFileManager

__all__ = [
    "BagManifests",
    "FailureKind",
    "FixityChecker",
    "FixityFailure",
    "FixityReport",
    "ManifestGenerator",
    "TagManifestGenerator",
    "compare_manifest_sets",
    "compute_manifest_set_hash",
    "ManifestRecord",
    "ManifestStore",
    "TagManifestStore",
    "TagFileManager",
]
