"""Core utilities: configuration, bag layout, path encoding, digests, errors."""

from bagfixity.core.bag import Bag, DirectoryBag
from bagfixity.core.config import BagConfig, ManifestSelector
from bagfixity.core.digest import DigestAlgorithm, compute_digest, compute_digests
from bagfixity.core.errors import (
    BagError,
    DuplicateTagFileError,
    ManifestFormatError,
    TagFileConflictError,
    UnknownTagFileError,
    UnsupportedAlgorithmError,
)
from bagfixity.core.path_codec import (
    decode_path,
    encode_path,
    relative_bag_path,
    resolve_recorded_path,
)

__all__ = [
    "Bag",
    "DirectoryBag",
    "BagConfig",
    "ManifestSelector",
    "DigestAlgorithm",
    "compute_digest",
    "compute_digests",
    "BagError",
    "DuplicateTagFileError",
    "ManifestFormatError",
    "TagFileConflictError",
    "UnknownTagFileError",
    "UnsupportedAlgorithmError",
    "decode_path",
    "encode_path",
    "relative_bag_path",
    "resolve_recorded_path",
]
