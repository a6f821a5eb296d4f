"""
File digests for manifest records.

Files are streamed in fixed-size chunks so arbitrarily large binary
payloads never have to fit in memory.
"""

from __future__ import annotations

import hashlib
from enum import Enum
from pathlib import Path
from typing import Iterable

from bagfixity.core.errors import UnsupportedAlgorithmError

CHUNK_SIZE = 1024 * 1024


class DigestAlgorithm(str, Enum):
    """Digest algorithms that can appear in a manifest file name."""

    SHA1 = "sha1"
    MD5 = "md5"
    SHA256 = "sha256"
    SHA512 = "sha512"


SUPPORTED_ALGORITHMS: tuple[str, ...] = tuple(a.value for a in DigestAlgorithm)


def is_supported_algorithm(token: str) -> bool:
    """Check whether a manifest algorithm token names a known digest."""
    return token.lower() in SUPPORTED_ALGORITHMS


def _new_hasher(algorithm: str):
    name = str(getattr(algorithm, "value", algorithm)).lower()
    if name not in SUPPORTED_ALGORITHMS:
        raise UnsupportedAlgorithmError(name, SUPPORTED_ALGORITHMS)
    return name, hashlib.new(name)


def compute_digests(algorithms: Iterable[str], path: str | Path) -> dict[str, str]:
    """
    Compute several digests of a file with a single read.

    Args:
        algorithms: Algorithm names (see DigestAlgorithm).
        path: File to digest.

    Returns:
        Hex digest by algorithm name.

    Raises:
        UnsupportedAlgorithmError: If an algorithm is unknown.
        FileNotFoundError: If the file does not exist.
        OSError: If the file cannot be read.
    """
    hashers = dict(_new_hasher(a) for a in algorithms)
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(CHUNK_SIZE), b""):
            for hasher in hashers.values():
                hasher.update(chunk)
    return {name: hasher.hexdigest() for name, hasher in hashers.items()}


def compute_digest(algorithm: str, path: str | Path) -> str:
    """
    Compute the hex digest of a file's full contents.

    Args:
        algorithm: One of sha1, md5, sha256, sha512.
        path: File to digest.

    Returns:
        Lowercase hex digest.
    """
    name, _ = _new_hasher(algorithm)
    return compute_digests([name], path)[name]
