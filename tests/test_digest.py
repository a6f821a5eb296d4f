"""Tests for file digests."""

import hashlib
from pathlib import Path

import pytest

from bagfixity.core.digest import (
    CHUNK_SIZE,
    SUPPORTED_ALGORITHMS,
    DigestAlgorithm,
    compute_digest,
    compute_digests,
    is_supported_algorithm,
)
from bagfixity.core.errors import UnsupportedAlgorithmError


class TestComputeDigest:
    """Tests for single-algorithm digests."""

    def test_empty_file_known_values(self, tmp_path: Path):
        """Empty files have well-known digests."""
        path = tmp_path / "empty"
        path.write_bytes(b"")
        assert compute_digest("sha1", path) == "da39a3ee5e6b4b0d3255bfef95601890afd80709"
        assert compute_digest("md5", path) == "d41d8cd98f00b204e9800998ecf8427e"

    @pytest.mark.parametrize("algorithm", SUPPORTED_ALGORITHMS)
    def test_matches_hashlib(self, tmp_path: Path, algorithm: str):
        """Digests should match hashlib over the full content."""
        content = b"\x00\xffbinary\r\ncontent" * 100
        path = tmp_path / "blob.bin"
        path.write_bytes(content)
        assert compute_digest(algorithm, path) == hashlib.new(algorithm, content).hexdigest()

    def test_large_file_spans_chunks(self, tmp_path: Path):
        """Files larger than one chunk should be fully digested."""
        content = b"a" * (CHUNK_SIZE + 17)
        path = tmp_path / "large.bin"
        path.write_bytes(content)
        assert compute_digest("sha256", path) == hashlib.sha256(content).hexdigest()

    def test_accepts_enum(self, tmp_path: Path):
        """DigestAlgorithm members should be accepted."""
        path = tmp_path / "f"
        path.write_bytes(b"x")
        assert compute_digest(DigestAlgorithm.MD5, path) == hashlib.md5(b"x").hexdigest()

    def test_missing_file(self, tmp_path: Path):
        """Missing files should raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            compute_digest("sha1", tmp_path / "missing")

    def test_unknown_algorithm(self, tmp_path: Path):
        """Unknown algorithms should be rejected."""
        path = tmp_path / "f"
        path.write_bytes(b"x")
        with pytest.raises(UnsupportedAlgorithmError):
            compute_digest("crc32", path)


class TestComputeDigests:
    """Tests for multi-algorithm digests."""

    def test_single_read_multiple_algorithms(self, tmp_path: Path):
        """All requested digests should be returned by name."""
        path = tmp_path / "f"
        path.write_bytes(b"hello world\n")
        digests = compute_digests(["sha1", "md5"], path)
        assert digests == {
            "sha1": hashlib.sha1(b"hello world\n").hexdigest(),
            "md5": hashlib.md5(b"hello world\n").hexdigest(),
        }


class TestIsSupportedAlgorithm:
    """Tests for algorithm token recognition."""

    def test_case_insensitive(self):
        assert is_supported_algorithm("SHA1")
        assert is_supported_algorithm("Md5")

    def test_unknown(self):
        assert not is_supported_algorithm("blake2b")
