"""
Manifest file storage.

One plain-text file per algorithm, one ``"<digest> <encoded-path>"`` record
per line. Stores never patch records in place: regeneration clears every
file and appends from scratch.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path

from bagfixity.core.errors import ManifestFormatError, UnsupportedAlgorithmError

logger = logging.getLogger(__name__)

# Undecodable file-name bytes round-trip through the text layer
ENCODING = "utf-8"
ENCODING_ERRORS = "surrogateescape"


@dataclass(frozen=True)
class ManifestRecord:
    """A single manifest line."""

    digest: str
    path: str  # PathCodec-encoded, relative to the bag root

    def to_line(self) -> str:
        return f"{self.digest} {self.path}\n"

    @classmethod
    def from_line(cls, line: str) -> ManifestRecord:
        """
        Parse a manifest line.

        Raises:
            ManifestFormatError: If the line lacks a digest or a path.
        """
        parts = line.rstrip("\r\n").split(None, 1)
        if len(parts) != 2:
            raise ManifestFormatError(line)
        return cls(digest=parts[0], path=parts[1])


class BaseManifestStore:
    """
    Manifest files of one kind directly under a bag root.

    Subclasses set FILE_PREFIX and, when the algorithm set is fixed,
    ALGORITHMS.
    """

    FILE_PREFIX: str = ""
    ALGORITHMS: tuple[str, ...] | None = None

    def __init__(self, bag_root: str | Path):
        self.bag_root = Path(bag_root)
        self._pattern = re.compile(rf"^{re.escape(self.FILE_PREFIX)}-(.+)\.txt$")

    def list_files(self) -> list[Path]:
        """All manifest files of this kind, sorted by name."""
        if not self.bag_root.is_dir():
            return []
        return sorted(
            p
            for p in self.bag_root.iterdir()
            if p.is_file() and self._pattern.match(p.name)
        )

    def path_for(self, algorithm: str) -> Path:
        return self.bag_root / f"{self.FILE_PREFIX}-{algorithm}.txt"

    def algorithm_of(self, path: str | Path) -> str | None:
        """Algorithm token from a manifest file name, or None if it is not one."""
        match = self._pattern.match(Path(path).name)
        return match.group(1) if match else None

    def clear(self) -> int:
        """
        Delete every manifest file of this kind.

        Returns:
            Number of files removed.
        """
        files = self.list_files()
        for path in files:
            path.unlink()
        if files:
            logger.debug("Removed %d %s file(s) from %s", len(files), self.FILE_PREFIX, self.bag_root)
        return len(files)

    def append(self, algorithm: str, encoded_path: str, digest: str) -> None:
        """Append one record, creating the manifest file if absent."""
        if self.ALGORITHMS is not None and algorithm not in self.ALGORITHMS:
            raise UnsupportedAlgorithmError(algorithm, self.ALGORITHMS)

        record = ManifestRecord(digest=digest, path=encoded_path)
        with open(
            self.path_for(algorithm),
            "a",
            encoding=ENCODING,
            errors=ENCODING_ERRORS,
            newline="\n",
        ) as f:
            f.write(record.to_line())

    def read(self, path: str | Path) -> list[ManifestRecord]:
        """
        Read all records of a manifest file.

        Blank lines are ignored.

        Raises:
            ManifestFormatError: On a malformed line.
            OSError: If the file cannot be read.
        """
        records = []
        with open(path, "r", encoding=ENCODING, errors=ENCODING_ERRORS, newline="\n") as f:
            for line in f:
                if not line.strip():
                    continue
                try:
                    records.append(ManifestRecord.from_line(line))
                except ManifestFormatError as e:
                    raise ManifestFormatError(line, path) from e
        return records


class ManifestStore(BaseManifestStore):
    """Payload manifests: ``manifest-<algorithm>.txt``."""

    FILE_PREFIX = "manifest"


class TagManifestStore(BaseManifestStore):
    """Tag manifests: ``tagmanifest-<algorithm>.txt``, SHA-1 and MD5 only."""

    FILE_PREFIX = "tagmanifest"
    ALGORITHMS = ("sha1", "md5")
