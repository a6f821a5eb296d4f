"""
Fixity checking.

Recomputes every recorded digest in every manifest and tag manifest and
compares it with the recorded value. Problems are collected into a report
rather than raised.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from bagfixity.core.bag import Bag
from bagfixity.core.digest import compute_digest, is_supported_algorithm
from bagfixity.core.errors import ManifestFormatError
from bagfixity.core.path_codec import resolve_recorded_path
from bagfixity.manifest.store import BaseManifestStore, ManifestStore, TagManifestStore

logger = logging.getLogger(__name__)


class FailureKind(str, Enum):
    """Why a manifest entry failed verification."""

    MISMATCH = "mismatch"
    MISSING = "missing"
    UNREADABLE = "unreadable"
    MALFORMED = "malformed"


@dataclass
class FixityFailure:
    """One entry that did not verify."""

    manifest: Path
    kind: FailureKind
    path: str | None = None
    expected: str | None = None
    actual: str | None = None
    reason: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "manifest": self.manifest.name,
            "kind": self.kind.value,
            "path": self.path,
            "expected": self.expected,
            "actual": self.actual,
            "reason": self.reason,
        }


@dataclass
class FixityReport:
    """Result of a fixity check."""

    checked_files: list[Path] = field(default_factory=list)
    skipped_files: list[Path] = field(default_factory=list)
    records_checked: int = 0
    failures: list[FixityFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": self.ok,
            "checked_files": [p.name for p in self.checked_files],
            "skipped_files": [p.name for p in self.skipped_files],
            "records_checked": self.records_checked,
            "failures": [f.to_dict() for f in self.failures],
        }


class FixityChecker:
    """Verifies recorded digests against live file content."""

    def __init__(
        self,
        bag: Bag,
        manifest_store: ManifestStore | None = None,
        tag_store: TagManifestStore | None = None,
    ):
        self.bag = bag
        self.manifest_store = manifest_store or ManifestStore(bag.bag_root())
        self.tag_store = tag_store or TagManifestStore(bag.bag_root())

    def check(self) -> FixityReport:
        """
        Check every manifest and tag manifest.

        Manifests whose algorithm token is not a known digest are skipped and
        count as passing.
        """
        report = FixityReport()
        for store in (self.manifest_store, self.tag_store):
            for manifest in store.list_files():
                self._check_manifest(store, manifest, report)

        if report.ok:
            logger.info("Fixity check passed for %s", self.bag.bag_root())
        else:
            logger.warning(
                "Fixity check failed for %s: %d problem(s)",
                self.bag.bag_root(),
                len(report.failures),
            )
        return report

    def is_fixed(self) -> bool:
        """True when every recorded digest matches the file it names."""
        return self.check().ok

    def _check_manifest(
        self,
        store: BaseManifestStore,
        manifest: Path,
        report: FixityReport,
    ) -> None:
        algorithm = (store.algorithm_of(manifest) or "").lower()
        if not is_supported_algorithm(algorithm):
            logger.debug("Skipping %s: unknown algorithm %r", manifest.name, algorithm)
            report.skipped_files.append(manifest)
            return

        report.checked_files.append(manifest)
        try:
            records = store.read(manifest)
        except ManifestFormatError as e:
            report.failures.append(
                FixityFailure(manifest=manifest, kind=FailureKind.MALFORMED, reason=str(e))
            )
            return
        except OSError as e:
            report.failures.append(
                FixityFailure(manifest=manifest, kind=FailureKind.UNREADABLE, reason=str(e))
            )
            return

        root = self.bag.bag_root()
        for record in records:
            report.records_checked += 1
            target = resolve_recorded_path(root, record.path)
            try:
                actual = compute_digest(algorithm, target)
            except FileNotFoundError as e:
                report.failures.append(
                    FixityFailure(
                        manifest=manifest,
                        kind=FailureKind.MISSING,
                        path=record.path,
                        expected=record.digest,
                        reason=str(e),
                    )
                )
                continue
            except OSError as e:
                report.failures.append(
                    FixityFailure(
                        manifest=manifest,
                        kind=FailureKind.UNREADABLE,
                        path=record.path,
                        expected=record.digest,
                        reason=str(e),
                    )
                )
                continue

            if actual != record.digest:
                report.failures.append(
                    FixityFailure(
                        manifest=manifest,
                        kind=FailureKind.MISMATCH,
                        path=record.path,
                        expected=record.digest,
                        actual=actual,
                    )
                )
