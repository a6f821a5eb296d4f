"""
Tag file management.

Adds, untracks and deletes individual tag files while keeping the tag
manifests consistent after every change.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Callable, TextIO

from bagfixity.core.bag import Bag
from bagfixity.core.errors import (
    DuplicateTagFileError,
    TagFileConflictError,
    UnknownTagFileError,
)
from bagfixity.manifest.generator import TagManifestGenerator

logger = logging.getLogger(__name__)

ContentWriter = Callable[[TextIO], object]


class TagFileManager:
    """Mutations of the tracked tag-file set."""

    def __init__(self, bag: Bag, tag_generator: TagManifestGenerator | None = None):
        self.bag = bag
        self.tag_generator = tag_generator or TagManifestGenerator(bag)

    def _bag_path(self, path: str | Path) -> Path:
        return self.bag.bag_root() / path

    def add_tag_file(
        self,
        path: str | Path,
        source_path: str | Path | None = None,
        content_writer: ContentWriter | None = None,
    ) -> list[Path]:
        """
        Track a tag file, creating it first if it does not exist.

        A new file is copied from ``source_path`` or written by
        ``content_writer``, which receives a UTF-8 text stream. Creating a
        file regenerates the tag manifests from the existing tracked set
        before the new file is recorded.

        Args:
            path: Path relative to the bag root.
            source_path: File to copy into the bag.
            content_writer: Callable writing the file content.

        Returns:
            The tracked tag-file set, including the new file.

        Raises:
            DuplicateTagFileError: If the file is already tracked.
            TagFileConflictError: If the file exists and a source was given.
            ValueError: If the file must be created but no content was given.
        """
        target = self._bag_path(path)
        tracked = list(self.bag.tag_files())
        if target in tracked:
            raise DuplicateTagFileError(path)

        if not target.exists():
            if source_path is None and content_writer is None:
                raise ValueError(
                    f"Tag file does not exist: {path}. "
                    "Provide a source path or a content writer."
                )
            target.parent.mkdir(parents=True, exist_ok=True)
            if source_path is not None:
                shutil.copyfile(source_path, target)
            else:
                with target.open("w", encoding="utf-8", newline="\n") as f:
                    content_writer(f)
            logger.info("Created tag file %s", target)

            # Runs only on first creation; the file exists from here on.
            tracked = self.tag_generator.tagmanifest(tracked)
            if target in tracked:
                return tracked
        elif source_path is not None:
            raise TagFileConflictError(path)

        self.tag_generator.record(target)
        return [*tracked, target]

    def remove_tag_file(self, path: str | Path) -> list[Path]:
        """
        Stop tracking a tag file. The file stays on disk.

        Raises:
            UnknownTagFileError: If the file is not tracked.
        """
        target = self._bag_path(path)
        tracked = list(self.bag.tag_files())
        if target not in tracked:
            raise UnknownTagFileError(path)

        tracked.remove(target)
        logger.info("Removing tag file %s from tag manifests", target)
        return self.tag_generator.tagmanifest(tracked)

    def delete_tag_file(self, path: str | Path) -> list[Path]:
        """
        Untrack a tag file if needed, then delete it from disk.

        Raises:
            FileNotFoundError: If the file does not exist.
        """
        target = self._bag_path(path)
        if not target.exists():
            raise FileNotFoundError(f"Tag file does not exist: {path}")

        tracked = list(self.bag.tag_files())
        if target in tracked:
            tracked = self.remove_tag_file(path)

        target.unlink()
        logger.info("Deleted tag file %s", target)
        return tracked
