"""
Error types for bag manifest operations.

Every error raised by the manifest layer derives from BagError so callers
can catch the whole family. Missing files surface as the builtin
FileNotFoundError and other I/O failures as OSError.
"""

from __future__ import annotations

from pathlib import Path


class BagError(Exception):
    """Base class for bag manifest errors."""

    def __init__(self, message: str, path: str | Path | None = None):
        super().__init__(message)
        self.path = path


class DuplicateTagFileError(BagError):
    """Tag file is already tracked in the tag manifest."""

    def __init__(self, path: str | Path):
        super().__init__(f"Tag file already in manifest: {path}", path)


class TagFileConflictError(BagError):
    """Tag file already exists on disk and would be overwritten."""

    def __init__(self, path: str | Path):
        super().__init__(
            f"Tag file already exists, will not overwrite: {path}. "
            "Add it without a source to track the existing file.",
            path,
        )


class UnknownTagFileError(BagError):
    """Tag file is not tracked in the tag manifest."""

    def __init__(self, path: str | Path):
        super().__init__(f"Tag file is not in manifest: {path}", path)


class UnsupportedAlgorithmError(BagError, ValueError):
    """Digest algorithm or manifest selector is not supported."""

    def __init__(self, algorithm: str, supported: tuple[str, ...] | list[str] = ()):
        message = f"Unsupported algorithm: {algorithm!r}"
        if supported:
            message += f" (expected one of: {', '.join(supported)})"
        super().__init__(message)
        self.algorithm = algorithm


class ManifestFormatError(BagError, ValueError):
    """A manifest line could not be parsed."""

    def __init__(self, line: str, path: str | Path | None = None):
        super().__init__(f"Invalid manifest line: {line!r}", path)
        self.line = line
