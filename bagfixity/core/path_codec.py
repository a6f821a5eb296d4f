"""
Path encoding for one-record-per-line manifest files.

Only carriage return and line feed are escaped; every other character is
written as-is.
"""

from __future__ import annotations

import os
from pathlib import Path

_ENCODINGS = (("\r", "%0D"), ("\n", "%0A"))


def encode_path(path: str) -> str:
    """
    Escape CR and LF so a path always fits on one manifest line.

    Args:
        path: Relative path as text.

    Returns:
        Path with CR replaced by ``%0D`` and LF by ``%0A``.

    Example:
        >>> encode_path("a\\nb.txt")
        'a%0Ab.txt'
    """
    for raw, escaped in _ENCODINGS:
        path = path.replace(raw, escaped)
    return path


def decode_path(path: str) -> str:
    """Inverse of encode_path."""
    for raw, escaped in _ENCODINGS:
        path = path.replace(escaped, raw)
    return path


def relative_bag_path(bag_root: str | Path, path: str | Path) -> str:
    """
    Compute the POSIX-style path of a file relative to the bag root.

    Args:
        bag_root: Bag root directory.
        path: File path, absolute or joined onto the bag root.

    Returns:
        Relative path using forward slashes.
    """
    return Path(os.path.relpath(path, bag_root)).as_posix()


def resolve_recorded_path(bag_root: str | Path, recorded: str) -> Path:
    """
    Map a path read from a manifest line back to a file in the bag.

    A name may contain a literal ``%0A`` or ``%0D``, which reads the same as
    an escaped newline. The literal name is used when such a file exists;
    otherwise the decoded name is returned, existing or not.

    Args:
        bag_root: Bag root directory.
        recorded: Relative path exactly as written in the manifest.

    Returns:
        Path joined onto the bag root.
    """
    root = Path(bag_root)
    decoded = decode_path(recorded)
    if decoded != recorded:
        literal = root / recorded
        if literal.exists():
            return literal
    return root / decoded
