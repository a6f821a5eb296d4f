"""
bagfixity: Manifest generation and fixity checking for BagIt-style bags.

Records checksums for payload and tag files, keeps tag manifests consistent
as tag files change, and re-verifies recorded checksums.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
