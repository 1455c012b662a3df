"""
Binary format detection utilities.

Cheap signature checks that tell whether data or a file starts with the MZ
magic, without decoding the rest of the header.
"""

import logging
from pathlib import Path

from .types import MZ_MAGIC_BYTES

logger = logging.getLogger(__name__)


class UnsupportedBinaryFormat(ValueError):
    """Raised when a binary is not an MZ executable."""

    pass


def is_mz_data(data: bytes | bytearray | memoryview) -> bool:
    """Check if data starts with the MZ signature."""
    return bytes(data[:2]) == MZ_MAGIC_BYTES


def detect_binary_format(path: Path) -> str:
    """Detect whether a file is an MZ executable.

    Args:
        path: Path to binary file

    Returns:
        "mz" for MZ executables

    Raises:
        UnsupportedBinaryFormat: If the file does not start with "MZ"
        FileNotFoundError: If the file doesn't exist
    """
    with open(path, "rb") as f:
        magic = f.read(2)

    if len(magic) < 2:
        raise UnsupportedBinaryFormat(f"File too small to be a valid binary: {path}")

    if magic == MZ_MAGIC_BYTES:
        return "mz"

    logger.debug("No MZ signature in %s (found %r)", path, magic)
    raise UnsupportedBinaryFormat(f"Binary is not an MZ executable: {path}")


def is_mz_binary(path: Path) -> bool:
    """Check if a file is an MZ executable.

    Returns:
        True if MZ, False otherwise (including missing files)
    """
    try:
        return detect_binary_format(path) == "mz"
    except (UnsupportedBinaryFormat, FileNotFoundError):
        return False
