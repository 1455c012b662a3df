"""
mz16: DOS MZ executable header parsing.

This package decodes the fixed header of a 16-bit DOS executable and exposes
the byte ranges of the regions it describes (header, relocation table,
executable image, and trailing extra data) as views into the caller's buffer:

    from mz16 import MzHeader

    header = MzHeader.from_bytes(data)
    image = header.image_data(data)

Decoding failures raise NotMZError or NoHeaderError; slicing a region that
does not fit the buffer raises RegionOutOfBoundsError.
"""

from .errors import (
    MzHeaderError,
    NotMZError,
    NoHeaderError,
    RegionOutOfBoundsError,
)
from .types import (
    MzHeader,
    Region,
    MZ_MAGIC,
    MZ_MAGIC_BYTES,
    MZ_HEADER_SIZE,
    MZ_HEADER_WORDS,
    PARAGRAPH_SIZE,
    PAGE_SIZE,
    RELOCATION_ENTRY_SIZE,
)
from .format_detect import (
    detect_binary_format,
    is_mz_binary,
    is_mz_data,
    UnsupportedBinaryFormat,
)
from .verify import MzVerifier, VerificationResult

__all__ = [
    # Header
    "MzHeader",
    "Region",
    # Errors
    "MzHeaderError",
    "NotMZError",
    "NoHeaderError",
    "RegionOutOfBoundsError",
    # Constants
    "MZ_MAGIC",
    "MZ_MAGIC_BYTES",
    "MZ_HEADER_SIZE",
    "MZ_HEADER_WORDS",
    "PARAGRAPH_SIZE",
    "PAGE_SIZE",
    "RELOCATION_ENTRY_SIZE",
    # Format detection
    "detect_binary_format",
    "is_mz_binary",
    "is_mz_data",
    "UnsupportedBinaryFormat",
    # Verification
    "MzVerifier",
    "VerificationResult",
]
