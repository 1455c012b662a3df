"""
Errors raised while decoding and slicing MZ headers.

Decoding can fail in exactly two ways (NotMZ, NoHeader). Slicing a region
that does not fit the caller's buffer raises RegionOutOfBounds. All of them
derive from ValueError so callers that only care about "bad input" can catch
that.
"""


class MzHeaderError(ValueError):
    """Base class for MZ header errors.

    Attributes:
        kind: Short, stable name of the failure ("NotMZ", "NoHeader",
            "RegionOutOfBounds")
    """

    kind: str = "MzHeaderError"


class NotMZError(MzHeaderError):
    """Raised when the first word is not the MZ signature."""

    kind = "NotMZ"

    def __init__(self, signature: int):
        self.signature = signature
        super().__init__(f"Not an MZ header. (signature: 0x{signature:04X})")


class NoHeaderError(MzHeaderError):
    """Raised when the buffer is too short to hold the fixed header."""

    kind = "NoHeader"

    def __init__(self, available: int, required: int):
        self.available = available
        self.required = required
        super().__init__(
            f"No header could be read. ({available} bytes, need {required})"
        )


class RegionOutOfBoundsError(MzHeaderError):
    """Raised when a derived region does not fit inside the buffer."""

    kind = "RegionOutOfBounds"

    def __init__(self, region: str, start: int, end: int, length: int | None = None):
        self.region = region
        self.start = start
        self.end = end
        self.length = length
        if length is None:
            msg = f"Region {region} has invalid bounds [{start}, {end})"
        else:
            msg = (
                f"Region {region} [{start}, {end}) is out of bounds "
                f"for a buffer of {length} bytes"
            )
        super().__init__(msg)
