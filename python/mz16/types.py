"""
MZ (16-bit DOS executable) header definitions.

The MZ header is the fixed 28-byte structure at the start of every DOS
executable. It describes four regions of the file:

    [0, header_size * 16)                header (fixed fields + relocations)
    [reloc_table, reloc_table + n * 4)   relocation table
    [header_size * 16, image end)        executable image
    [image end, EOF)                     extra data (overlays, appended payloads)

where "image end" is pages * 512, minus the unused tail of the last page
when extra_bytes is non-zero.

Headers are immutable. Region accessors return memoryviews that borrow the
caller's buffer rather than copying it; a bytearray cannot be resized while
such a view is alive, and a view must not be used after the buffer is
released.

References:
- http://www.delorie.com/djgpp/doc/exe/
"""

import struct
from dataclasses import dataclass, fields
from pathlib import Path
from typing import ClassVar, Sequence

from .errors import NoHeaderError, NotMZError, RegionOutOfBoundsError

# =============================================================================
# Constants
# =============================================================================

MZ_MAGIC = 0x5A4D  # "MZ" in little-endian
MZ_MAGIC_BYTES = b"MZ"

MZ_HEADER_WORDS = 14
MZ_HEADER_SIZE = MZ_HEADER_WORDS * 2  # 28 bytes

PARAGRAPH_SIZE = 16  # header_size unit
PAGE_SIZE = 512  # pages unit
RELOCATION_ENTRY_SIZE = 4  # offset word + segment word

# Header field offsets (for direct byte access)
E_MAGIC_OFFSET = 0
E_CBLP_OFFSET = 2  # extra_bytes
E_CP_OFFSET = 4  # pages
E_CRLC_OFFSET = 6  # reloc_items
E_CPARHDR_OFFSET = 8  # header_size
E_MINALLOC_OFFSET = 10
E_MAXALLOC_OFFSET = 12
E_SS_OFFSET = 14
E_SP_OFFSET = 16
E_CSUM_OFFSET = 18
E_IP_OFFSET = 20
E_CS_OFFSET = 22
E_LFARLC_OFFSET = 24  # reloc_table
E_OVNO_OFFSET = 26

# Region names, in file order
REGION_HEADER = "header"
REGION_RELOCATIONS = "relocations"
REGION_IMAGE = "image"
REGION_EXTRA = "extra"


# =============================================================================
# Structures
# =============================================================================


@dataclass(frozen=True)
class Region:
    """A named byte range [start, end) within an MZ file."""

    name: str
    start: int
    end: int

    @property
    def size(self) -> int:
        return self.end - self.start

    def __str__(self) -> str:
        return f"{self.name}: [0x{self.start:x}, 0x{self.end:x}) ({self.size} bytes)"


@dataclass(frozen=True)
class MzHeader:
    """DOS MZ header.

    All fields are unsigned 16-bit values, stored in file order. Only the
    signature is validated; nonsensical sizes still parse and are reported
    when a region is sliced.
    """

    signature: int  # "MZ" = 0x5A4D
    extra_bytes: int  # bytes used in the last page, 0 = whole page
    pages: int  # 512-byte pages, including the partial last one
    reloc_items: int
    header_size: int  # in paragraphs
    min_alloc: int
    max_alloc: int
    init_ss: int
    init_sp: int
    checksum: int
    init_ip: int
    init_cs: int
    reloc_table: int  # byte offset of the first relocation entry
    overlay: int

    STRUCT_FMT: ClassVar[str] = "<14H"
    SIZE: ClassVar[int] = MZ_HEADER_SIZE

    def __post_init__(self):
        if self.signature != MZ_MAGIC:
            raise NotMZError(self.signature)
        for f in fields(self):
            value = getattr(self, f.name)
            if not 0 <= value <= 0xFFFF:
                raise ValueError(
                    f"Header field {f.name} out of 16-bit range: {value}"
                )

    @classmethod
    def from_words(cls, words: Sequence[int]) -> "MzHeader":
        """Build a header from its 14 words, in file order.

        Raises:
            NotMZError: If the first word is not MZ_MAGIC
            ValueError: If words does not hold exactly 14 values, or a value
                does not fit in 16 bits
        """
        if len(words) != MZ_HEADER_WORDS:
            raise ValueError(
                f"Expected {MZ_HEADER_WORDS} header words, got {len(words)}"
            )
        return cls(*words)

    @classmethod
    def from_bytes(cls, data: bytes | bytearray | memoryview) -> "MzHeader":
        """Parse the header at the start of data.

        Bytes past the fixed 28-byte header are ignored.

        Raises:
            NoHeaderError: If data is shorter than 28 bytes
            NotMZError: If the signature is wrong
        """
        available = memoryview(data).nbytes
        if available < cls.SIZE:
            raise NoHeaderError(available, cls.SIZE)

        words = struct.unpack_from(cls.STRUCT_FMT, data, 0)
        return cls.from_words(words)

    @classmethod
    def load(cls, path: Path) -> tuple["MzHeader", bytes]:
        """Read a file and parse its header.

        Returns:
            (header, file contents). Region accessors expect the contents.
        """
        data = Path(path).read_bytes()
        return cls.from_bytes(data), data

    def words(self) -> tuple[int, ...]:
        """Return the 14 header words in file order."""
        return tuple(getattr(self, f.name) for f in fields(self))

    # -------------------------------------------------------------------------
    # Derived offsets
    # -------------------------------------------------------------------------

    def header_region_end(self) -> int:
        """Offset where the header ends and the executable image begins."""
        return self.header_size * PARAGRAPH_SIZE

    def image_region_end(self) -> int:
        """Offset where the executable image ends and extra data begins.

        Raises:
            RegionOutOfBoundsError: If extra_bytes is set on a header with no
                pages, which would place the end before offset 0
        """
        end = self.pages * PAGE_SIZE
        if self.extra_bytes != 0:
            end -= PAGE_SIZE - self.extra_bytes
        if end < 0:
            raise RegionOutOfBoundsError(REGION_IMAGE, self.header_region_end(), end)
        return end

    def relocation_table_start(self) -> int:
        return self.reloc_table

    def relocation_table_end(self) -> int:
        return self.reloc_table + self.reloc_items * RELOCATION_ENTRY_SIZE

    def header_regions(self) -> tuple[Region, ...]:
        """The header and relocation regions, which do not depend on pages."""
        return (
            Region(REGION_HEADER, 0, self.header_region_end()),
            Region(
                REGION_RELOCATIONS,
                self.relocation_table_start(),
                self.relocation_table_end(),
            ),
        )

    def regions(self, length: int) -> tuple[Region, ...]:
        """Describe the four regions of a file of the given length.

        The extra region runs from the image end to length. The ranges are
        reported as computed; use MzVerifier to check them.
        """
        image_end = self.image_region_end()
        return (
            *self.header_regions(),
            Region(REGION_IMAGE, self.header_region_end(), image_end),
            Region(REGION_EXTRA, image_end, length),
        )

    # -------------------------------------------------------------------------
    # Region views
    # -------------------------------------------------------------------------

    def header_data(self, data: bytes | bytearray | memoryview) -> memoryview:
        """View of the header region, relocation table included."""
        return _region_view(data, REGION_HEADER, 0, self.header_region_end())

    def image_data(self, data: bytes | bytearray | memoryview) -> memoryview:
        """View of the executable image."""
        return _region_view(
            data, REGION_IMAGE, self.header_region_end(), self.image_region_end()
        )

    def extra_data(self, data: bytes | bytearray | memoryview) -> memoryview:
        """View of everything after the declared image size."""
        view = memoryview(data).cast("B")
        return _region_view(view, REGION_EXTRA, self.image_region_end(), len(view))

    def relocation_table_data(
        self, data: bytes | bytearray | memoryview
    ) -> memoryview:
        """View of the raw relocation table entries."""
        return _region_view(
            data,
            REGION_RELOCATIONS,
            self.relocation_table_start(),
            self.relocation_table_end(),
        )

    def to_dict(self, length: int) -> dict:
        """Fields and region ranges as plain types, for serialization."""
        return {
            "header": {f.name: getattr(self, f.name) for f in fields(self)},
            "regions": {
                r.name: {"start": r.start, "end": r.end} for r in self.regions(length)
            },
        }


def _region_view(
    data: bytes | bytearray | memoryview, region: str, start: int, end: int
) -> memoryview:
    view = memoryview(data).cast("B")
    if not 0 <= start <= end <= len(view):
        raise RegionOutOfBoundsError(region, start, end, len(view))
    return view[start:end]
