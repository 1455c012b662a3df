"""
MZ structural verification utilities.

MzHeader accepts any header with the right signature. The MzVerifier class
checks whether the decoded header actually describes the buffer it came
from, catching the inconsistencies that would make region slicing fail.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from .errors import MzHeaderError, RegionOutOfBoundsError
from .types import MZ_HEADER_SIZE, PAGE_SIZE, MzHeader

logger = logging.getLogger(__name__)


@dataclass
class VerificationResult:
    """Outcome of MzVerifier checks.

    Errors mean the header does not describe its buffer; warnings flag
    layouts that slice fine but no linker would produce.
    """

    passed: bool = True
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def add_error(self, msg: str) -> None:
        self.errors.append(msg)
        self.passed = False

    def add_warning(self, msg: str) -> None:
        self.warnings.append(msg)

    def merge(self, other: "VerificationResult") -> None:
        """Fold the outcome of one check into this result."""
        self.passed = self.passed and other.passed
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)

    def __str__(self) -> str:
        lines = ["Verification PASSED" if self.passed else "Verification FAILED"]
        for title, messages in (("Errors", self.errors), ("Warnings", self.warnings)):
            if messages:
                lines.append(f"{title} ({len(messages)}):")
                lines.extend(f"  - {m}" for m in messages)
        return "\n".join(lines)


class MzVerifier:
    """MZ executable verification.

    Usage:
        result = MzVerifier.verify(Path("hello.exe"))
        if not result.passed:
            print(result)
    """

    def __init__(self, header: MzHeader, data: bytes | bytearray | memoryview):
        """Initialize with a decoded header and the buffer it came from."""
        self._header = header
        self._length = memoryview(data).nbytes

    @classmethod
    def verify(cls, path: Path) -> VerificationResult:
        """Verify an MZ file on disk."""
        return cls.verify_data(Path(path).read_bytes())

    @classmethod
    def verify_data(cls, data: bytes | bytearray | memoryview) -> VerificationResult:
        """Verify MZ data in memory.

        Decode failures are reported as errors rather than raised.
        """
        try:
            header = MzHeader.from_bytes(data)
        except MzHeaderError as e:
            result = VerificationResult()
            result.add_error(f"{e.kind}: {e}")
            return result
        return cls(header, data).run_all_checks()

    def run_all_checks(self) -> VerificationResult:
        """Run all internal structural checks."""
        result = VerificationResult()

        checks: list[Callable[[], VerificationResult]] = [
            self.check_extra_bytes,
            self.check_image_end,
            self.check_regions_in_bounds,
            self.check_header_size,
            self.check_relocation_table_placement,
        ]

        for check in checks:
            check_result = check()
            logger.debug(
                "%s: %s", check.__name__, "ok" if check_result.passed else "failed"
            )
            result.merge(check_result)

        return result

    # =========================================================================
    # Structural Checks
    # =========================================================================

    def check_extra_bytes(self) -> VerificationResult:
        """Check that the last-page byte count fits in a page."""
        result = VerificationResult()
        if self._header.extra_bytes > PAGE_SIZE:
            result.add_error(
                f"extra_bytes {self._header.extra_bytes} exceeds page size {PAGE_SIZE}"
            )
        return result

    def check_image_end(self) -> VerificationResult:
        """Check that the image end does not underflow."""
        result = VerificationResult()
        try:
            self._header.image_region_end()
        except RegionOutOfBoundsError as e:
            result.add_error(
                f"Image end underflows: pages={self._header.pages}, "
                f"extra_bytes={self._header.extra_bytes} ({e})"
            )
        return result

    def check_regions_in_bounds(self) -> VerificationResult:
        """Check that every region fits inside the buffer."""
        result = VerificationResult()
        try:
            regions = self._header.regions(self._length)
        except RegionOutOfBoundsError:
            # Reported by check_image_end
            regions = self._header.header_regions()

        for region in regions:
            if region.end < region.start:
                result.add_error(f"Region {region.name} has negative size: {region}")
            elif region.end > self._length:
                result.add_error(
                    f"Region {region.name} extends past end of data "
                    f"({self._length} bytes): {region}"
                )
        return result

    def check_header_size(self) -> VerificationResult:
        """Check that the header region can hold the fixed fields."""
        result = VerificationResult()
        if self._header.header_region_end() < MZ_HEADER_SIZE:
            result.add_warning(
                f"Header region ({self._header.header_region_end()} bytes) is "
                f"smaller than the fixed header ({MZ_HEADER_SIZE} bytes)"
            )
        return result

    def check_relocation_table_placement(self) -> VerificationResult:
        """Check that relocations sit between the fixed fields and the image."""
        result = VerificationResult()
        if self._header.reloc_items == 0:
            return result

        start = self._header.relocation_table_start()
        end = self._header.relocation_table_end()
        if start < MZ_HEADER_SIZE:
            result.add_warning(
                f"Relocation table at 0x{start:x} overlaps the fixed header"
            )
        if end > self._header.header_region_end():
            result.add_warning(
                f"Relocation table end 0x{end:x} is past the header region "
                f"end 0x{self._header.header_region_end():x}"
            )
        return result
