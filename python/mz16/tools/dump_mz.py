#!/usr/bin/env python3
"""
MZ header dump CLI tool.

Prints the header fields and derived regions of a DOS MZ executable, and
optionally extracts the regions, writes a msgpack manifest, or runs
structural verification.

Usage:
    python -m mz16.tools.dump_mz <binary> [--verify] [--extract-dir DIR]
        [--manifest FILE] [--verbose]
"""

import argparse
import logging
import sys
from dataclasses import fields
from pathlib import Path

import msgpack

from mz16 import MzHeader, MzHeaderError, MzVerifier, RegionOutOfBoundsError

logger = logging.getLogger(__name__)

# Region name -> output file name for --extract-dir
EXTRACT_FILES = {
    "header": "header.bin",
    "relocations": "relocations.bin",
    "image": "image.bin",
    "extra": "extra.bin",
}


def print_header(header: MzHeader, data: bytes) -> bool:
    """Print header fields and the region table.

    Returns:
        False if the image end underflows; only the header and relocation
        regions are printed then
    """
    print("MZ header:")
    for f in fields(header):
        value = getattr(header, f.name)
        print(f"  {f.name:<12} 0x{value:04x} ({value})")

    print("Regions:")
    image_error = None
    try:
        regions = header.regions(len(data))
    except RegionOutOfBoundsError as e:
        regions = header.header_regions()
        image_error = str(e)
    for region in regions:
        print(f"  {region}")
    if image_error is not None:
        print(f"  image: {image_error}")
    return image_error is None


def extract_regions(header: MzHeader, data: bytes, output_dir: Path) -> None:
    """Write each region to its own file under output_dir."""
    views = {
        "header": header.header_data(data),
        "relocations": header.relocation_table_data(data),
        "image": header.image_data(data),
        "extra": header.extra_data(data),
    }
    output_dir.mkdir(parents=True, exist_ok=True)
    for name, view in views.items():
        path = output_dir / EXTRACT_FILES[name]
        path.write_bytes(view)
        logger.debug("Wrote %d bytes of %s to %s", view.nbytes, name, path)


def write_manifest(header: MzHeader, data: bytes, binary: Path, path: Path) -> None:
    """Write header fields and region ranges as msgpack."""
    manifest = {
        "file": binary.name,
        "size": len(data),
        **header.to_dict(len(data)),
    }
    path.write_bytes(msgpack.packb(manifest, use_bin_type=True))
    logger.debug("Wrote manifest to %s", path)


def dump_binary(
    binary: Path,
    verify: bool = False,
    extract_dir: Path | None = None,
    manifest: Path | None = None,
) -> bool:
    """Dump one binary.

    Returns:
        True on success, False if decoding, slicing or verification failed
    """
    header, data = MzHeader.load(binary)
    print(f"File: {binary} ({len(data)} bytes)")
    print("-" * 60)
    ok = print_header(header, data)

    # Verify before extracting so the report is printed even when slicing fails
    if verify:
        print("-" * 60)
        result = MzVerifier(header, data).run_all_checks()
        print(result)
        ok = ok and result.passed

    if extract_dir is not None:
        extract_regions(header, data, extract_dir)
        print(f"Extracted regions to {extract_dir}")

    if manifest is not None:
        write_manifest(header, data, binary, manifest)
        print(f"Wrote manifest to {manifest}")

    return ok


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Dump the header and regions of a DOS MZ executable"
    )
    parser.add_argument("binary", type=Path, help="Path to MZ executable")
    parser.add_argument(
        "--verify",
        action="store_true",
        help="Run structural verification",
    )
    parser.add_argument(
        "--extract-dir",
        type=Path,
        help="Write header/relocations/image/extra regions to this directory",
    )
    parser.add_argument(
        "--manifest",
        type=Path,
        help="Write header fields and region ranges as msgpack to this file",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    if not args.binary.exists():
        print(f"Error: {args.binary} does not exist", file=sys.stderr)
        return 1

    try:
        ok = dump_binary(
            args.binary,
            verify=args.verify,
            extract_dir=args.extract_dir,
            manifest=args.manifest,
        )
    except MzHeaderError as e:
        print(f"Error: {e.kind}: {e}", file=sys.stderr)
        return 1

    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
