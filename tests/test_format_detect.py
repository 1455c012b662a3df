"""Tests for MZ signature detection."""

from pathlib import Path

import pytest

from mz16.format_detect import (
    detect_binary_format,
    is_mz_binary,
    is_mz_data,
    UnsupportedBinaryFormat,
)
from mz16.types import MZ_MAGIC_BYTES


class TestDetectBinaryFormat:
    """Tests for detect_binary_format function."""

    def test_detect_mz_format(self, hello_exe_path: Path):
        assert detect_binary_format(hello_exe_path) == "mz"

    def test_empty_file_raises(self, tmp_path: Path):
        empty_file = tmp_path / "empty"
        empty_file.write_bytes(b"")

        with pytest.raises(UnsupportedBinaryFormat, match="File too small"):
            detect_binary_format(empty_file)

    def test_elf_file_raises(self, tmp_path: Path):
        elf_file = tmp_path / "test.so"
        elf_file.write_bytes(b"\x7fELF" + bytes(60))

        with pytest.raises(UnsupportedBinaryFormat, match="not an MZ executable"):
            detect_binary_format(elf_file)

    def test_reversed_magic_raises(self, tmp_path: Path):
        """"ZM" is not accepted."""
        zm_file = tmp_path / "zm.exe"
        zm_file.write_bytes(b"ZM" + bytes(26))

        with pytest.raises(UnsupportedBinaryFormat):
            detect_binary_format(zm_file)

    def test_missing_file_raises(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            detect_binary_format(tmp_path / "missing.exe")


class TestIsMz:
    """Tests for the boolean helpers."""

    def test_is_mz_binary(self, hello_exe_path: Path, tmp_path: Path):
        other = tmp_path / "readme.txt"
        other.write_text("This is a plain text file, not a binary.")

        assert is_mz_binary(hello_exe_path) is True
        assert is_mz_binary(other) is False
        assert is_mz_binary(tmp_path / "missing.exe") is False

    @pytest.mark.parametrize(
        "data,expected",
        [
            (MZ_MAGIC_BYTES, True),
            (MZ_MAGIC_BYTES + bytes(26), True),
            (bytearray(b"MZ\x00"), True),
            (memoryview(b"MZ"), True),
            (b"M", False),
            (b"", False),
            (b"ZM", False),
        ],
    )
    def test_is_mz_data(self, data, expected):
        assert is_mz_data(data) is expected
