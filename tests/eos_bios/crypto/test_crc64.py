"""Tests for the CRC-64/ECMA checksum used to seed the roster shuffle."""

from __future__ import annotations

from eos_bios.crypto import crc64_ecma


def test_check_value() -> None:
    """Standard catalogue check value for the ASCII digits 1-9."""
    assert crc64_ecma(b"123456789") == 0x995DC9BBDF1939FA


def test_empty_input_is_zero() -> None:
    assert crc64_ecma(b"") == 0


def test_incremental_matches_one_shot() -> None:
    """Continuing from a running checksum equals checksumming the whole input."""
    partial = crc64_ecma(b"12345")
    assert crc64_ecma(b"6789", partial) == crc64_ecma(b"123456789")


def test_result_fits_in_64_bits() -> None:
    assert 0 <= crc64_ecma(b"\xff" * 64) < 2**64
