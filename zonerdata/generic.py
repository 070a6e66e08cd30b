"""The generic record data format for arbitrary record types."""

from __future__ import annotations

from zonerdata.base import Scanner, ScanError


def scan(scanner: Scanner) -> bytes:
    """Scan data of the form '\\# <length> <hex words>' into bytes."""
    scanner.skip_literal("\\#")
    length = scanner.scan_u16()
    target = bytearray()
    while len(target) < length:
        word = scanner.scan_hex_word()
        if len(target) + len(word) > length:
            raise ScanError("generic data longer than announced")
        target += word
    return bytes(target)


def format_data(data: bytes) -> str:
    """Format data as hex in groups of two octets separated by spaces."""
    return bytes(data).hex(" ", -2)