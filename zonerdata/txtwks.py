"""Txt and Wks record data together with the Wks service bitmap."""

from __future__ import annotations

import ipaddress
import socket
from dataclasses import dataclass, field
from typing import ClassVar, Iterator, Optional, Union

from zonerdata.base import (
    Composer,
    DName,
    ParseError,
    Parser,
    Rtype,
    Scanner,
    ScanError,
    format_charstr,
)
from zonerdata.rfc1035 import A, RecordData

_CHARSTR_MAX = 255


# ---------------------------------------------------------------- Txt


@dataclass(frozen=True, order=True)
class Txt(RecordData):
    """Descriptive text held as one or more length-prefixed character strings."""

    rtype: ClassVar[Rtype] = Rtype.TXT

    data: bytes = b"\x00"

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", bytes(self.data))

    def __iter__(self) -> Iterator[bytes]:
        """Yield each character string; a truncated last one yields what is left."""
        rest = self.data
        while rest:
            length, tail = rest[0], rest[1:]
            if len(tail) <= length:
                yield tail
                return
            yield tail[:length]
            rest = tail[length:]

    def text(self) -> bytes:
        """Return the content of all character strings concatenated."""
        return b"".join(self)

    @classmethod
    def parse(cls, parser: Parser) -> "Txt":
        data = parser.parse_bytes(parser.remaining())
        pos = 0
        while pos < len(data):
            pos += data[pos] + 1
            if pos > len(data):
                raise ParseError("character string runs past the record data")
        return cls(data)

    @classmethod
    def scan(cls, scanner: Scanner, origin: Optional[DName] = None) -> "Txt":
        phrase = scanner.scan_phrase_bytes()
        chunks = (
            phrase[start:start + _CHARSTR_MAX]
            for start in range(0, len(phrase) + 1, _CHARSTR_MAX)
        )
        return cls(b"".join(bytes([len(chunk)]) + chunk for chunk in chunks))

    def to_wire(self, composer: Composer) -> None:
        composer.compose_bytes(self.data)

    def __str__(self) -> str:
        return "".join(format_charstr(item) for item in self)


# ---------------------------------------------------------------- WksBitmap


def _port_location(port: int) -> tuple:
    if not 0 <= port < 1 << 16:
        raise ValueError(f"port {port} out of range")
    return divmod(port, 8)


class WksBitmap:
    """A bitmap of served ports; port n is bit n % 8 of octet n // 8."""

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, data: Union[bytes, bytearray] = b""):
        self._data = bytearray(data)

    def as_bytes(self) -> bytes:
        return bytes(self._data)

    def serves(self, port: int) -> bool:
        """Return whether the service on port is provided."""
        octet, bit = _port_location(port)
        if octet >= len(self._data):
            return False
        return bool((self._data[octet] >> bit) & 1)

    def set_serves(self, port: int, enable: bool = True) -> None:
        """Enable or disable the service on port."""
        octet, bit = _port_location(port)
        if len(self._data) <= octet:
            self._data.extend(bytes(octet + 1 - len(self._data)))
        if enable:
            self._data[octet] |= 1 << bit
        else:
            self._data[octet] &= 0xFF ^ (1 << bit)

    def __iter__(self) -> Iterator[int]:
        """Yield the served ports in increasing order."""
        for octet, value in enumerate(self._data):
            for bit in range(8):
                if (value >> bit) & 1:
                    yield octet * 8 + bit

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WksBitmap):
            return NotImplemented
        return bytes(self._data).rstrip(b"\x00") == bytes(other._data).rstrip(b"\x00")

    def __repr__(self) -> str:
        return f"WksBitmap({bytes(self._data)!r})"


# ---------------------------------------------------------------- Wks


def _lookup_protocol(word: str) -> int:
    try:
        return socket.getprotobyname(word)
    except OSError:
        pass
    if word.isdigit() and int(word) < 256:
        return int(word)
    raise ScanError(f"unknown protocol {word!r}")


def _lookup_service(word: str) -> Optional[int]:
    try:
        return socket.getservbyname(word)
    except OSError:
        pass
    if word.isdigit() and int(word) < 1 << 16:
        return int(word)
    return None


@dataclass
class Wks(RecordData):
    """Well-known services offered by a protocol on an IPv4 address."""

    rtype: ClassVar[Rtype] = Rtype.WKS

    address: ipaddress.IPv4Address
    protocol: int
    bitmap: WksBitmap = field(default_factory=WksBitmap)

    def __post_init__(self) -> None:
        if not isinstance(self.address, ipaddress.IPv4Address):
            self.address = ipaddress.IPv4Address(self.address)
        if not 0 <= self.protocol < 256:
            raise ValueError(f"protocol {self.protocol} does not fit into 8 bits")
        if not isinstance(self.bitmap, WksBitmap):
            self.bitmap = WksBitmap(self.bitmap)

    def serves(self, port: int) -> bool:
        return self.bitmap.serves(port)

    def __iter__(self) -> Iterator[int]:
        return iter(self.bitmap)

    @classmethod
    def parse(cls, parser: Parser) -> "Wks":
        address = ipaddress.IPv4Address(parser.parse_bytes(4))
        protocol = parser.parse_u8()
        bitmap = WksBitmap(parser.parse_bytes(parser.remaining()))
        return cls(address, protocol, bitmap)

    @classmethod
    def scan(cls, scanner: Scanner, origin: Optional[DName] = None) -> "Wks":
        address = A.scan(scanner, origin).addr
        saved = scanner.pos
        try:
            protocol = _lookup_protocol(scanner.scan_word())
        except ScanError:
            scanner.pos = saved
            raise
        bitmap = WksBitmap()
        while not scanner.at_end():
            saved = scanner.pos
            port = _lookup_service(scanner.scan_word())
            if port is None:
                scanner.pos = saved
                break
            bitmap.set_serves(port, True)
        return cls(address, protocol, bitmap)

    def to_wire(self, composer: Composer) -> None:
        composer.compose_bytes(self.address.packed)
        composer.compose_u8(self.protocol)
        composer.compose_bytes(self.bitmap.as_bytes())

    def __str__(self) -> str:
        parts = [str(self.address), str(self.protocol)]
        parts.extend(str(port) for port in self)
        return " ".join(parts)