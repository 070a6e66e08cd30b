"""Aaaa record data holding IPv6 addresses."""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass
from typing import ClassVar, Optional

from zonerdata.base import Composer, DName, Parser, Rtype, Scanner, ScanError
from zonerdata.rfc1035 import RecordData


@dataclass(frozen=True, order=True)
class Aaaa(RecordData):
    """The IPv6 address of a host."""

    rtype: ClassVar[Rtype] = Rtype.AAAA

    addr: ipaddress.IPv6Address

    def __post_init__(self) -> None:
        if not isinstance(self.addr, ipaddress.IPv6Address):
            object.__setattr__(self, "addr", ipaddress.IPv6Address(self.addr))

    @classmethod
    def parse(cls, parser: Parser) -> "Aaaa":
        return cls(ipaddress.IPv6Address(parser.parse_bytes(16)))

    @classmethod
    def scan(cls, scanner: Scanner, origin: Optional[DName] = None) -> "Aaaa":
        word = scanner.scan_word()
        try:
            return cls(ipaddress.IPv6Address(word))
        except ValueError as err:
            raise ScanError(f"invalid IPv6 address {word!r}") from err

    def to_wire(self, composer: Composer) -> None:
        composer.compose_bytes(self.addr.packed)

    def __str__(self) -> str:
        return str(self.addr)