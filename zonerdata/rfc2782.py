"""Srv record data, locating services."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

from zonerdata.base import Composer, DName, Parser, Rtype, Scanner
from zonerdata.rfc1035 import RecordData


@dataclass(frozen=True)
class Srv(RecordData):
    """The host and port providing a service, with priority and weight."""

    rtype: ClassVar[Rtype] = Rtype.SRV

    priority: int
    weight: int
    port: int
    target: DName

    def __post_init__(self) -> None:
        for field_name in ("priority", "weight", "port"):
            value = getattr(self, field_name)
            if not 0 <= value < 1 << 16:
                raise ValueError(f"{field_name} {value} does not fit into 16 bits")

    @classmethod
    def parse(cls, parser: Parser) -> "Srv":
        priority = parser.parse_u16()
        weight = parser.parse_u16()
        port = parser.parse_u16()
        return cls(priority, weight, port, parser.parse_name())

    @classmethod
    def scan(cls, scanner: Scanner, origin: Optional[DName] = None) -> "Srv":
        priority = scanner.scan_u16()
        weight = scanner.scan_u16()
        port = scanner.scan_u16()
        return cls(priority, weight, port, scanner.scan_name(origin))

    def to_wire(self, composer: Composer) -> None:
        composer.compose_u16(self.priority)
        composer.compose_u16(self.weight)
        composer.compose_u16(self.port)
        composer.compose_name(self.target, False)

    def __str__(self) -> str:
        return f"{self.priority} {self.weight} {self.port} {self.target}"