"""Record data types for the initial record types."""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass
from typing import ClassVar, Optional

from zonerdata.base import (
    Composer,
    DName,
    Parser,
    Rtype,
    Scanner,
    ScanError,
    format_charstr,
)


def _check_uint(value: int, bits: int, what: str) -> None:
    if not 0 <= value < 1 << bits:
        raise ValueError(f"{what} {value} does not fit into {bits} bits")


class RecordData:
    """Base of all record data types; each subclass names its record type."""

    rtype: ClassVar[Rtype]

    def to_wire(self, composer: Composer) -> None:
        """Append the wire form of the record data to composer."""
        raise NotImplementedError(f"{type(self).__name__} has no wire format")


# ---------------------------------------------------------------- A


@dataclass(frozen=True, order=True)
class A(RecordData):
    """The IPv4 address of a host."""

    rtype: ClassVar[Rtype] = Rtype.A

    addr: ipaddress.IPv4Address

    def __post_init__(self) -> None:
        if not isinstance(self.addr, ipaddress.IPv4Address):
            object.__setattr__(self, "addr", ipaddress.IPv4Address(self.addr))

    @classmethod
    def from_octets(cls, a: int, b: int, c: int, d: int) -> "A":
        """Create the record data from the four address components."""
        return cls(ipaddress.IPv4Address(bytes([a, b, c, d])))

    @classmethod
    def parse(cls, parser: Parser) -> "A":
        return cls(ipaddress.IPv4Address(parser.parse_bytes(4)))

    @classmethod
    def scan(cls, scanner: Scanner, origin: Optional[DName] = None) -> "A":
        word = scanner.scan_word()
        try:
            return cls(ipaddress.IPv4Address(word))
        except ValueError as err:
            raise ScanError(f"invalid IPv4 address {word!r}") from err

    def to_wire(self, composer: Composer) -> None:
        composer.compose_bytes(self.addr.packed)

    def __str__(self) -> str:
        return str(self.addr)


# ---------------------------------------------------------------- single names


@dataclass(frozen=True)
class NameRecord(RecordData):
    """Record data consisting of a single domain name."""

    name: DName

    @classmethod
    def parse(cls, parser: Parser) -> "NameRecord":
        return cls(parser.parse_name())

    @classmethod
    def scan(cls, scanner: Scanner, origin: Optional[DName] = None) -> "NameRecord":
        return cls(scanner.scan_name(origin))

    def to_wire(self, composer: Composer) -> None:
        # These types allow the name to be compressed.
        composer.compose_name(self.name)

    def __str__(self) -> str:
        return str(self.name)


@dataclass(frozen=True)
class Cname(NameRecord):
    """The canonical name for an alias."""

    rtype: ClassVar[Rtype] = Rtype.CNAME

    @property
    def cname(self) -> DName:
        return self.name


@dataclass(frozen=True)
class Mb(NameRecord):
    """A host that serves a mailbox (experimental)."""

    rtype: ClassVar[Rtype] = Rtype.MB

    @property
    def madname(self) -> DName:
        return self.name


@dataclass(frozen=True)
class Md(NameRecord):
    """A host with a mail agent delivering for the domain (obsolete)."""

    rtype: ClassVar[Rtype] = Rtype.MD

    @property
    def madname(self) -> DName:
        return self.name


@dataclass(frozen=True)
class Mf(NameRecord):
    """A host with a mail agent forwarding for the domain (obsolete)."""

    rtype: ClassVar[Rtype] = Rtype.MF

    @property
    def madname(self) -> DName:
        return self.name


@dataclass(frozen=True)
class Mg(NameRecord):
    """A mailbox that is a member of a mail group (experimental)."""

    rtype: ClassVar[Rtype] = Rtype.MG

    @property
    def madname(self) -> DName:
        return self.name


@dataclass(frozen=True)
class Mr(NameRecord):
    """A mailbox that is the proper rename of a mailbox (experimental)."""

    rtype: ClassVar[Rtype] = Rtype.MR

    @property
    def newname(self) -> DName:
        return self.name


@dataclass(frozen=True)
class Ns(NameRecord):
    """A host authoritative for a class and domain."""

    rtype: ClassVar[Rtype] = Rtype.NS

    @property
    def nsdname(self) -> DName:
        return self.name


@dataclass(frozen=True)
class Ptr(NameRecord):
    """A pointer to another location in the domain space."""

    rtype: ClassVar[Rtype] = Rtype.PTR

    @property
    def ptrdname(self) -> DName:
        return self.name


# ---------------------------------------------------------------- Hinfo


@dataclass(frozen=True, order=True)
class Hinfo(RecordData):
    """The CPU and operating system type of a host."""

    rtype: ClassVar[Rtype] = Rtype.HINFO

    cpu: bytes
    os: bytes

    def __post_init__(self) -> None:
        for field_name in ("cpu", "os"):
            value = bytes(getattr(self, field_name))
            if len(value) > 255:
                raise ValueError(f"{field_name} longer than 255 octets")
            object.__setattr__(self, field_name, value)

    @classmethod
    def parse(cls, parser: Parser) -> "Hinfo":
        cpu = parser.parse_charstr()
        return cls(cpu, parser.parse_charstr())

    @classmethod
    def scan(cls, scanner: Scanner, origin: Optional[DName] = None) -> "Hinfo":
        cpu = scanner.scan_charstr()
        return cls(cpu, scanner.scan_charstr())

    def to_wire(self, composer: Composer) -> None:
        composer.compose_charstr(self.cpu)
        composer.compose_charstr(self.os)

    def __str__(self) -> str:
        return f"{format_charstr(self.cpu)} {format_charstr(self.os)}"


# ---------------------------------------------------------------- Minfo


@dataclass(frozen=True)
class Minfo(RecordData):
    """The responsible and the error mailbox of a list or mailbox."""

    rtype: ClassVar[Rtype] = Rtype.MINFO

    rmailbx: DName
    emailbx: DName

    @classmethod
    def parse(cls, parser: Parser) -> "Minfo":
        rmailbx = parser.parse_name()
        return cls(rmailbx, parser.parse_name())

    @classmethod
    def scan(cls, scanner: Scanner, origin: Optional[DName] = None) -> "Minfo":
        rmailbx = scanner.scan_name(origin)
        return cls(rmailbx, scanner.scan_name(origin))

    def to_wire(self, composer: Composer) -> None:
        composer.compose_name(self.rmailbx, False)
        composer.compose_name(self.emailbx, False)

    def __str__(self) -> str:
        return f"{self.rmailbx} {self.emailbx}"


# ---------------------------------------------------------------- Mx


@dataclass(frozen=True)
class Mx(RecordData):
    """A mail exchange for the owner name; lower preferences are preferred."""

    rtype: ClassVar[Rtype] = Rtype.MX

    preference: int
    exchange: DName

    def __post_init__(self) -> None:
        _check_uint(self.preference, 16, "preference")

    @classmethod
    def parse(cls, parser: Parser) -> "Mx":
        preference = parser.parse_u16()
        return cls(preference, parser.parse_name())

    @classmethod
    def scan(cls, scanner: Scanner, origin: Optional[DName] = None) -> "Mx":
        preference = scanner.scan_u16()
        return cls(preference, scanner.scan_name(origin))

    def to_wire(self, composer: Composer) -> None:
        composer.compose_u16(self.preference)
        composer.compose_name(self.exchange, False)

    def __str__(self) -> str:
        return f"{self.preference} {self.exchange}"


# ---------------------------------------------------------------- Null


@dataclass(frozen=True, order=True)
class Null(RecordData):
    """Arbitrary data; not allowed in master files."""

    rtype: ClassVar[Rtype] = Rtype.NULL

    data: bytes = b""

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", bytes(self.data))

    @classmethod
    def parse(cls, parser: Parser) -> "Null":
        return cls(parser.parse_bytes(parser.remaining()))

    def to_wire(self, composer: Composer) -> None:
        composer.compose_bytes(self.data)

    def __str__(self) -> str:
        return f"\\# {len(self.data)} {self.data.hex()}"


# ---------------------------------------------------------------- Soa


@dataclass(frozen=True)
class Soa(RecordData):
    """The start of a zone with its maintenance parameters."""

    rtype: ClassVar[Rtype] = Rtype.SOA

    mname: DName
    rname: DName
    serial: int
    refresh: int
    retry: int
    expire: int
    minimum: int

    def __post_init__(self) -> None:
        for field_name in ("serial", "refresh", "retry", "expire", "minimum"):
            _check_uint(getattr(self, field_name), 32, field_name)

    @classmethod
    def parse(cls, parser: Parser) -> "Soa":
        mname = parser.parse_name()
        rname = parser.parse_name()
        numbers = [parser.parse_u32() for _ in range(5)]
        return cls(mname, rname, *numbers)

    @classmethod
    def scan(cls, scanner: Scanner, origin: Optional[DName] = None) -> "Soa":
        mname = scanner.scan_name(origin)
        rname = scanner.scan_name(origin)
        numbers = [scanner.scan_u32() for _ in range(5)]
        return cls(mname, rname, *numbers)

    def _numbers(self):
        return (self.serial, self.refresh, self.retry, self.expire, self.minimum)

    def to_wire(self, composer: Composer) -> None:
        composer.compose_name(self.mname, False)
        composer.compose_name(self.rname, False)
        for value in self._numbers():
            composer.compose_u32(value)

    def __str__(self) -> str:
        numbers = " ".join(str(value) for value in self._numbers())
        return f"{self.mname} {self.rname} {numbers}"