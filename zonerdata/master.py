"""Record data as it appears in master files, and formatting of wire data."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Type, Union

from zonerdata import generic
from zonerdata.base import Composer, DName, ParseError, Parser, Rtype, Scanner, ScanError
from zonerdata.rfc1035 import (
    A,
    Cname,
    Hinfo,
    Mb,
    Md,
    Mf,
    Mg,
    Minfo,
    Mr,
    Mx,
    Ns,
    Ptr,
    RecordData,
    Soa,
)
from zonerdata.rfc2782 import Srv
from zonerdata.rfc3596 import Aaaa
from zonerdata.txtwks import Txt, Wks

_MASTER_TYPES: Dict[int, Type[RecordData]] = {
    cls.rtype: cls
    for cls in (
        A,
        Cname,
        Hinfo,
        Mb,
        Md,
        Mf,
        Mg,
        Minfo,
        Mr,
        Mx,
        Ns,
        Ptr,
        Soa,
        Txt,
        Wks,
        Srv,
        Aaaa,
    )
}


def _as_rtype(rtype: int) -> Union[Rtype, int]:
    try:
        return Rtype(rtype)
    except ValueError:
        return int(rtype)


@dataclass(frozen=True)
class GenericData(RecordData):
    """Record data of any type kept as raw octets."""

    rtype: int
    data: bytes

    def __post_init__(self) -> None:
        if not 0 <= int(self.rtype) < 1 << 16:
            raise ValueError(f"record type {self.rtype} does not fit into 16 bits")
        object.__setattr__(self, "rtype", _as_rtype(self.rtype))
        object.__setattr__(self, "data", bytes(self.data))

    def to_wire(self, composer: Composer) -> None:
        composer.compose_bytes(self.data)

    def __str__(self) -> str:
        return generic.format_data(self.data)


def record_class(rtype: int) -> Optional[Type[RecordData]]:
    """Return the record data class that can appear in master files for rtype."""
    return _MASTER_TYPES.get(int(rtype))


def scan_record_data(
    rtype: int, scanner: Scanner, origin: Optional[DName] = None
) -> RecordData:
    """Scan master-file record data of type rtype.

    The generic format is tried first for every type; if that fails and the
    type has a master format of its own, that format is used instead.
    """
    saved = scanner.pos
    try:
        return GenericData(rtype, generic.scan(scanner))
    except ScanError as err:
        generic_error = err
    scanner.pos = saved
    cls = record_class(rtype)
    if cls is None:
        raise generic_error
    return cls.scan(scanner, origin)


def format_rdata(rtype: int, parser: Parser) -> str:
    """Format the record data at the parser's position in master-file form.

    Known types use their own format, consuming the data they parse; invalid
    data gives an '<invalid data: ...>' marker. Other types are formatted in
    the generic format without moving the parser.
    """
    cls = record_class(rtype)
    if cls is None:
        return generic.format_data(parser.data[parser.pos:])
    try:
        return str(cls.parse(parser))
    except ParseError as err:
        return f"<invalid data: {err}>"