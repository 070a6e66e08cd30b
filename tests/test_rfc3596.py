import ipaddress

import pytest

from zonerdata.base import Composer, ParseError, Parser, Rtype, Scanner, ScanError
from zonerdata.rfc3596 import Aaaa


def _wire(record):
    composer = Composer()
    record.to_wire(composer)
    return composer.getvalue()


def test_scan_and_format():
    aaaa = Aaaa.scan(Scanner("2001:db8::1"))
    assert aaaa.addr == ipaddress.IPv6Address("2001:db8::1")
    assert str(aaaa) == "2001:db8::1"


def test_wire_is_sixteen_octets():
    aaaa = Aaaa("::1")
    assert _wire(aaaa) == b"\x00" * 15 + b"\x01"


def test_wire_round_trip():
    aaaa = Aaaa("2001:db8:0:1::53")
    assert Aaaa.parse(Parser(_wire(aaaa))) == aaaa


def test_parse_consumes_sixteen_octets():
    parser = Parser(bytes(16) + b"\xff")
    assert Aaaa.parse(parser) == Aaaa("::")
    assert parser.remaining() == 1


def test_parse_short_data():
    with pytest.raises(ParseError):
        Aaaa.parse(Parser(bytes(15)))


def test_scan_invalid_address():
    scanner = Scanner("192.0.2.1")
    with pytest.raises(ScanError):
        Aaaa.scan(scanner)


def test_ordering_and_rtype():
    assert Aaaa("::1") < Aaaa("::2")
    assert Aaaa.rtype == Rtype.AAAA