import pytest

from zonerdata.base import Composer, DName, ParseError, Parser, Rtype, Scanner, ScanError
from zonerdata.rfc2782 import Srv


def _wire(record):
    composer = Composer(compress=True)
    record.to_wire(composer)
    return composer.getvalue()


def test_scan_and_format():
    text = "10 5 5060 sip.example.com."
    srv = Srv.scan(Scanner(text))
    assert srv.priority == 10
    assert srv.weight == 5
    assert srv.port == 5060
    assert srv.target == DName.from_text("sip.example.com.")
    assert str(srv) == text


def test_scan_relative_target():
    origin = DName.from_text("example.com.")
    srv = Srv.scan(Scanner("0 0 0 host"), origin)
    assert srv.target == DName.from_text("host.example.com.")


def test_wire_layout():
    target = DName.from_text("example.com.")
    srv = Srv(1, 2, 3, target)
    assert _wire(srv) == b"\x00\x01\x00\x02\x00\x03" + target.to_wire()


def test_wire_round_trip():
    srv = Srv(20, 0, 443, DName.from_text("svc.example.com."))
    assert Srv.parse(Parser(_wire(srv))) == srv


def test_scanned_record_reports_srv_type():
    srv = Srv.scan(Scanner("1 2 3 host.example.com."))
    assert srv.rtype == Rtype.SRV


def test_scan_out_of_range_port():
    with pytest.raises(ScanError):
        Srv.scan(Scanner("1 1 70000 host.example.com."))


def test_constructor_rejects_out_of_range():
    with pytest.raises(ValueError):
        Srv(-1, 0, 0, DName.from_text("example.com."))


def test_parse_short_data():
    with pytest.raises(ParseError):
        Srv.parse(Parser(b"\x00\x01\x00"))