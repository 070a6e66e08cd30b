import ipaddress

import pytest

from zonerdata.base import Composer, DName, ParseError, Parser, Scanner, ScanError
from zonerdata.txtwks import Txt, Wks, WksBitmap


def _wire(record):
    composer = Composer()
    record.to_wire(composer)
    return composer.getvalue()


def test_txt_scan_single_string():
    txt = Txt.scan(Scanner("hello"))
    assert txt.data == b"\x05hello"
    assert txt.text() == b"hello"
    assert list(txt) == [b"hello"]


def test_txt_scan_long_phrase_is_split():
    phrase = "x" * 300
    txt = Txt.scan(Scanner(phrase))
    items = list(txt)
    assert [len(item) for item in items] == [255, 45]
    assert txt.text() == phrase.encode()


def test_txt_scan_exactly_255_adds_empty_string():
    txt = Txt.scan(Scanner("y" * 255))
    assert txt.data == b"\xff" + b"y" * 255 + b"\x00"
    assert list(txt) == [b"y" * 255, b""]


def test_txt_scan_quoted_with_space():
    txt = Txt.scan(Scanner('"a b"'))
    assert txt.text() == b"a b"
    assert Txt.scan(Scanner(f'"{txt}"')) == txt


def test_txt_multiple_strings_text_concatenates():
    txt = Txt(b"\x02ab\x03cde")
    assert list(txt) == [b"ab", b"cde"]
    assert txt.text() == b"abcde"
    assert str(txt) == "abcde"


def test_txt_empty_text():
    assert Txt(b"").text() == b""
    assert list(Txt(b"")) == []


def test_txt_iter_truncated_tail():
    assert list(Txt(b"\x05ab")) == [b"ab"]


def test_txt_parse_round_trip():
    txt = Txt(b"\x02ab\x03cde")
    wire = _wire(txt)
    assert wire == txt.data
    assert Txt.parse(Parser(wire)) == txt


def test_txt_parse_rejects_overlong_string():
    with pytest.raises(ParseError):
        Txt.parse(Parser(b"\x05ab"))


def test_bitmap_set_and_serves():
    bitmap = WksBitmap()
    bitmap.set_serves(0, True)
    assert bitmap.as_bytes() == b"\x01"
    bitmap.set_serves(25, True)
    assert bitmap.serves(25)
    assert not bitmap.serves(24)
    assert not bitmap.serves(1000)
    assert list(bitmap) == [0, 25]
    bitmap.set_serves(25, False)
    assert list(bitmap) == [0]


def test_bitmap_eq_ignores_trailing_zeros():
    assert WksBitmap(b"\x01\x00\x00") == WksBitmap(b"\x01")
    assert not WksBitmap(b"\x01") == WksBitmap(b"\x02")


def test_bitmap_rejects_bad_port():
    with pytest.raises(ValueError):
        WksBitmap().set_serves(70000, True)


def test_wks_scan_with_numbers():
    wks = Wks.scan(Scanner("192.0.2.1 6 25 80"))
    assert wks.address == ipaddress.IPv4Address("192.0.2.1")
    assert wks.protocol == 6
    assert list(wks) == [25, 80]
    assert wks.serves(80)
    assert str(wks) == "192.0.2.1 6 25 80"


def test_wks_scan_stops_at_unknown_service():
    scanner = Scanner("192.0.2.1 17 53 bogusservicename")
    wks = Wks.scan(scanner)
    assert list(wks) == [53]
    assert scanner.scan_word() == "bogusservicename"


def test_wks_scan_unknown_protocol():
    with pytest.raises(ScanError):
        Wks.scan(Scanner("192.0.2.1 notaprotocolname 25"))


def test_wks_wire_round_trip():
    bitmap = WksBitmap()
    bitmap.set_serves(0, True)
    wks = Wks("192.0.2.1", 6, bitmap)
    wire = _wire(wks)
    assert wire == ipaddress.IPv4Address("192.0.2.1").packed + b"\x06\x01"
    assert Wks.parse(Parser(wire)) == wks


def test_wks_rejects_bad_protocol():
    with pytest.raises(ValueError):
        Wks("192.0.2.1", 300)


def test_wks_scan_relative_origin_ignored():
    origin = DName.from_text("example.com.")
    wks = Wks.scan(Scanner("192.0.2.9 6"), origin)
    assert list(wks) == []
    assert str(wks) == "192.0.2.9 6"