"""Wire-format parsing and composing, domain names and a master-file scanner."""

from __future__ import annotations

import enum
import re
from contextlib import contextmanager
from typing import Iterator, Optional, Tuple, Union

MAX_LABEL_LEN = 63
MAX_NAME_LEN = 255
MAX_CHARSTR_LEN = 255


class Rtype(enum.IntEnum):
    """Resource record types known to this package."""

    A = 1
    NS = 2
    MD = 3
    MF = 4
    CNAME = 5
    SOA = 6
    MB = 7
    MG = 8
    MR = 9
    NULL = 10
    WKS = 11
    PTR = 12
    HINFO = 13
    MINFO = 14
    MX = 15
    TXT = 16
    AAAA = 28
    SRV = 33
    OPT = 41


class ParseError(ValueError):
    """Wire-format data is malformed or too short."""


class ScanError(ValueError):
    """Master-file text could not be scanned."""


def _escape_byte(value: int, special: bytes, low: int) -> str:
    if value in special:
        return "\\" + chr(value)
    if low <= value <= 0x7E:
        return chr(value)
    return f"\\{value:03d}"


_LABEL_SPECIAL = b'.\\"();@$'
_CHARSTR_SPECIAL = b'"\\ ();'


def format_charstr(data: bytes) -> str:
    """Format a character string so that it scans back as one token."""
    return "".join(_escape_byte(b, _CHARSTR_SPECIAL, 0x20) for b in data)


class DName:
    """A domain name made of raw labels, either absolute or relative."""

    __slots__ = ("labels", "absolute")

    def __init__(self, labels: Tuple[bytes, ...] = (), absolute: bool = True):
        labels = tuple(bytes(label) for label in labels)
        _check_labels(labels, absolute, ValueError)
        self.labels = labels
        self.absolute = absolute

    @classmethod
    def from_text(cls, text: str, origin: Optional["DName"] = None) -> "DName":
        """Build a name from its presentation form, appending origin if relative."""
        if text == "@":
            if origin is None:
                raise ScanError("'@' used without an origin")
            return origin
        if text == ".":
            return cls((), True)
        labels = []
        current = bytearray()
        for match in _NAME_PART.finditer(text):
            escaped, dot, lone, plain = match.groups()
            if dot is not None:
                if not current:
                    raise ScanError(f"empty label in {text!r}")
                labels.append(bytes(current))
                current = bytearray()
            elif lone is not None:
                raise ScanError(f"dangling escape in {text!r}")
            elif escaped is not None:
                current += _decode_escape(escaped)
            else:
                current += plain.encode("utf-8", "surrogateescape")
        if current:
            labels.append(bytes(current))
            absolute = False
        elif labels:
            absolute = True
        else:
            raise ScanError("empty domain name")
        if not absolute and origin is not None:
            labels.extend(origin.labels)
            absolute = origin.absolute
        _check_labels(labels, absolute, ScanError)
        return cls(tuple(labels), absolute)

    def to_wire(self) -> bytes:
        """Return the uncompressed wire form of an absolute name."""
        if not self.absolute:
            raise ValueError("a relative name has no wire format")
        return b"".join(bytes([len(label)]) + label for label in self.labels) + b"\x00"

    def is_absolute(self) -> bool:
        return self.absolute

    def _key(self) -> Tuple[Tuple[bytes, ...], bool]:
        return tuple(label.lower() for label in self.labels), self.absolute

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DName):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        return f"DName({str(self)!r})"

    def __str__(self) -> str:
        if not self.labels:
            return "." if self.absolute else ""
        text = ".".join(
            "".join(_escape_byte(b, _LABEL_SPECIAL, 0x21) for b in label)
            for label in self.labels
        )
        return text + "." if self.absolute else text


_NAME_PART = re.compile(r"\\([0-9]{3}|.)|(\.)|(\\)|([^\\.]+)", re.S)


def _decode_escape(escaped: str) -> bytes:
    if len(escaped) == 3:
        value = int(escaped)
        if value > 255:
            raise ScanError(f"escape value {value} out of range")
        return bytes([value])
    return escaped.encode("utf-8", "surrogateescape")


def _check_labels(labels, absolute: bool, error: type) -> None:
    total = 1 if absolute else 0
    for label in labels:
        if not label:
            raise error("empty label")
        if len(label) > MAX_LABEL_LEN:
            raise error(f"label longer than {MAX_LABEL_LEN} octets")
        total += len(label) + 1
    if total > MAX_NAME_LEN:
        raise error(f"name longer than {MAX_NAME_LEN} octets")


class Parser:
    """Reads wire-format data from a message, starting at a position."""

    def __init__(self, data: bytes, pos: int = 0):
        self.data = bytes(data)
        if not 0 <= pos <= len(self.data):
            raise ValueError("position outside of data")
        self.pos = pos

    def remaining(self) -> int:
        return len(self.data) - self.pos

    def _take(self, length: int) -> bytes:
        if length < 0:
            raise ValueError("negative length")
        if length > self.remaining():
            raise ParseError("short buffer")
        chunk = self.data[self.pos:self.pos + length]
        self.pos += length
        return chunk

    def parse_u8(self) -> int:
        return self._take(1)[0]

    def parse_u16(self) -> int:
        return int.from_bytes(self._take(2), "big")

    def parse_u32(self) -> int:
        return int.from_bytes(self._take(4), "big")

    def parse_bytes(self, length: int) -> bytes:
        return self._take(length)

    def parse_charstr(self) -> bytes:
        """Read a length-prefixed character string."""
        return self._take(self.parse_u8())

    def parse_name(self) -> DName:
        """Read a possibly compressed domain name."""
        data = self.data
        pos = self.pos
        end = None
        seen = set()
        labels = []
        wire_len = 1
        while True:
            if pos >= len(data):
                raise ParseError("short buffer")
            length = data[pos]
            kind = length & 0xC0
            if kind == 0xC0:
                if pos + 1 >= len(data):
                    raise ParseError("short buffer")
                target = ((length & 0x3F) << 8) | data[pos + 1]
                if end is None:
                    end = pos + 2
                if target in seen:
                    raise ParseError("compression loop")
                seen.add(target)
                pos = target
                continue
            if kind:
                raise ParseError("unknown label type")
            pos += 1
            if length == 0:
                break
            if pos + length > len(data):
                raise ParseError("short buffer")
            labels.append(data[pos:pos + length])
            wire_len += length + 1
            if wire_len > MAX_NAME_LEN:
                raise ParseError("name too long")
            pos += length
        self.pos = pos if end is None else end
        return DName(tuple(labels), True)


class Composer:
    """Builds wire-format data, optionally compressing domain names."""

    def __init__(self, compress: bool = False):
        self.compress = compress
        self._buf = bytearray()
        self._names: dict = {}

    def compose_u8(self, value: int) -> None:
        self._buf += value.to_bytes(1, "big")

    def compose_u16(self, value: int) -> None:
        self._buf += value.to_bytes(2, "big")

    def compose_u32(self, value: int) -> None:
        self._buf += value.to_bytes(4, "big")

    def compose_bytes(self, data: bytes) -> None:
        self._buf += data

    def compose_charstr(self, data: bytes) -> None:
        if len(data) > MAX_CHARSTR_LEN:
            raise ValueError("character string longer than 255 octets")
        self.compose_u8(len(data))
        self._buf += data

    def compose_name(self, name: DName, compress: Optional[bool] = None) -> None:
        """Append an absolute name, using compression pointers if enabled."""
        if compress is None:
            compress = self.compress
        if not name.is_absolute():
            raise ValueError("cannot compose a relative name")
        if not compress:
            self._buf += name.to_wire()
            return
        labels = name.labels
        for index, label in enumerate(labels):
            key = tuple(part.lower() for part in labels[index:])
            target = self._names.get(key)
            if target is not None:
                self.compose_u16(0xC000 | target)
                return
            if len(self._buf) < 0x4000:
                self._names[key] = len(self._buf)
            self._buf += bytes([len(label)]) + label
        self._buf.append(0)

    def getvalue(self) -> bytes:
        return bytes(self._buf)


_WORD_PATTERN = re.compile(r'"((?:\\.|[^"\\])*)"|((?:\\.|[^\s();"\\])+)', re.S)
_UNESCAPE = re.compile(r"\\([0-9]{3}|.)|([^\\]+)", re.S)
_HEX_WORD = re.compile(r"(?:[0-9a-fA-F]{2})+")
_DECIMAL = re.compile(r"[0-9]+")


class Scanner:
    """Splits master-file record data into words."""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    @contextmanager
    def _atomic(self) -> Iterator[None]:
        saved = self.pos
        try:
            yield
        except Exception:
            self.pos = saved
            raise

    def _skip_space(self) -> None:
        text = self.text
        while self.pos < len(text):
            ch = text[self.pos]
            if ch.isspace() or ch in "()":
                self.pos += 1
            elif ch == ";":
                newline = text.find("\n", self.pos)
                self.pos = len(text) if newline < 0 else newline + 1
            else:
                break

    def _next_word(self) -> str:
        self._skip_space()
        if self.pos >= len(self.text):
            raise ScanError("unexpected end of data")
        match = _WORD_PATTERN.match(self.text, self.pos)
        if match is None:
            raise ScanError(f"invalid input at position {self.pos}")
        self.pos = match.end()
        quoted, plain = match.groups()
        return quoted if quoted is not None else plain

    @staticmethod
    def _unescape(raw: str) -> bytes:
        out = bytearray()
        for match in _UNESCAPE.finditer(raw):
            escaped, plain = match.groups()
            if escaped is not None:
                out += _decode_escape(escaped)
            else:
                out += plain.encode("utf-8", "surrogateescape")
        return bytes(out)

    def at_end(self) -> bool:
        self._skip_space()
        return self.pos >= len(self.text)

    def scan_word(self) -> str:
        """Return the next word with escapes resolved."""
        with self._atomic():
            return self._unescape(self._next_word()).decode("utf-8", "surrogateescape")

    def _scan_int(self, bits: int) -> int:
        with self._atomic():
            raw = self._next_word()
            if not _DECIMAL.fullmatch(raw):
                raise ScanError(f"expected a number, got {raw!r}")
            value = int(raw)
            if value >= 1 << bits:
                raise ScanError(f"number {value} out of range")
            return value

    def scan_u16(self) -> int:
        return self._scan_int(16)

    def scan_u32(self) -> int:
        return self._scan_int(32)

    def skip_literal(self, literal: Union[str, bytes]) -> None:
        """Consume the next word if it is exactly literal, else raise."""
        if isinstance(literal, bytes):
            literal = literal.decode("ascii")
        with self._atomic():
            raw = self._next_word()
            if raw != literal:
                raise ScanError(f"expected {literal!r}, got {raw!r}")

    def scan_hex_word(self) -> bytes:
        """Return the bytes of a word made of pairs of hex digits."""
        with self._atomic():
            raw = self._next_word()
            if not _HEX_WORD.fullmatch(raw):
                raise ScanError(f"invalid hex data {raw!r}")
            return bytes.fromhex(raw)

    def scan_phrase_bytes(self) -> bytes:
        with self._atomic():
            return self._unescape(self._next_word())

    def scan_charstr(self) -> bytes:
        with self._atomic():
            data = self._unescape(self._next_word())
            if len(data) > MAX_CHARSTR_LEN:
                raise ScanError("character string longer than 255 octets")
            return data

    def scan_name(self, origin: Optional[DName] = None) -> DName:
        with self._atomic():
            return DName.from_text(self._next_word(), origin)