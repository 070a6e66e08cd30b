# zonerdata

Record data for DNS resource records. It reads the data from wire format
messages, writes it back to wire format, reads it from master (zone) file
text and formats it in master file notation.

## Record types

| Module                 | Classes                                                                 |
|------------------------|-------------------------------------------------------------------------|
| `zonerdata.rfc1035`    | `A`, `Cname`, `Hinfo`, `Mb`, `Md`, `Mf`, `Mg`, `Minfo`, `Mr`, `Mx`, `Ns`, `Null`, `Ptr`, `Soa` |
| `zonerdata.txtwks`     | `Txt`, `Wks` (with the port bitmap `WksBitmap`)                         |
| `zonerdata.rfc2782`    | `Srv`                                                                   |
| `zonerdata.rfc3596`    | `Aaaa`                                                                  |
| `zonerdata.master`     | `GenericData` for data of any type kept as raw octets                   |

All of them derive from `RecordData` and carry their record type in the
class attribute `rtype` (an `Rtype` value). Every class has
`parse(parser)` to read wire data, `to_wire(composer)` to write it, and
`str()` for master file notation. All but `Null` also have
`scan(scanner, origin)` to read master file text; `Null` data is not
allowed in master files.

The single-name types (`Cname`, `Mb`, `Md`, `Mf`, `Mg`, `Mr`, `Ns`, `Ptr`)
share the base `NameRecord`; their name may be compressed when the
`Composer` is created with `compress=True`. Names in the other types are
always written uncompressed.

## Building blocks

`zonerdata.base` holds:

- `Rtype` – an `IntEnum` of the record types known to the package.
- `DName` – a domain name; `DName.from_text(text, origin)` reads the
  presentation form (relative names get the origin appended, `@` stands for
  the origin), `to_wire()` gives the uncompressed wire form. Names compare
  case-insensitively.
- `Parser(data, pos)` – reads integers, byte strings, character strings and
  (possibly compressed) domain names from wire data.
- `Composer(compress)` – builds wire data; `getvalue()` returns the bytes.
- `Scanner(text)` – splits master file record data into words, skipping
  whitespace, parentheses and `;` comments, and honouring quotes and
  `\X` / `\DDD` escapes.
- `format_charstr(data)` – formats a character string so that it scans
  back as one word.

Malformed wire data raises `ParseError`; master file text that cannot be
scanned raises `ScanError`. Both derive from `ValueError`.

## Usage

Scan record data from master file text:

```python
from zonerdata.base import DName, Rtype, Scanner
from zonerdata.master import scan_record_data

origin = DName.from_text("example.com.", None)
data = scan_record_data(Rtype.MX, Scanner("10 mail"), origin)
print(data)  # 10 mail.example.com.
```

`scan_record_data` first tries the generic format `\# <length> <hex>` for
every type and returns a `GenericData` if it matches; otherwise it uses the
type's own master format. Types without a master format (see
`record_class(rtype)`) accept only the generic format.

```python
data = scan_record_data(Rtype.A, Scanner(r"\# 4 c0000201"), None)
# GenericData(rtype=<Rtype.A: 1>, data=b'\xc0\x00\x02\x01')
```

Compose wire format data:

```python
from zonerdata.base import Composer
from zonerdata.rfc1035 import A

composer = Composer(False)
A.from_octets(192, 0, 2, 1).to_wire(composer)
composer.getvalue()  # b"\xc0\x00\x02\x01"
```

Format wire data in master file notation:

```python
from zonerdata.base import Parser, Rtype
from zonerdata.master import format_rdata

format_rdata(Rtype.A, Parser(b"\xc0\x00\x02\x01", 0))  # "192.0.2.1"
```

For types with a master format, `format_rdata` parses the data (moving the
parser) and returns `"<invalid data: ...>"` if it is malformed. For any
other type it returns the remaining data as hex in groups of two octets
separated by spaces, without moving the parser; `zonerdata.generic` offers
the same formatting as `format_data(data)` and the generic scanner as
`scan(scanner)`.

`Wks.scan` looks up protocol and service names with the system's
protocol and service databases and also accepts plain numbers.

## What the package does not do

It handles record data only. It does not read whole zone files (owner
names, TTLs, classes, directives), does not parse or build complete DNS
messages, and has no command-line program.

## Running the tests

```
pip install -e ".[test]"
pytest
```