"""DNS resource record data in wire and master file formats."""

__version__ = "0.1.0"