"""
Parser for the 1024 bytes text header of Open Ephys files.

The header was written to be evaluated by Matlab, for instance::

    header.format = 'Open Ephys Data Format';
    header.version = 0.4;
    header.header_bytes = 1024;
    header.sampleRate = 30000;
    header.blockLength = 1024;
    header.bitVolts = 0.195;

Here it is never evaluated: only ``name = literal;`` statements are accepted,
a literal being a number or a quoted string. The ``header.`` prefix is removed
from the names.
"""

import re

from oeformat.core import HeaderFormatError


HEADER_SIZE = 1024

_statement_pat = re.compile(
    r"\s*(?P<name>[A-Za-z_]\w*(?:\.[A-Za-z_]\w*)*)\s*=\s*"
    r"(?P<value>'(?:[^']|'')*'|\"[^\"]*\"|[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)"
    r"\s*;"
)
_int_pat = re.compile(r"[-+]?\d+")

# bytes allowed after the last statement
_padding = " \t\r\n\x00"


def _convert_literal(txt):
    if txt[0] == "'":
        return txt[1:-1].replace("''", "'")
    if txt[0] == '"':
        return txt[1:-1]
    if _int_pat.fullmatch(txt):
        return int(txt)
    return float(txt)


def parse_header(raw):
    """
    Parse the header block.

    Parameters
    ----------
    raw: bytes
        The header block, usually the first 1024 bytes of the file.

    Returns
    -------
    header: dict
        field name -> int, float or str
    """
    txt = raw.decode("latin-1")
    header = {}
    pos = 0
    end = len(txt.rstrip(_padding))
    while pos < end:
        m = _statement_pat.match(txt, pos)
        if m is None:
            raise HeaderFormatError("Header is not a sequence of 'name = literal;' statements", offset=pos)
        name = m.group("name")
        if name.startswith("header."):
            name = name[len("header.") :]
        header[name] = _convert_literal(m.group("value"))
        pos = m.end()
    return header


def read_header(cursor):
    """Consume exactly HEADER_SIZE bytes from a ByteCursor and parse them."""
    if cursor.remaining() < HEADER_SIZE:
        raise HeaderFormatError(f"File is too small to hold a {HEADER_SIZE} bytes header ({cursor.remaining()} bytes)")
    return parse_header(cursor.read(HEADER_SIZE))


def read_file_header(filename):
    """Read header information from the first 1024 bytes of an Open Ephys file."""
    with open(filename, mode="rb") as f:
        raw = f.read(HEADER_SIZE)
    if len(raw) < HEADER_SIZE:
        raise HeaderFormatError(f"File is too small to hold a {HEADER_SIZE} bytes header ({len(raw)} bytes)")
    return parse_header(raw)
