"""Catalog batch codec: rows of catalog data to and from comma-separated text.

Deliberately simpler than RFC 4180, for spreadsheet round-trips of plain
catalog values:

* encode quotes every text value (doubling inner quotes) and writes numbers
  and booleans bare (whole floats without a trailing ".0"); None and missing
  columns become empty fields. Headers may be quoted too.
* decode splits each line on *every* comma, so a quoted value containing a
  comma or a newline does not survive a round trip. Fragments of such a value
  keep their stray quote characters and shift the columns after them.
* decode never raises: short rows are padded with "", surplus fields are
  ignored, and rows that are entirely empty are dropped.
"""

import re

CatalogRow = dict[str, str]

_LINE_BREAK = re.compile(r"\r?\n")


def _encode_field(value) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return '"' + value.replace('"', '""') + '"'
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _decode_field(raw: str) -> str:
    value = raw.strip()
    if len(value) >= 2 and value[0] == '"' and value[-1] == '"':
        return value[1:-1].replace('""', '"')
    return value


def encode(headers, rows) -> str:
    """Render `rows` under `headers`: a header line, then one line per row, joined by CRLF."""
    lines = [",".join(headers)]
    for row in rows:
        lines.append(",".join(_encode_field(row.get(key)) for key in headers))
    return "\r\n".join(lines)


def decode(text: str) -> list[CatalogRow]:
    """Parse text produced by `encode` (or a plain spreadsheet export) into rows of text values."""
    header_line, *lines = _LINE_BREAK.split(text.strip())
    headers = [_decode_field(h) for h in header_line.split(",")]

    rows = []
    for line in lines:
        values = line.split(",")
        row = {}
        for i, header in enumerate(headers):
            row[header] = _decode_field(values[i]) if i < len(values) else ""
        if any(v != "" for v in row.values()):
            rows.append(row)
    return rows
