"""
import_engine.csv_parser - Low-level CSV reading and cleaning.

Responsibilities:
  • Encoding detection: UTF-8 BOM → utf-8-sig, else utf-8, else latin1
    (Excel "CSV" exports are often cp1252)
  • Header whitespace stripping
  • Decoding the whole upload into a list of row dicts up front, so a
    corrupt file fails before any row touches the database
  • Tracking the physical line each record starts on
"""

from __future__ import annotations

import csv
import io
from pathlib import Path


class DecodeError(Exception):
    """Raised when an upload cannot be read as CSV at all."""
    pass


def read_rows(path: str | Path) -> list[tuple[int, dict[str, str]]]:
    """Read a CSV file from disk and return its (line, row) pairs."""
    try:
        with open(path, "rb") as fh:
            raw = fh.read()
    except OSError as exc:
        raise DecodeError(f"cannot read upload: {exc}") from exc
    return numbered_rows(raw)


def decode_rows(raw: str | bytes) -> list[dict[str, str]]:
    """
    Turn raw CSV content into an ordered list of {header: value} dicts.

    Empty content yields an empty list.  Short rows are padded with "",
    surplus cells are dropped.  Raises DecodeError on malformed CSV
    (e.g. stray quotes).
    """
    return [row for _line, row in numbered_rows(raw)]


def numbered_rows(raw: str | bytes) -> list[tuple[int, dict[str, str]]]:
    """
    Like decode_rows(), but pairs every row with the file line it
    starts on (header = 1).  Blank lines are skipped and a quoted cell
    spanning several lines keeps the line of its first one.
    """
    text = _decode(raw)
    if not text.strip():
        return []

    reader = csv.reader(io.StringIO(text, newline=""), strict=True)
    try:
        header = next(reader, None)
        while header == []:
            header = next(reader, None)
        if header is None:
            return []
        # Strip whitespace from every header
        fields = [h.strip() for h in header]

        rows = []
        start = reader.line_num + 1
        for cells in reader:
            if cells:
                cells += [""] * (len(fields) - len(cells))
                rows.append((start, dict(zip(fields, cells))))
            start = reader.line_num + 1
        return rows
    except csv.Error as exc:
        raise DecodeError(f"malformed CSV near line {reader.line_num}: {exc}") from exc


def _decode(raw: str | bytes) -> str:
    if isinstance(raw, str):
        return raw[1:] if raw.startswith("\ufeff") else raw

    # A UTF-8 BOM settles the encoding
    if raw.startswith(b"\xef\xbb\xbf"):
        try:
            return raw.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise DecodeError(f"file has a UTF-8 BOM but is not UTF-8: {exc}") from exc

    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        # latin1 maps every byte, so this cannot fail
        return raw.decode("latin1")
