"""
import_engine.csv_parser - Low-level CSV reading and cleaning.

Responsibilities:
  • BOM removal (UTF-8 / UTF-8-SIG) and Latin-1 fallback
  • Quote-aware splitting (commas and newlines inside quotes)
  • Header / value whitespace stripping
  • Blank-line skipping
  • Per-row field-count check against the header
"""

from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from typing import Optional

from import_engine.errors import MalformedFileError


@dataclass(frozen=True)
class ParsedRow:
    """
    One data record.  ``number`` is 1-based from the first data record
    (header and blank lines excluded).  Exactly one of ``values`` and
    ``error`` is set.
    """
    number: int
    values: Optional[dict[str, str]] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class ParsedFile:
    headers: list[str]
    rows: list[ParsedRow]


def parse_csv(raw: str | bytes) -> ParsedFile:
    """
    Parse raw file content into headers + rows.

    Raises MalformedFileError when the file is empty, its header is blank, or
    the reader cannot make sense of it.  Rows with the wrong number of
    fields are returned with ``error`` set rather than raised.
    """
    text = _decode(raw)
    if not text.strip():
        raise MalformedFileError("CSV file is empty")

    reader = csv.reader(io.StringIO(text, newline=""))
    try:
        records = list(reader)
    except csv.Error as exc:
        raise MalformedFileError(f"line {reader.line_num}: {exc}") from exc

    headers: Optional[list[str]] = None
    rows: list[ParsedRow] = []
    number = 0

    for rec in records:
        if headers is None:
            if _is_empty_line(rec):
                continue
            if _is_blank(rec):
                raise MalformedFileError("CSV header is empty")
            headers = _clean_headers(rec)
            continue
        if _is_blank(rec):
            continue

        number += 1
        if len(rec) != len(headers):
            rows.append(ParsedRow(
                number,
                error=f"expected {len(headers)} fields, found {len(rec)}",
            ))
            continue
        rows.append(ParsedRow(
            number,
            values={h: v.strip() for h, v in zip(headers, rec)},
        ))

    if headers is None:
        raise MalformedFileError("CSV has no header row")
    return ParsedFile(headers=headers, rows=rows)


def _clean_headers(rec: list[str]) -> list[str]:
    headers = [h.strip() for h in rec]
    seen: set[str] = set()
    for h in headers:
        if not h:
            continue
        if h.casefold() in seen:
            raise MalformedFileError(f"duplicate column {h!r} in header")
        seen.add(h.casefold())
    return headers


def _is_blank(rec: list[str]) -> bool:
    return not any(cell.strip() for cell in rec)


def _is_empty_line(rec: list[str]) -> bool:
    """No delimiters at all: an empty or whitespace-only line."""
    return len(rec) <= 1 and _is_blank(rec)


def _decode(raw: str | bytes) -> str:
    if isinstance(raw, bytes):
        # Strip UTF-8 BOM
        if raw.startswith(b"\xef\xbb\xbf"):
            raw = raw[3:]
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError:
            # Legacy spreadsheet exports
            return raw.decode("latin-1")
    if isinstance(raw, str):
        if raw.startswith("\ufeff"):
            return raw[1:]
        return raw
    raise MalformedFileError(f"cannot read CSV from {type(raw).__name__}")
