"""
import_engine.row_processor - Validate and transform one CSV row into a record.

Single-responsibility: given a dict-row, either return a typed record
(plus any warnings) or raise RowValidationError.

Rules run per field in schema order and every failure is collected, so
a row with a bad email and a bad frequency reports both, email first.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional

import config
from import_engine.errors import RowValidationError
from schema.entities import EntitySchema, FieldSpec
from schema.records import FREQUENCIES, FREQUENCY_SYNONYMS, ImportRecord

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s.]+$")
_AMOUNT_NOISE_RE = re.compile(r"[\s$,]")
_CENTS = Decimal("0.01")
_DEGREES = Decimal("0.000001")

# Largest value a Numeric(12, 2) column holds
MAX_AMOUNT = Decimal("9999999999.99")

_COORDINATE_BOUNDS = {"latitude": 90, "longitude": 180}


class FieldError(ValueError):
    """One field failed its rule.  Collected by RowProcessor."""


class RowProcessor:
    """
    Bound to one schema, one header layout and one run date for the
    length of an import run.
    """

    def __init__(
        self,
        schema: EntitySchema,
        column_map: dict[str, str],
        run_date: date,
        date_formats: tuple[str, ...] = config.DATE_FORMATS,
    ):
        self.schema = schema
        self.column_map = column_map
        self.run_date = run_date
        self.date_formats = date_formats

    def process(self, row: dict[str, str]) -> tuple[ImportRecord, list[str]]:
        """
        Validate one row and build its record.
        Returns (record, warnings).  Raises RowValidationError.
        """
        values: dict[str, object] = {}
        problems: list[str] = []
        warnings: list[str] = []

        for spec in self.schema.fields:
            raw = self._raw(row, spec)

            if not raw:
                if spec.required:
                    msg = f"Missing required field: {spec.column}"
                    if spec.kind == "amount":
                        msg += " (invalid amount)"
                    problems.append(msg)
                    continue
                values[spec.attr] = self._blank_value(spec)
                continue

            try:
                values[spec.attr] = self._convert(spec, raw, warnings)
            except FieldError as exc:
                problems.append(str(exc))

        if problems:
            raise RowValidationError(problems)
        return self.schema.record_cls(**values), warnings

    # ── Private helpers ────────────────────────────────────────────────

    def _raw(self, row: dict[str, str], spec: FieldSpec) -> str:
        header = self.column_map.get(spec.attr)
        if header is None:
            return ""
        return (row.get(header) or "").strip()

    def _blank_value(self, spec: FieldSpec):
        if spec.kind == "date":
            return self.run_date if spec.default_today else None
        if spec.kind in _COORDINATE_BOUNDS:
            return None
        return spec.default

    def _convert(self, spec: FieldSpec, raw: str, warnings: list[str]):
        if spec.kind == "amount":
            return parse_amount(raw)
        if spec.kind == "frequency":
            return parse_frequency(raw)
        if spec.kind == "email":
            return check_email(raw)
        if spec.kind in _COORDINATE_BOUNDS:
            return parse_coordinate(raw, spec.column, _COORDINATE_BOUNDS[spec.kind])
        if spec.kind == "date":
            parsed = parse_date(raw, self.date_formats)
            if parsed is not None:
                return parsed
            if spec.required:
                raise FieldError(f"invalid date {raw!r} for {spec.column}")
            warnings.append(
                f"unparseable date {raw!r} for {spec.column}, "
                f"using {self.run_date.isoformat()}"
            )
            return self.run_date
        return raw


# ── Field parsers ─────────────────────────────────────────────────────

def parse_amount(raw: str) -> Decimal:
    """'$1,250.5' → Decimal('1250.50').  Negative, oversized or junk is rejected."""
    cleaned = _AMOUNT_NOISE_RE.sub("", raw)
    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        raise FieldError("invalid amount") from None
    if not amount.is_finite() or amount < 0 or amount > MAX_AMOUNT:
        raise FieldError("invalid amount")
    return amount.quantize(_CENTS, rounding=ROUND_HALF_UP)


def parse_coordinate(raw: str, column: str, bound: int) -> Decimal:
    """Signed decimal degrees within ±bound, e.g. '-89.6501'."""
    try:
        value = Decimal(raw.strip())
    except InvalidOperation:
        raise FieldError(f"invalid number {raw!r} for {column}") from None
    if not value.is_finite() or abs(value) > bound:
        raise FieldError(f"invalid number {raw!r} for {column}")
    return value.quantize(_DEGREES, rounding=ROUND_HALF_UP)


def parse_frequency(raw: str) -> str:
    value = raw.strip().lower()
    value = FREQUENCY_SYNONYMS.get(value, value)
    if value not in FREQUENCIES:
        raise FieldError(
            f"invalid frequency {raw!r} (expected {' or '.join(FREQUENCIES)})"
        )
    return value


def check_email(raw: str) -> str:
    value = raw.strip()
    if not _EMAIL_RE.match(value):
        raise FieldError(f"invalid email {raw!r}")
    return value


def parse_date(raw: str, formats: tuple[str, ...] = config.DATE_FORMATS) -> Optional[date]:
    """Try each format in order; None when none match."""
    value = raw.strip()
    for fmt in formats:
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue
    return None
