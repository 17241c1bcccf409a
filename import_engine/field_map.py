"""
import_engine.field_map - CSV header ↔ record-attribute mapping.

Headers are matched case-insensitively against each field's canonical
column name first, then its aliases in order.  A header is claimed by
at most one field; columns no field claims are ignored.
"""

from __future__ import annotations

from schema.entities import EntitySchema


def resolve_columns(schema: EntitySchema, headers: list[str]) -> dict[str, str]:
    """Return {record attribute: CSV header} for every field found."""
    by_fold = {h.casefold(): h for h in headers if h}
    claimed: set[str] = set()
    mapping: dict[str, str] = {}

    for spec in schema.fields:
        for label in spec.labels:
            header = by_fold.get(label.casefold())
            if header is not None and header not in claimed:
                mapping[spec.attr] = header
                claimed.add(header)
                break
    return mapping


def missing_required(schema: EntitySchema, mapping: dict[str, str]) -> list[str]:
    """Canonical names of required columns the header does not carry."""
    return [f.column for f in schema.required if f.attr not in mapping]


def unmapped_headers(mapping: dict[str, str], headers: list[str]) -> list[str]:
    used = set(mapping.values())
    return [h for h in headers if h and h not in used]
