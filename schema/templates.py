"""
schema.templates - Downloadable CSV templates, one per entity.

Each template is the canonical header row plus one example row built
from the FieldSpec examples.  The example row is valid input, so a
template fed straight back to the importer imports one record.
"""

from __future__ import annotations

import csv
import io

from schema.entities import get_schema


def build_template(entity: str) -> str:
    schema = get_schema(entity)
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow([f.column for f in schema.fields])
    writer.writerow([f.example for f in schema.fields])
    return buf.getvalue()


def template_filename(entity: str) -> str:
    return f"{get_schema(entity).name}_import_template.csv"
