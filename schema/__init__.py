"""
schema - Entity schemas, typed records and CSV templates.

Public API:
    entities.get_schema / entity_names / SCHEMAS
    records.PartnerRecord / DonorRecord / CompanyRecord
    templates.build_template / template_filename
"""

from schema.entities import (                       # noqa: F401
    EntitySchema,
    FieldSpec,
    UnknownEntityError,
    SCHEMAS,
    get_schema,
    entity_names,
)
from schema.records import (                        # noqa: F401
    PartnerRecord,
    DonorRecord,
    CompanyRecord,
    ImportRecord,
    FREQUENCIES,
)
from schema.templates import build_template, template_filename   # noqa: F401
