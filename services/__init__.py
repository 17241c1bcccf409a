"""
services - Storage layer sitting between the import engine / API and DB.
"""

from services.record_store import (                 # noqa: F401
    RecordStore,
    SqlRecordStore,
    list_records,
    to_model,
)
