"""
import_engine - CSV import pipeline.

Public API:
    run_import(content, entity, store, skip_duplicates=True) → ImportResult
    import_file(content, entity, skip_duplicates=True)       → ImportResult
"""

from import_engine.importer import (                # noqa: F401
    run_import,
    import_file,
    ImportContext,
    ImportEngine,
    RowOutcome,
)
from import_engine.report import ImportResult, RowError      # noqa: F401
from import_engine.errors import (                            # noqa: F401
    ImportEngineError,
    MalformedFileError,
    RowValidationError,
    PersistenceError,
    ImportAbortedError,
    UnknownEntityError,
)
