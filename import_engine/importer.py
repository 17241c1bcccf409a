"""
import_engine.importer - Top-level orchestrator.

Coordinates csv_parser → field_map → row_processor → duplicate index →
store and produces a structured ImportResult.

Rows are handled strictly one at a time: the duplicate index must
reflect every earlier row before the next one is checked.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING, Callable, Iterator, Optional

import config
from import_engine.csv_parser import ParsedRow, parse_csv
from import_engine.duplicates import DuplicateIndex
from import_engine.errors import (
    ImportAbortedError, PersistenceError, RowValidationError,
)
from import_engine.field_map import missing_required, resolve_columns, unmapped_headers
from import_engine.report import ImportResult, ResultBuilder
from import_engine.row_processor import RowProcessor
from schema.entities import EntitySchema, get_schema
from schema.records import ImportRecord

if TYPE_CHECKING:
    from services.record_store import RecordStore

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]

IMPORTED = "imported"
DUPLICATE = "duplicate"
ERROR = "error"


@dataclass(frozen=True)
class RowOutcome:
    """Progress event emitted once per processed row."""
    row: int
    total: int
    status: str
    message: str = ""
    record: Optional[ImportRecord] = None


class ImportContext:
    """
    Everything one import run owns: duplicate index, counters, cancel
    flag.  Created per invocation and never shared between runs.
    """

    def __init__(
        self,
        schema: EntitySchema,
        *,
        skip_duplicates: bool = True,
        run_date: Optional[date] = None,
        max_consecutive_failures: int = config.MAX_CONSECUTIVE_FAILURES,
    ):
        self.schema = schema
        self.skip_duplicates = skip_duplicates
        self.run_date = run_date or date.today()
        self.max_consecutive_failures = max_consecutive_failures
        self.index = DuplicateIndex()
        self.result = ResultBuilder(schema.name, skip_duplicates=skip_duplicates)
        self.consecutive_failures = 0
        self._cancel = threading.Event()

    def cancel(self) -> None:
        """Stop before the next row.  Safe to call from another thread."""
        self._cancel.set()

    @property
    def cancelled(self) -> bool:
        return self._cancel.is_set()


class ImportEngine:

    def __init__(self, store: RecordStore, context: ImportContext):
        self.store = store
        self.context = context

    def run(self, content: str | bytes,
            progress: Optional[ProgressCallback] = None) -> ImportResult:
        """Drive iter_rows() to completion, reporting (current, total)."""
        for outcome in self.iter_rows(content):
            if progress is not None:
                progress(outcome.row, outcome.total)
        return self.context.result.freeze()

    def iter_rows(self, content: str | bytes) -> Iterator[RowOutcome]:
        """
        Process the file lazily, yielding one RowOutcome per row.

        MalformedFileError is raised before the first outcome.
        ImportAbortedError is raised mid-iteration.
        """
        ctx = self.context
        schema = ctx.schema

        parsed = parse_csv(content)
        column_map = resolve_columns(schema, parsed.headers)

        missing = missing_required(schema, column_map)
        if missing:
            logger.warning(f"{schema.name} import: header lacks required "
                           f"column(s) {', '.join(missing)}")
        ignored = unmapped_headers(column_map, parsed.headers)
        if ignored:
            logger.debug(f"{schema.name} import: ignoring column(s) {ignored}")

        if ctx.skip_duplicates:
            size = ctx.index.seed(self.store.existing_keys(schema))
            logger.debug(f"{schema.name} import: {size} existing key(s) loaded")

        processor = RowProcessor(schema, column_map, ctx.run_date)
        total = len(parsed.rows)

        for row in parsed.rows:
            if ctx.cancelled:
                ctx.result.cancelled = True
                logger.info(f"{schema.name} import cancelled before row {row.number}")
                break
            yield self._process_row(row, processor, total)

    # ── Private helpers ────────────────────────────────────────────────

    def _process_row(self, row: ParsedRow, processor: RowProcessor,
                     total: int) -> RowOutcome:
        ctx = self.context
        result = ctx.result

        if row.error is not None:
            result.add_error(row.number, row.error)
            return RowOutcome(row.number, total, ERROR, row.error)

        try:
            record, warnings = processor.process(row.values)
        except RowValidationError as exc:
            result.add_error(row.number, str(exc))
            return RowOutcome(row.number, total, ERROR, str(exc))

        for warning in warnings:
            logger.debug(f"row {row.number}: {warning}")
            result.add_warning(row.number, warning)

        key = record.duplicate_key()
        if ctx.skip_duplicates and key in ctx.index:
            result.add_duplicate()
            return RowOutcome(row.number, total, DUPLICATE, record=record)

        try:
            self.store.insert(record)
        except PersistenceError as exc:
            return self._insert_failed(row, total, f"could not save record: {exc}")
        except Exception as exc:
            return self._insert_failed(row, total, f"Unexpected: {exc}")

        ctx.consecutive_failures = 0
        ctx.index.add(key)
        result.add_success()
        return RowOutcome(row.number, total, IMPORTED, record=record)

    def _insert_failed(self, row: ParsedRow, total: int, message: str) -> RowOutcome:
        ctx = self.context
        ctx.consecutive_failures += 1
        ctx.result.add_error(row.number, message)
        logger.warning(f"{ctx.schema.name} import row {row.number}: {message}")

        if ctx.consecutive_failures >= ctx.max_consecutive_failures:
            logger.error(f"{ctx.schema.name} import aborted after "
                         f"{ctx.consecutive_failures} consecutive save failures")
            raise ImportAbortedError(
                f"aborted after {ctx.consecutive_failures} consecutive save "
                f"failures (last: {message})",
                ctx.result.freeze(),
            )
        return RowOutcome(row.number, total, ERROR, message)


def run_import(
    content: str | bytes,
    entity: str,
    store: RecordStore,
    *,
    skip_duplicates: bool = config.DEFAULT_SKIP_DUPLICATES,
    progress: Optional[ProgressCallback] = None,
    context: Optional[ImportContext] = None,
) -> ImportResult:
    """
    Import a CSV blob for one entity into ``store``.

    Parameters
    ----------
    content : raw CSV (bytes or str)
    entity : "partner", "donor" or "company"
    store : RecordStore (existing_keys + insert)
    skip_duplicates : if False, repeated keys are inserted as new records
    progress : called with (current, total) after each row
    context : pre-built ImportContext, e.g. to cancel from another thread

    Returns
    -------
    ImportResult with per-row error details
    """
    schema = get_schema(entity)
    if context is None:
        context = ImportContext(schema, skip_duplicates=skip_duplicates)
    elif context.schema.name != schema.name:
        raise ValueError(f"context is for {context.schema.name!r}, not {schema.name!r}")

    logger.info(f"{schema.name} import started "
                f"(skip_duplicates={context.skip_duplicates})")
    result = ImportEngine(store, context).run(content, progress)
    logger.info(f"{schema.name} import finished: {result.success_count} imported, "
                f"{result.duplicate_count} duplicate(s), {result.error_count} error(s)"
                f" / {result.total_rows} rows")
    return result


def import_file(
    content: str | bytes,
    entity: str,
    *,
    skip_duplicates: bool = config.DEFAULT_SKIP_DUPLICATES,
    progress: Optional[ProgressCallback] = None,
    context: Optional[ImportContext] = None,
) -> ImportResult:
    """
    run_import() against the application database.

    Accepted rows are committed even when the run is aborted or
    cancelled; nothing is rolled back retroactively.
    """
    from db.engine import get_session
    from services.record_store import SqlRecordStore

    session = get_session()
    store = SqlRecordStore(session)
    try:
        result = run_import(content, entity, store, skip_duplicates=skip_duplicates,
                            progress=progress, context=context)
        store.commit()
        return result
    except ImportAbortedError:
        store.commit()
        raise
    except Exception:
        store.rollback()
        raise
    finally:
        session.close()
