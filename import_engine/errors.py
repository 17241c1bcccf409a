"""
import_engine.errors - Exception taxonomy for import runs.

Fatal (propagate to the caller):
    MalformedFileError   file unreadable, empty, or has no header
    ImportAbortedError   too many inserts failed in a row
    UnknownEntityError   no schema for the requested entity

Per-row (caught by the engine and recorded on the result):
    RowValidationError   row failed its schema rules
    PersistenceError     the store refused the record

A duplicate is an outcome, not an error, so there is no class for it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from schema.entities import UnknownEntityError      # noqa: F401

if TYPE_CHECKING:
    from import_engine.report import ImportResult


class ImportEngineError(Exception):
    """Base class for every error raised by the import engine."""


class MalformedFileError(ImportEngineError):
    """The file cannot be parsed at all."""


class RowValidationError(ImportEngineError):
    """One row broke one or more schema rules."""

    def __init__(self, problems: list[str]):
        self.problems = list(problems)
        super().__init__("; ".join(self.problems))


class PersistenceError(ImportEngineError):
    """The storage collaborator failed to save one record."""


class ImportAbortedError(ImportEngineError):
    """Run stopped early.  ``result`` holds what was processed so far."""

    def __init__(self, message: str, result: "ImportResult"):
        super().__init__(message)
        self.result = result
