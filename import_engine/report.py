"""
import_engine.report - Structured result of a CSV import run.

ResultBuilder is mutated row by row while the run is in progress;
freeze() turns it into the immutable ImportResult handed back to the
caller.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class RowError:
    row: int            # 1-based, header excluded
    message: str

    def __str__(self) -> str:
        return f"Row {self.row}: {self.message}"

    def to_dict(self) -> dict:
        return {"row": self.row, "message": self.message}


@dataclass(frozen=True)
class ImportResult:
    entity: str
    success_count: int = 0
    duplicate_count: int = 0
    errors: tuple[RowError, ...] = ()
    warnings: tuple[RowError, ...] = ()
    skip_duplicates: bool = True
    cancelled: bool = False

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def total_rows(self) -> int:
        return self.success_count + self.duplicate_count + self.error_count

    def error_log(self) -> str:
        """Downloadable detail log: one 'Row n: message' line per error."""
        return "\n".join(str(e) for e in self.errors)

    def to_dict(self) -> dict:
        return {
            "entity": self.entity,
            "total_rows": self.total_rows,
            "success_count": self.success_count,
            "duplicate_count": self.duplicate_count,
            "error_count": self.error_count,
            "errors": [e.to_dict() for e in self.errors],
            "warnings": [w.to_dict() for w in self.warnings],
            "skip_duplicates": self.skip_duplicates,
            "cancelled": self.cancelled,
            "error_log": self.error_log(),
        }


@dataclass
class ResultBuilder:
    entity: str
    skip_duplicates: bool = True
    success_count: int = 0
    duplicate_count: int = 0
    cancelled: bool = False
    errors: list[RowError] = field(default_factory=list)
    warnings: list[RowError] = field(default_factory=list)

    def add_success(self):
        self.success_count += 1

    def add_duplicate(self):
        self.duplicate_count += 1

    def add_error(self, row: int, message: str):
        self.errors.append(RowError(row, message))

    def add_warning(self, row: int, message: str):
        self.warnings.append(RowError(row, message))

    def freeze(self) -> ImportResult:
        return ImportResult(
            entity=self.entity,
            success_count=self.success_count,
            duplicate_count=self.duplicate_count,
            errors=tuple(self.errors),
            warnings=tuple(self.warnings),
            skip_duplicates=self.skip_duplicates,
            cancelled=self.cancelled,
        )
