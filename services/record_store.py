"""
services.record_store - Storage collaborator for the import engine.

The engine only needs two things from storage: the duplicate keys that
already exist for an entity, and a way to insert one record.  Anything
that provides those (RecordStore protocol) can back an import run;
SqlRecordStore is the SQLAlchemy implementation used by the app.

All session management is the caller's responsibility (open before,
commit/close after).  Each insert runs inside a SAVEPOINT, so one bad
row is rolled back on its own and the rest of the batch survives.
"""

from __future__ import annotations

from dataclasses import asdict
from datetime import datetime, time, timezone
from typing import Hashable, Iterable, Iterator, Protocol

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from db.models import Partner, Donation, Customer
from import_engine.errors import PersistenceError
from schema.entities import EntitySchema
from schema.records import (
    ImportRecord, PartnerRecord, DonorRecord, CompanyRecord,
    partner_key, donor_key, company_key,
)

MODELS = {
    "partner": Partner,
    "donor": Donation,
    "company": Customer,
}


class RecordStore(Protocol):

    def existing_keys(self, schema: EntitySchema) -> Iterable[Hashable]:
        ...

    def insert(self, record: ImportRecord) -> None:
        """Save one record.  Raises PersistenceError on failure."""
        ...


class SqlRecordStore:

    def __init__(self, session: Session):
        self.session = session

    # ── Duplicate seeding ──────────────────────────────────────────────

    def existing_keys(self, schema: EntitySchema) -> Iterator[Hashable]:
        if schema.name == "partner":
            stmt = select(Partner.reference_id, Partner.name, Partner.postal_code)
            for ref, name, postal in self.session.execute(stmt):
                yield partner_key(ref, name, postal)
        elif schema.name == "donor":
            stmt = select(Donation.email, Donation.donation_date)
            for email, donation_date in self.session.execute(stmt):
                yield donor_key(email, donation_date)
        elif schema.name == "company":
            for (customer_id,) in self.session.execute(select(Customer.customer_id)):
                yield company_key(customer_id)
        else:
            raise ValueError(f"no table for entity {schema.name!r}")

    # ── Insert ─────────────────────────────────────────────────────────

    def insert(self, record: ImportRecord) -> None:
        row = to_model(record)
        try:
            with self.session.begin_nested():
                self.session.add(row)
        except SQLAlchemyError as exc:
            reason = getattr(exc, "orig", None) or exc
            raise PersistenceError(str(reason)) from exc

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()


def to_model(record: ImportRecord):
    """Build the ORM row for a record."""
    if isinstance(record, PartnerRecord):
        return Partner(**asdict(record))
    if isinstance(record, DonorRecord):
        return Donation(**asdict(record))
    if isinstance(record, CompanyRecord):
        data = asdict(record)
        created = data.pop("created_at")
        row = Customer(**data)
        if created is not None:
            row.created_at = datetime.combine(created, time.min, tzinfo=timezone.utc)
        return row
    raise TypeError(f"not an import record: {type(record).__name__}")


def list_records(
    session: Session,
    entity: str,
    *,
    limit: int,
    offset: int = 0,
) -> tuple[list, int]:
    """Return (rows, total) for one entity table, oldest first."""
    model = MODELS[entity]
    total = session.scalar(select(func.count()).select_from(model))
    rows = session.scalars(
        select(model).order_by(model.id).limit(limit).offset(offset)
    ).all()
    return list(rows), total or 0
