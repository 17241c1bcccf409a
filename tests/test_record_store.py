from datetime import date
from decimal import Decimal

import pytest

from db import get_session
from db.models import Customer, Donation, Partner
from import_engine import ImportAbortedError, import_file
from import_engine.errors import PersistenceError
from schema.entities import get_schema
from schema.records import CompanyRecord, DonorRecord, company_key, donor_key, partner_key
from services.record_store import SqlRecordStore, list_records, to_model
from tests.factories import CustomerFactory, DonationFactory, PartnerFactory

DONORS = (
    "Name,Email,Amount,Frequency,Campaign,Date\n"
    "A,a@example.com,10,monthly,General,2025-05-01\n"
    "B,b@example.com,$25.50,one-time,Spring,2025-05-02\n"
)


def _keys(entity):
    session = get_session()
    try:
        return set(SqlRecordStore(session).existing_keys(get_schema(entity)))
    finally:
        session.close()


def test_existing_keys_per_entity(app):
    DonationFactory(email="Old@Example.com", donation_date=date(2025, 1, 15))
    PartnerFactory(reference_id="P-9")
    PartnerFactory(reference_id="", name="Westside", postal_code="62704")
    CustomerFactory(customer_id="CUST-42")

    assert _keys("donor") == {donor_key("old@example.com", date(2025, 1, 15))}
    assert _keys("partner") == {
        partner_key("P-9", "", ""),
        partner_key("", "westside", "62704"),
    }
    assert _keys("company") == {company_key("cust-42")}


def test_insert_and_commit(app, count):
    session = get_session()
    store = SqlRecordStore(session)
    store.insert(CompanyRecord(customer_id="CUST-1", customer_name="ABC",
                               created_at=date(2024, 1, 15)))
    store.commit()
    session.close()

    assert count(Customer) == 1
    session = get_session()
    row = session.query(Customer).one()
    assert row.created_at.date() == date(2024, 1, 15)
    session.close()


def test_failed_insert_rolls_back_only_that_row(app, count):
    session = get_session()
    store = SqlRecordStore(session)
    store.insert(CompanyRecord(customer_id="CUST-1", customer_name="ABC"))
    with pytest.raises(PersistenceError):
        # NOT NULL violation on customer_name
        store.insert(CompanyRecord(customer_id="CUST-2", customer_name=None))
    store.insert(CompanyRecord(customer_id="CUST-3", customer_name="XYZ"))
    store.commit()
    session.close()

    assert count(Customer) == 2


def test_to_model_rejects_foreign_objects():
    with pytest.raises(TypeError):
        to_model({"name": "x"})


def test_import_file_persists_and_dedupes(app, count):
    first = import_file(DONORS, "donor")
    second = import_file(DONORS, "donor")

    assert first.success_count == 2
    assert second.success_count == 0
    assert second.duplicate_count == 2
    assert count(Donation) == 2

    session = get_session()
    amounts = sorted(d.amount for d in session.query(Donation))
    session.close()
    assert amounts == [Decimal("10.00"), Decimal("25.50")]


def test_import_file_against_seeded_rows(app, count):
    DonationFactory(email="a@example.com", donation_date=date(2025, 5, 1))
    result = import_file(DONORS, "donor")
    assert (result.success_count, result.duplicate_count) == (1, 1)
    assert count(Donation) == 2


def test_import_file_partner_fallback_key(app, count):
    PartnerFactory(reference_id="", name="Eastside Pantry", postal_code="62701")
    result = import_file("Name,Postal Code\neastside pantry,62701\nNorth,62702\n", "partner")
    assert (result.success_count, result.duplicate_count) == (1, 1)
    assert count(Partner) == 2


def test_aborted_run_keeps_saved_rows(app, count, monkeypatch):
    real_insert = SqlRecordStore.insert

    def flaky(self, record):
        if record.email != "a@example.com":
            raise PersistenceError("database is locked")
        real_insert(self, record)

    monkeypatch.setattr(SqlRecordStore, "insert", flaky)
    rows = "".join(f"X,x{i}@example.com,1,monthly,General,2025-05-01\n" for i in range(6))
    content = DONORS.splitlines()[0] + "\nA,a@example.com,1,monthly,General,2025-05-01\n" + rows

    with pytest.raises(ImportAbortedError) as exc:
        import_file(content, "donor")
    assert exc.value.result.success_count == 1
    assert count(Donation) == 1


def test_list_records_paginates(app):
    for _ in range(3):
        CustomerFactory()
    session = get_session()
    rows, total = list_records(session, "company", limit=2, offset=0)
    session.close()
    assert total == 3
    assert len(rows) == 2
    assert rows[0].id < rows[1].id


def test_donor_record_round_trip_to_model():
    record = DonorRecord(name="A", email="a@example.com", amount=Decimal("1.00"),
                         frequency="monthly", campaign="General",
                         donation_date=date(2025, 1, 1))
    row = to_model(record)
    assert isinstance(row, Donation)
    assert row.email == "a@example.com"
    assert row.donation_date == date(2025, 1, 1)
