"""
schema.records - Typed records produced from CSV rows.

One frozen dataclass per importable entity.  Every record carries a
``kind`` tag and knows its own duplicate key, so the engine never has
to look inside a loose dict once a row has been mapped.

The key helpers are module-level so the storage layer can derive the
same key from persisted rows.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import ClassVar, Hashable, Optional, Union

FREQUENCIES = ("one-time", "monthly")

# Spellings seen in older donor exports
FREQUENCY_SYNONYMS = {"onetime": "one-time", "one time": "one-time", "recurring": "monthly"}


def _norm(value: Optional[str]) -> str:
    return (value or "").strip().casefold()


# ── Duplicate keys ────────────────────────────────────────────────────

def donor_key(email: str, donation_date: date) -> Hashable:
    return (_norm(email), donation_date)


def partner_key(reference_id: str, name: str, postal_code: str) -> Hashable:
    """Reference ID when the export has one, else name + postal code."""
    if _norm(reference_id):
        return ("ref", _norm(reference_id))
    return ("name", _norm(name), _norm(postal_code))


def company_key(customer_id: str) -> Hashable:
    return _norm(customer_id)


# ── Records ───────────────────────────────────────────────────────────

@dataclass(frozen=True)
class PartnerRecord:
    kind: ClassVar[str] = "partner"

    name: str
    postal_code: str
    reference_id: str = ""
    contact_name: str = ""
    email: str = ""
    phone: str = ""
    address_line_1: str = ""
    address_line_2: str = ""
    city: str = ""
    state: str = ""
    country: str = ""
    latitude: Optional[Decimal] = None
    longitude: Optional[Decimal] = None
    notes: str = ""

    def duplicate_key(self) -> Hashable:
        return partner_key(self.reference_id, self.name, self.postal_code)


@dataclass(frozen=True)
class DonorRecord:
    kind: ClassVar[str] = "donor"

    name: str
    email: str
    amount: Decimal
    frequency: str
    campaign: str
    donation_date: date
    last_name: str = ""
    phone: str = ""
    organization: str = ""
    coupon_code: str = ""
    address: str = ""
    address_line_1: str = ""
    address_line_2: str = ""
    city: str = ""
    state: str = ""
    postal_code: str = ""
    country: str = ""
    comments: str = ""

    def duplicate_key(self) -> Hashable:
        return donor_key(self.email, self.donation_date)


@dataclass(frozen=True)
class CompanyRecord:
    kind: ClassVar[str] = "company"

    customer_id: str
    customer_name: str
    customer_sub_type: str = ""
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    address_line_1: str = ""
    city: str = ""
    state: str = ""
    postal_code: str = ""
    notes: str = ""
    created_at: Optional[date] = None

    def duplicate_key(self) -> Hashable:
        return company_key(self.customer_id)


ImportRecord = Union[PartnerRecord, DonorRecord, CompanyRecord]
