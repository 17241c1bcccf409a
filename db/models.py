"""
db.models - SQLAlchemy ORM declarations.

Tables
------
partners   - distribution partner locations.  reference_id is the
             optional external identifier carried by partner exports.
donations  - one row per imported gift.  Donor identity is the email,
             a repeat gift is distinguished by its date.
customers  - companies / contacts keyed by the external Contact ID.

No unique constraints on the natural keys: the import engine decides
what counts as a duplicate, and can be told to let repeats through.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import (
    Column, String, Integer, Date, DateTime, Text, Numeric, Index,
)
from sqlalchemy.orm import DeclarativeBase


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class Partner(Base):
    __tablename__ = "partners"

    id             = Column(Integer, primary_key=True, autoincrement=True)
    reference_id   = Column(String(100), index=True, default="")
    name           = Column(String(200), nullable=False, index=True)
    contact_name   = Column(String(200), default="")
    email          = Column(String(254), default="")
    phone          = Column(String(50), default="")
    address_line_1 = Column(String(300), default="")
    address_line_2 = Column(String(300), default="")
    city           = Column(String(100), default="")
    state          = Column(String(100), default="")
    postal_code    = Column(String(20), nullable=False)
    country        = Column(String(100), default="USA")
    latitude       = Column(Numeric(9, 6), nullable=True)
    longitude      = Column(Numeric(9, 6), nullable=True)
    notes          = Column(Text, default="")

    created_at = Column(DateTime, default=_utcnow)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow)

    __table_args__ = (
        Index("ix_partner_name_postal", "name", "postal_code"),
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "reference_id": self.reference_id or "",
            "name": self.name,
            "contact_name": self.contact_name or "",
            "email": self.email or "",
            "phone": self.phone or "",
            "address_line_1": self.address_line_1 or "",
            "address_line_2": self.address_line_2 or "",
            "city": self.city or "",
            "state": self.state or "",
            "postal_code": self.postal_code,
            "country": self.country or "",
            "latitude": str(self.latitude) if self.latitude is not None else None,
            "longitude": str(self.longitude) if self.longitude is not None else None,
            "notes": self.notes or "",
        }


class Donation(Base):
    __tablename__ = "donations"

    id             = Column(Integer, primary_key=True, autoincrement=True)
    name           = Column(String(200), nullable=False)
    last_name      = Column(String(200), default="")
    email          = Column(String(254), nullable=False, index=True)
    phone          = Column(String(50), default="")
    amount         = Column(Numeric(12, 2), nullable=False)
    frequency      = Column(String(20), nullable=False)
    campaign       = Column(String(200), nullable=False)
    donation_date  = Column(Date, nullable=False)
    organization   = Column(String(200), default="")
    coupon_code    = Column(String(100), default="")
    address        = Column(Text, default="")
    address_line_1 = Column(String(300), default="")
    address_line_2 = Column(String(300), default="")
    city           = Column(String(100), default="")
    state          = Column(String(100), default="")
    postal_code    = Column(String(20), default="")
    country        = Column(String(100), default="")
    comments       = Column(Text, default="")

    created_at = Column(DateTime, default=_utcnow)

    __table_args__ = (
        Index("ix_donation_email_date", "email", "donation_date"),
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "last_name": self.last_name or "",
            "email": self.email,
            "amount": str(self.amount),
            "frequency": self.frequency,
            "campaign": self.campaign,
            "date": self.donation_date.isoformat() if self.donation_date else "",
            "organization": self.organization or "",
            "coupon_code": self.coupon_code or "",
        }


class Customer(Base):
    __tablename__ = "customers"

    id                = Column(Integer, primary_key=True, autoincrement=True)
    customer_id       = Column(String(100), nullable=False, index=True)
    customer_name     = Column(String(200), nullable=False)
    customer_sub_type = Column(String(100), default="")
    first_name        = Column(String(100), default="")
    last_name         = Column(String(100), default="")
    email             = Column(String(254), default="")
    address_line_1    = Column(String(300), default="")
    city              = Column(String(100), default="")
    state             = Column(String(100), default="")
    postal_code       = Column(String(20), default="")
    notes             = Column(Text, default="")

    created_at = Column(DateTime, default=_utcnow)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "customer_id": self.customer_id,
            "customer_name": self.customer_name,
            "customer_sub_type": self.customer_sub_type or "",
            "first_name": self.first_name or "",
            "last_name": self.last_name or "",
            "email": self.email or "",
            "address_line_1": self.address_line_1 or "",
            "city": self.city or "",
            "state": self.state or "",
            "postal_code": self.postal_code or "",
            "notes": self.notes or "",
            "created_at": self.created_at.isoformat() if self.created_at else "",
        }
