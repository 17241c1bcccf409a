from datetime import date
from decimal import Decimal

import factory

from db import get_session
from db.models import Partner, Donation, Customer


class _BaseFactory(factory.alchemy.SQLAlchemyModelFactory):
    """Each create() commits through a fresh session from db.get_session()."""

    class Meta:
        abstract = True
        sqlalchemy_session_factory = get_session
        sqlalchemy_session_persistence = "commit"


class PartnerFactory(_BaseFactory):
    """Factory for stored Partner rows."""

    class Meta:
        model = Partner

    reference_id = factory.Sequence(lambda n: f"P-{n:03d}")
    name = factory.Sequence(lambda n: f"Pantry {n}")
    postal_code = "62701"
    city = "Springfield"


class DonationFactory(_BaseFactory):
    """Factory for stored Donation rows."""

    class Meta:
        model = Donation

    name = factory.Faker("name")
    email = factory.Sequence(lambda n: f"donor{n}@example.com")
    amount = Decimal("25.00")
    frequency = "one-time"
    campaign = "General"
    donation_date = date(2025, 1, 15)


class CustomerFactory(_BaseFactory):
    """Factory for stored Customer rows."""

    class Meta:
        model = Customer

    customer_id = factory.Sequence(lambda n: f"CUST-{n:03d}")
    customer_name = factory.Faker("company")
