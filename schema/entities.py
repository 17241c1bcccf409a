"""
schema.entities - Field specifications for every importable entity.

Each EntitySchema lists its fields in declaration order.  That order
drives three things: which rule fires first during validation, the
column order of the downloadable CSV template, and the order the
schema endpoint reports fields in.

Field kinds:
    text       free text, trimmed
    email      minimal shape check (local@domain.tld)
    amount     non-negative decimal, 2 places
    frequency  one of schema.records.FREQUENCIES
    date       parsed against config.DATE_FORMATS
    latitude   signed decimal degrees, |v| <= 90
    longitude  signed decimal degrees, |v| <= 180
"""

from __future__ import annotations

from dataclasses import dataclass

from schema.records import PartnerRecord, DonorRecord, CompanyRecord

FIELD_KINDS = frozenset({
    "text", "email", "amount", "frequency", "date", "latitude", "longitude",
})


class UnknownEntityError(KeyError):
    """Raised when an entity name has no registered schema."""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"unknown entity {self.name!r}"


@dataclass(frozen=True)
class FieldSpec:
    attr: str                       # record attribute
    column: str                     # canonical CSV header
    kind: str = "text"
    required: bool = False
    aliases: tuple[str, ...] = ()
    example: str = ""
    default_today: bool = False     # blank date → run date instead of None
    default: str = ""               # blank text → this value

    def __post_init__(self):
        if self.kind not in FIELD_KINDS:
            raise ValueError(f"bad field kind {self.kind!r} for {self.attr}")

    @property
    def labels(self) -> tuple[str, ...]:
        """Accepted headers, canonical first."""
        return (self.column, *self.aliases)

    def to_dict(self) -> dict:
        return {
            "attr": self.attr,
            "column": self.column,
            "kind": self.kind,
            "required": self.required,
            "aliases": list(self.aliases),
            "default": self.default,
        }


@dataclass(frozen=True)
class EntitySchema:
    name: str
    record_cls: type
    fields: tuple[FieldSpec, ...]
    key_description: str

    @property
    def required(self) -> tuple[FieldSpec, ...]:
        return tuple(f for f in self.fields if f.required)

    def to_dict(self) -> dict:
        return {
            "entity": self.name,
            "duplicate_key": self.key_description,
            "fields": [f.to_dict() for f in self.fields],
        }


# ── Partner ───────────────────────────────────────────────────────────

PARTNER = EntitySchema(
    name="partner",
    record_cls=PartnerRecord,
    key_description="Partner ID, or Name + Postal Code when no ID is given",
    fields=(
        FieldSpec("reference_id", "Partner ID", aliases=("Reference ID", "ID"),
                  example="P-001"),
        FieldSpec("name", "Name", required=True,
                  aliases=("Partner Name", "Organization"),
                  example="Eastside Food Pantry"),
        FieldSpec("contact_name", "Contact Name", aliases=("Contact",),
                  example="Maria Lopez"),
        FieldSpec("email", "Email", kind="email", aliases=("Email Address",),
                  example="maria@eastsidepantry.org"),
        FieldSpec("phone", "Phone", aliases=("Phone Number",),
                  example="555-0100"),
        FieldSpec("address_line_1", "Address Line 1",
                  aliases=("Address", "Street"), example="12 Elm St"),
        FieldSpec("address_line_2", "Address Line 2", example=""),
        FieldSpec("city", "City", example="Springfield"),
        FieldSpec("state", "State", example="IL"),
        FieldSpec("postal_code", "Postal Code", required=True,
                  aliases=("Zip", "Zip Code", "Postal"), example="62701"),
        FieldSpec("country", "Country", default="USA", example="USA"),
        FieldSpec("latitude", "Latitude", kind="latitude", aliases=("Lat",),
                  example="39.7817"),
        FieldSpec("longitude", "Longitude", kind="longitude",
                  aliases=("Lng", "Long"), example="-89.6501"),
        FieldSpec("notes", "Notes", aliases=("Comments",),
                  example="Open Tue/Thu"),
    ),
)


# ── Donor ─────────────────────────────────────────────────────────────

DONOR = EntitySchema(
    name="donor",
    record_cls=DonorRecord,
    key_description="Email + Date",
    fields=(
        FieldSpec("name", "Name", required=True,
                  aliases=("Full Name", "Donor Name", "First Name/Org Name"),
                  example="John Doe"),
        FieldSpec("email", "Email", kind="email", required=True,
                  aliases=("Email Address", "EmailID"),
                  example="john@example.com"),
        FieldSpec("amount", "Amount", kind="amount", required=True,
                  aliases=("Donation Amount", "Last Gift Amount"),
                  example="100.00"),
        FieldSpec("frequency", "Frequency", kind="frequency", required=True,
                  example="one-time"),
        FieldSpec("campaign", "Campaign", required=True, example="General"),
        FieldSpec("donation_date", "Date", kind="date", default_today=True,
                  aliases=("Donation Date", "Last Gift Date"),
                  example="2025-01-15"),
        FieldSpec("last_name", "Last Name", example="Doe"),
        FieldSpec("phone", "Phone", aliases=("Mobile Phone",),
                  example="555-0100"),
        FieldSpec("organization", "Organization", aliases=("Company",),
                  example="Acme Corp"),
        FieldSpec("coupon_code", "Coupon Code", example=""),
        FieldSpec("address", "Address", example=""),
        FieldSpec("address_line_1", "Address Line 1", example="123 Main St"),
        FieldSpec("address_line_2", "Address Line 2", example="Apt 4B"),
        FieldSpec("city", "City", example="Springfield"),
        FieldSpec("state", "State", example="IL"),
        FieldSpec("postal_code", "Postal Code", aliases=("Zip", "Zip Code"),
                  example="62701"),
        FieldSpec("country", "Country", example="USA"),
        FieldSpec("comments", "Comments", aliases=("Notes",), example=""),
    ),
)


# ── Company ───────────────────────────────────────────────────────────

COMPANY = EntitySchema(
    name="company",
    record_cls=CompanyRecord,
    key_description="Contact ID",
    fields=(
        FieldSpec("created_at", "Created Time", kind="date",
                  aliases=("Created At", "Created Date"), example="2024-01-15"),
        FieldSpec("customer_id", "Contact ID", required=True,
                  aliases=("Customer ID",), example="CUST-001"),
        FieldSpec("customer_sub_type", "Customer Sub Type",
                  aliases=("Sub Type",), example="Partner"),
        FieldSpec("customer_name", "Companies", required=True,
                  aliases=("Company", "Company Name", "Customer Name"),
                  example="ABC Corporation"),
        FieldSpec("first_name", "First Name", example="John"),
        FieldSpec("last_name", "Last Name", example="Doe"),
        FieldSpec("email", "EmailID", kind="email",
                  aliases=("Email", "Email Address"), example="john@abc.com"),
        FieldSpec("address_line_1", "Street Address",
                  aliases=("Address", "Address Line 1"), example="500 Market St"),
        FieldSpec("city", "City", example="Springfield"),
        FieldSpec("state", "State", example="IL"),
        FieldSpec("postal_code", "Zip Code", aliases=("Zip", "Postal Code"),
                  example="62701"),
        FieldSpec("notes", "Notes", example="Annual sponsor"),
    ),
)


SCHEMAS: dict[str, EntitySchema] = {s.name: s for s in (PARTNER, DONOR, COMPANY)}


def get_schema(name: str) -> EntitySchema:
    """Look up a schema by entity name (case-insensitive, plural accepted)."""
    key = (name or "").strip().lower()
    if key not in SCHEMAS:
        singular = {"partners": "partner", "donors": "donor",
                    "companies": "company"}.get(key)
        if singular is None:
            raise UnknownEntityError(name)
        key = singular
    return SCHEMAS[key]


def entity_names() -> list[str]:
    return sorted(SCHEMAS)
