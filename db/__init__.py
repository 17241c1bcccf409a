"""
db - Database layer.

Public API:
    init_db()                    → create engine + tables
    get_session()                → new Session
    Partner, Donation, Customer  → ORM models
"""

from db.engine import init_db, get_session                      # noqa: F401
from db.models import Base, Partner, Donation, Customer         # noqa: F401
