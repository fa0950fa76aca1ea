"""
Import all models so Alembic and SQLAlchemy can discover them.
"""

from japama.models.user import User
from japama.models.verification_code import VerificationCode
from japama.models.geography import Subdivision, Street, House
from japama.models.report import Report
from japama.models.payment import Payment

__all__ = [
    "User",
    "VerificationCode",
    "Subdivision",
    "Street",
    "House",
    "Report",
    "Payment",
]
