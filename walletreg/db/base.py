"""SQLAlchemy Declarative Base — shared base class for the users/profiles models.

Invariants:
    - All models inherit from Base
    - Constraint names follow NAMING_CONVENTION so migrations and error
      translation agree on them (uq_users_wallet, uq_profiles_user_id)

Design Decisions:
    - Separate file for Base: avoids circular imports between models
"""

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase


NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Base class for all WalletReg ORM models."""
    metadata = MetaData(naming_convention=NAMING_CONVENTION)
