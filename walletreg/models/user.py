"""User ORM — one row per registered wallet.

Invariants:
    - id is a server-generated integer, immutable once assigned
    - wallet holds the canonical form only and is UNIQUE (uq_users_wallet)
    - rows are inserted once by the registration service, never updated

Design Decisions:
    - BIGINT in PostgreSQL, INTEGER in SQLite: SQLite only autoincrements
      an INTEGER PRIMARY KEY (ADR: tests run on aiosqlite)
    - profile relationship is one-to-one (uselist=False), cascade delete
"""

from datetime import datetime, timezone

from sqlalchemy import BigInteger, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from walletreg.core.wallet import WALLET_LENGTH
from walletreg.db.base import Base

IdType = BigInteger().with_variant(Integer(), "sqlite")


class User(Base):
    """Registered user, identified by a canonical wallet."""
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(
        IdType, primary_key=True, autoincrement=True,
    )
    wallet: Mapped[str] = mapped_column(
        String(WALLET_LENGTH), nullable=False, unique=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    profile: Mapped["Profile"] = relationship(
        "Profile", back_populates="user", uselist=False,
        cascade="all, delete-orphan", passive_deletes=True,
    )
