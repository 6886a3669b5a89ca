"""Profile ORM — per-user profile created in the same transaction as its User.

Invariants:
    - user_id references exactly one User and is UNIQUE (uq_profiles_user_id)
    - referral_code is opaque: NULL when absent, stored verbatim otherwise

Design Decisions:
    - Own surrogate id plus unique user_id: ON CONFLICT (user_id) targets the
      unique constraint, not the primary key
    - ON DELETE CASCADE: profile lifecycle bound to its user
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from walletreg.db.base import Base
from walletreg.models.user import IdType


class Profile(Base):
    """Profile owned by one User."""
    __tablename__ = "profiles"

    id: Mapped[int] = mapped_column(
        IdType, primary_key=True, autoincrement=True,
    )
    user_id: Mapped[int] = mapped_column(
        IdType, ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False, unique=True,
    )
    referral_code: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    user: Mapped["User"] = relationship("User", back_populates="profile")
