"""Registration Store — SQLAlchemy implementation of RegistrationStore.

Invariants:
    - Bound to one AsyncSession; never commits, rolls back, or opens sessions
    - insert_user_if_absent uses INSERT ... ON CONFLICT (wallet) DO NOTHING RETURNING:
      a conflicting wallet yields None, never an exception
    - insert_profile_if_absent uses INSERT ... ON CONFLICT (user_id) DO NOTHING

Design Decisions:
    - Dialect-specific insert() picked from the session's bind: PostgreSQL in
      production, SQLite in tests; both support ON CONFLICT and RETURNING
    - storage_failure_from() extracts an engine-neutral StorageFailure so the
      pure translator in core/ never touches driver exceptions
"""

import logging

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from walletreg.core.domain_types import (
    RegisteredUser, UserId, WalletAddress,
)
from walletreg.core.translate_errors import StorageFailure
from walletreg.models.profile import Profile
from walletreg.models.user import User

logger = logging.getLogger(__name__)

_INSERT_BY_DIALECT = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class SqlAlchemyRegistrationStore:
    """User/profile inserts inside the caller's transaction."""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _insert(self, model):
        dialect = self.db.get_bind(model).dialect.name
        insert = _INSERT_BY_DIALECT.get(dialect)
        if insert is None:
            raise NotImplementedError(
                f"ON CONFLICT inserts not supported for dialect '{dialect}'",
            )
        return insert(model)

    async def insert_user_if_absent(
        self, wallet: WalletAddress,
    ) -> RegisteredUser | None:
        """Insert a user for wallet; None if the wallet is already taken."""
        stmt = (
            self._insert(User)
            .values(wallet=wallet)
            .on_conflict_do_nothing(index_elements=[User.wallet])
            .returning(User.id, User.wallet)
        )
        result = await self.db.execute(stmt)
        row = result.first()
        if row is None:
            return None
        return RegisteredUser(
            user_id=UserId(row.id), wallet=WalletAddress(row.wallet),
        )

    async def insert_profile_if_absent(
        self, user_id: UserId, referral_code: str | None,
    ) -> None:
        stmt = (
            self._insert(Profile)
            .values(user_id=user_id, referral_code=referral_code)
            .on_conflict_do_nothing(index_elements=[Profile.user_id])
            .returning(Profile.id)
        )
        result = await self.db.execute(stmt)
        if result.first() is None:
            logger.warning(
                f"Profile already present for user {user_id}",
                extra={"user_id": user_id},
            )


def storage_failure_from(exc: SQLAlchemyError, operation: str) -> StorageFailure:
    """Describe a SQLAlchemy/driver exception for the error translator."""
    orig = getattr(exc, "orig", None)
    sqlstate = (
        getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    )
    constraint = getattr(orig, "constraint_name", None)
    cause = getattr(orig, "__cause__", None)
    if constraint is None and cause is not None:
        constraint = getattr(cause, "constraint_name", None)
    return StorageFailure(
        operation=operation,
        integrity=isinstance(exc, IntegrityError),
        sqlstate=sqlstate,
        constraint=constraint,
        detail=str(orig if orig is not None else exc),
    )
