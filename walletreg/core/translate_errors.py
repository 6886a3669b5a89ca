"""Error Translator — folds storage outcomes into the three external error kinds.

Invariants:
    - translate_storage_failure is PURE: StorageFailure in, RegistryError out
    - Only a unique violation on the wallet constraint becomes WalletAlreadyRegisteredError
    - Every other failure becomes InternalFailureError (engine text never surfaces)

Design Decisions:
    - StorageFailure is engine-neutral: infrastructure extracts it from the driver
      exception, so core never imports SQLAlchemy (ADR: ExMA impureim sandwich)
    - Both PostgreSQL (SQLSTATE 23505 + constraint name) and SQLite
      ("UNIQUE constraint failed: users.wallet") spellings recognized
"""

from dataclasses import dataclass

from walletreg.core.errors import (
    ErrorContext,
    InternalFailureError,
    RegistryError,
    WalletAlreadyRegisteredError,
)


UNIQUE_VIOLATION_SQLSTATE: str = "23505"
WALLET_UNIQUE_CONSTRAINT: str = "uq_users_wallet"
_SQLITE_WALLET_UNIQUE = "unique constraint failed: users.wallet"


@dataclass(frozen=True)
class StorageFailure:
    """Engine-neutral description of a failed storage call."""
    operation: str
    integrity: bool = False
    sqlstate: str | None = None
    constraint: str | None = None
    detail: str = ""


def is_wallet_conflict(failure: StorageFailure) -> bool:
    if not failure.integrity:
        return False
    detail = failure.detail.lower()
    if failure.sqlstate == UNIQUE_VIOLATION_SQLSTATE:
        if failure.constraint:
            return failure.constraint == WALLET_UNIQUE_CONSTRAINT
        return WALLET_UNIQUE_CONSTRAINT in detail or "(wallet)" in detail
    return _SQLITE_WALLET_UNIQUE in detail


def translate_storage_failure(
    failure: StorageFailure, context: ErrorContext | None = None,
) -> RegistryError:
    """Map a storage failure to WalletAlreadyRegistered or InternalFailure."""
    if is_wallet_conflict(failure):
        return WalletAlreadyRegisteredError(context)
    return InternalFailureError(failure.operation, context)
