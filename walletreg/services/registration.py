"""Registration Service — atomic creation of a User and its Profile for one wallet.

Invariants:
    - Wallet normalized BEFORE any session is opened (invalid input costs no IO)
    - One session, one transaction per call; the session is never shared
    - Conflict detected by "insert ignoring duplicates, then check the returned row";
      there is no pre-check query (the unique constraint is the only arbiter)
    - Every failure path rolls back: zero rows durable unless commit succeeded
    - Cancellation rolls back and re-raises; timeout rolls back and fails as internal
    - No retries: every outcome is final for this call

Design Decisions:
    - Session factory injected at construction: the service is stateless between
      calls, the pool is shared by reference (ADR: no global state in services)
    - Returns RegistrationResult instead of raising: routes branch on result.ok
    - store_factory injectable: tests substitute failing stores without patching
"""

import asyncio
import logging
from typing import Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from walletreg.core.domain_types import RegistrationResult, WalletAddress
from walletreg.core.errors import (
    ErrorContext,
    InternalFailureError,
    InvalidWalletError,
    WalletAlreadyRegisteredError,
)
from walletreg.core.repository_protocols import RegistrationStore
from walletreg.core.translate_errors import translate_storage_failure
from walletreg.core.wallet import normalize_wallet
from walletreg.infrastructure.observability import current_request_id
from walletreg.infrastructure.registration_store import (
    SqlAlchemyRegistrationStore, storage_failure_from,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS: float = 10.0


class RegistrationService:
    """Registers wallets against an injected session factory."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        store_factory: Callable[[AsyncSession], RegistrationStore] = (
            SqlAlchemyRegistrationStore
        ),
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        self._session_factory = session_factory
        self._store_factory = store_factory
        self._timeout_seconds = timeout_seconds

    async def register(
        self, raw_wallet: str, referral_code: str | None = None,
    ) -> RegistrationResult:
        """Normalize raw_wallet, then create user + profile in one transaction."""
        context = ErrorContext(request_id=current_request_id())
        try:
            wallet = normalize_wallet(raw_wallet)
        except InvalidWalletError as e:
            e.context = context
            logger.info(
                f"Rejected wallet input: {e.reason}",
                extra={"error_code": e.code},
            )
            return RegistrationResult.failure(e)

        try:
            result = await asyncio.wait_for(
                self._register_in_transaction(wallet, referral_code, context),
                timeout=self._timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.error(
                f"Registration timed out after {self._timeout_seconds}s",
                extra={"wallet": wallet, "error_code": "INTERNAL_ERROR"},
            )
            return RegistrationResult.failure(
                InternalFailureError("timeout", context),
            )

        if result.ok:
            logger.info(
                f"Registered user {result.user.user_id}",
                extra={"user_id": result.user.user_id, "wallet": wallet},
            )
        return result

    async def _register_in_transaction(
        self,
        wallet: WalletAddress,
        referral_code: str | None,
        context: ErrorContext,
    ) -> RegistrationResult:
        async with self._session_factory() as db:
            try:
                await db.begin()
            except SQLAlchemyError as e:
                logger.error(f"Failed to start transaction: {e}")
                return RegistrationResult.failure(
                    InternalFailureError("begin", context),
                )

            try:
                store = self._store_factory(db)
                user = await store.insert_user_if_absent(wallet)
                if user is None:
                    await _rollback_quietly(db)
                    logger.info(
                        "Wallet already registered",
                        extra={
                            "wallet": wallet,
                            "error_code": "WALLET_ALREADY_REGISTERED",
                        },
                    )
                    return RegistrationResult.failure(
                        WalletAlreadyRegisteredError(context),
                    )
                await store.insert_profile_if_absent(user.user_id, referral_code)
            except SQLAlchemyError as e:
                await _rollback_quietly(db)
                error = translate_storage_failure(
                    storage_failure_from(e, "insert"), context,
                )
                logger.error(
                    f"Registration insert failed: {e}",
                    extra={"wallet": wallet, "error_code": error.code},
                )
                return RegistrationResult.failure(error)
            except Exception as e:
                await _rollback_quietly(db)
                logger.error(
                    f"Unexpected registration failure: {e}",
                    extra={"wallet": wallet, "error_code": "INTERNAL_ERROR"},
                    exc_info=True,
                )
                return RegistrationResult.failure(
                    InternalFailureError("insert", context),
                )
            except asyncio.CancelledError:
                await _rollback_quietly(db)
                raise

            try:
                await db.commit()
            except SQLAlchemyError as e:
                await _rollback_quietly(db)
                logger.error(
                    f"Failed to commit transaction: {e}",
                    extra={"wallet": wallet, "error_code": "INTERNAL_ERROR"},
                )
                return RegistrationResult.failure(
                    InternalFailureError("commit", context),
                )
            except asyncio.CancelledError:
                await _rollback_quietly(db)
                raise

            return RegistrationResult.success(user)


async def _rollback_quietly(db: AsyncSession) -> None:
    """Roll back after a failure that is already being reported."""
    try:
        await db.rollback()
    except SQLAlchemyError as e:
        logger.warning(f"Rollback failed: {e}")
