"""Boundary Protocols — contracts between the registration service and storage.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - A store is bound to one session/transaction; it never commits or rolls back
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Insert-or-ignore primitives only: the unique constraint decides conflicts,
      there is no "exists?" query to race against
"""

from typing import Protocol

from walletreg.core.domain_types import RegisteredUser, UserId, WalletAddress


class RegistrationStore(Protocol):
    """Contract for user/profile persistence inside an open transaction."""
    async def insert_user_if_absent(
        self, wallet: WalletAddress,
    ) -> RegisteredUser | None: ...
    async def insert_profile_if_absent(
        self, user_id: UserId, referral_code: str | None,
    ) -> None: ...
