"""Domain Types — rich types that replace bare primitives in the registration workflow.

Invariants:
    - WalletAddress only ever holds the canonical form produced by core/wallet.py
    - RegistrationResult carries exactly one of: registered user, error
    - Result objects are immutable (frozen dataclasses)

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - Result type over raised exceptions at the orchestrator boundary: callers branch
      on result.ok instead of catching (ADR: three stable kinds, no control-flow exceptions)
"""

from dataclasses import dataclass
from typing import NewType

from walletreg.core.errors import RegistryError


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", int)
WalletAddress = NewType("WalletAddress", str)


# ─── Results ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class RegisteredUser:
    """A persisted user as returned by the wallet insert."""
    user_id: UserId
    wallet: WalletAddress


@dataclass(frozen=True)
class RegistrationResult:
    """Outcome of one registration attempt."""
    user: RegisteredUser | None = None
    error: RegistryError | None = None

    def __post_init__(self):
        if (self.user is None) == (self.error is None):
            raise ValueError("RegistrationResult needs exactly one of user, error")

    @property
    def ok(self) -> bool:
        return self.user is not None

    @classmethod
    def success(cls, user: RegisteredUser) -> "RegistrationResult":
        return cls(user=user)

    @classmethod
    def failure(cls, error: RegistryError) -> "RegistrationResult":
        return cls(error=error)
