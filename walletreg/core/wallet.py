"""Wallet Normalizer — canonicalizes untrusted wallet input or rejects it.

Invariants:
    - normalize_wallet is PURE: no IO, deterministic, safe to call before any DB access
    - Canonical form is lower-case "0x" + 40 hex digits (WALLET_LENGTH chars)
    - Inputs differing only in case or surrounding whitespace map to the same value
    - Raw input longer than MAX_RAW_WALLET_LENGTH is rejected before stripping

Design Decisions:
    - Lower-case over EIP-55 checksum form: the checksum is derivable, lower-case
      is what the unique constraint compares (ADR: one canonical spelling per wallet)
    - Character check before pattern check: distinct reason codes for logging
"""

import re

from walletreg.core.domain_types import WalletAddress
from walletreg.core.errors import InvalidWalletError


WALLET_PREFIX: str = "0x"
WALLET_LENGTH: int = 42
MAX_RAW_WALLET_LENGTH: int = 128

_ALLOWED_CHARS = re.compile(r"^[0-9a-fx]+$")
_WALLET_PATTERN = re.compile(r"^0x[0-9a-f]{40}$")


def normalize_wallet(raw: str) -> WalletAddress:
    """Return the canonical wallet for raw, or raise InvalidWalletError."""
    if not isinstance(raw, str):
        raise InvalidWalletError("invalid_format")
    if len(raw) > MAX_RAW_WALLET_LENGTH:
        raise InvalidWalletError("too_long")

    candidate = raw.strip()
    if not candidate:
        raise InvalidWalletError("empty")

    candidate = candidate.lower()
    if not _ALLOWED_CHARS.match(candidate):
        raise InvalidWalletError("invalid_characters")
    if len(candidate) != WALLET_LENGTH or not _WALLET_PATTERN.match(candidate):
        raise InvalidWalletError("invalid_format")

    return WalletAddress(candidate)
