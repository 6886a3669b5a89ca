"""Wallet Normalizer tests — pure tests for canonicalization and rejection.

Tests cover:
    - Case folding and whitespace trimming converge on one canonical value
    - Empty, whitespace-only, oversized, non-hex, and wrong-length inputs rejected
    - Each rejection carries a distinct reason and the INVALID_WALLET code

Design Decisions:
    - Pure core function: no mocks, no fixtures, just data in → data out
"""

import pytest

from walletreg.core.errors import InvalidWalletError
from walletreg.core.wallet import (
    MAX_RAW_WALLET_LENGTH, WALLET_LENGTH, normalize_wallet,
)

CHECKSUMMED = "0x52908400098527886E0F7030069857D2E4169EE7"
CANONICAL = "0x52908400098527886e0f7030069857d2e4169ee7"


def test_canonical_input_is_unchanged():
    assert normalize_wallet(CANONICAL) == CANONICAL


def test_mixed_case_folds_to_lower():
    assert normalize_wallet(CHECKSUMMED) == CANONICAL


def test_surrounding_whitespace_is_trimmed():
    assert normalize_wallet(f"  {CHECKSUMMED}  ") == CANONICAL
    assert normalize_wallet(f"\t{CANONICAL}\n") == CANONICAL


def test_upper_case_prefix_accepted():
    assert normalize_wallet("0X" + CANONICAL[2:].upper()) == CANONICAL


def test_variants_of_same_wallet_normalize_identically():
    variants = [CANONICAL, CHECKSUMMED, CANONICAL.upper().replace("0X", "0x"), f" {CHECKSUMMED} "]
    assert {normalize_wallet(v) for v in variants} == {CANONICAL}


def test_normalization_is_deterministic():
    assert normalize_wallet(CHECKSUMMED) == normalize_wallet(CHECKSUMMED)


def test_canonical_length():
    assert len(normalize_wallet(CHECKSUMMED)) == WALLET_LENGTH


@pytest.mark.parametrize("raw", ["", "   ", "\n\t"])
def test_empty_input_rejected(raw):
    with pytest.raises(InvalidWalletError) as exc:
        normalize_wallet(raw)
    assert exc.value.reason == "empty"
    assert exc.value.code == "INVALID_WALLET"


def test_oversized_input_rejected_before_trimming():
    raw = " " * MAX_RAW_WALLET_LENGTH + CANONICAL
    with pytest.raises(InvalidWalletError) as exc:
        normalize_wallet(raw)
    assert exc.value.reason == "too_long"


@pytest.mark.parametrize("raw", ["not-a-wallet", "0x5290 8400", CANONICAL[:-1] + "g"])
def test_characters_outside_hex_rejected(raw):
    with pytest.raises(InvalidWalletError) as exc:
        normalize_wallet(raw)
    assert exc.value.reason == "invalid_characters"


@pytest.mark.parametrize(
    "raw",
    [
        CANONICAL[2:],            # missing prefix
        CANONICAL[:-1],           # 39 hex digits
        CANONICAL + "a",          # 41 hex digits
        "0x",                     # prefix only
        "x0" + CANONICAL[2:],     # prefix reversed
        "0x0x" + CANONICAL[4:],   # doubled prefix
    ],
)
def test_wrong_structure_rejected(raw):
    with pytest.raises(InvalidWalletError) as exc:
        normalize_wallet(raw)
    assert exc.value.reason == "invalid_format"


def test_non_string_rejected():
    with pytest.raises(InvalidWalletError):
        normalize_wallet(None)  # type: ignore[arg-type]


def test_felt_sized_address_is_rejected():
    # 0x + 64 hex: a Starknet-style address, outside the EVM canonical form
    starknet = "0x" + "04a3" * 16
    with pytest.raises(InvalidWalletError) as exc:
        normalize_wallet(starknet)
    assert exc.value.reason == "invalid_format"
