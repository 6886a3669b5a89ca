"""Domain Types — verifies identity wrappers and the registration result type.

Tests:
    - NewType wrappers exist and are callable
    - RegistrationResult holds exactly one of user, error
    - ok reflects which side is set
"""

import pytest

from walletreg.core.domain_types import (
    RegisteredUser, RegistrationResult, UserId, WalletAddress,
)
from walletreg.core.errors import WalletAlreadyRegisteredError


def test_identity_types_wrap_primitives():
    assert UserId(7) == 7
    assert WalletAddress("0xabc") == "0xabc"


def test_success_result():
    user = RegisteredUser(user_id=UserId(1), wallet=WalletAddress("0xabc"))
    result = RegistrationResult.success(user)
    assert result.ok
    assert result.user == user
    assert result.error is None


def test_failure_result():
    result = RegistrationResult.failure(WalletAlreadyRegisteredError())
    assert not result.ok
    assert result.error.code == "WALLET_ALREADY_REGISTERED"


def test_result_rejects_both_or_neither():
    user = RegisteredUser(user_id=UserId(1), wallet=WalletAddress("0xabc"))
    with pytest.raises(ValueError):
        RegistrationResult()
    with pytest.raises(ValueError):
        RegistrationResult(user=user, error=WalletAlreadyRegisteredError())


def test_registered_user_is_immutable():
    user = RegisteredUser(user_id=UserId(1), wallet=WalletAddress("0xabc"))
    with pytest.raises(AttributeError):
        user.user_id = UserId(2)  # type: ignore[misc]
