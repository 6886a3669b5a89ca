"""Error taxonomy tests — codes, statuses, and the REST envelope.

Tests cover:
    - Exactly three concrete kinds with stable codes and HTTP statuses
    - to_response() envelope shape and request id propagation
    - InternalFailureError message never includes the failed operation
"""

from walletreg.core.errors import (
    ErrorCategory,
    ErrorContext,
    InternalFailureError,
    InvalidWalletError,
    RegistryError,
    WalletAlreadyRegisteredError,
)


def test_invalid_wallet_is_client_error():
    err = InvalidWalletError("empty")
    assert err.code == "INVALID_WALLET"
    assert err.http_status == 400
    assert err.category == ErrorCategory.VALIDATION
    assert err.message == "Wallet address is required"


def test_invalid_wallet_unknown_reason_has_generic_message():
    assert InvalidWalletError("whatever").message == "Invalid wallet address"


def test_wallet_already_registered_is_conflict():
    err = WalletAlreadyRegisteredError()
    assert err.code == "WALLET_ALREADY_REGISTERED"
    assert err.http_status == 409
    assert err.category == ErrorCategory.CONFLICT


def test_internal_failure_is_server_error_without_details():
    err = InternalFailureError("commit")
    assert err.code == "INTERNAL_ERROR"
    assert err.http_status == 500
    assert err.operation == "commit"
    assert "commit" not in err.message


def test_all_kinds_share_base_class():
    for err in (
        InvalidWalletError("empty"),
        WalletAlreadyRegisteredError(),
        InternalFailureError("begin"),
    ):
        assert isinstance(err, RegistryError)


def test_to_response_envelope():
    err = WalletAlreadyRegisteredError(ErrorContext(request_id="req-1"))
    body = err.to_response()["error"]
    assert body["code"] == "WALLET_ALREADY_REGISTERED"
    assert body["message"] == "Wallet already registered"
    assert body["category"] == "conflict"
    assert body["severity"] == "warning"
    assert body["request_id"] == "req-1"
    assert "timestamp" in body
