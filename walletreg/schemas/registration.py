"""Registration Schemas — Pydantic models for the register endpoint.

Invariants:
    - RegisterRequest.wallet is any string: format rules live in core/wallet.py so a
      malformed wallet maps to INVALID_WALLET, not VALIDATION_ERROR
    - RegisterRequest.referral_code is opaque: absent -> None, any string kept verbatim
    - RegisterResponse.wallet is the canonical stored form, not the raw input

Design Decisions:
    - strict str for wallet: numbers/objects are transport errors, not wallets
"""

from pydantic import BaseModel, Field, StrictStr


class RegisterRequest(BaseModel):
    """Registration request body."""
    wallet: StrictStr = Field(
        description="Wallet address, any case, surrounding whitespace allowed",
        examples=["0x52908400098527886E0F7030069857D2E4169EE7"],
    )
    referral_code: StrictStr | None = Field(
        None, description="Opaque referral code", examples=["FRIEND50"],
    )


class RegisterResponse(BaseModel):
    """Created user — canonical wallet as stored."""
    user_id: int
    wallet: str


class ErrorDetail(BaseModel):
    code: str
    message: str
    category: str
    severity: str
    timestamp: str | None = None
    request_id: str | None = None


class ErrorBody(BaseModel):
    """Error envelope returned for every non-2xx response."""
    error: ErrorDetail
