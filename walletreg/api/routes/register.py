"""Register Route — POST /api/v1/register creates a user and profile for a wallet.

Invariants:
    - Route holds no business logic: RegistrationService does normalization,
      the transaction, and error translation
    - 201 with {user_id, wallet} on success; failed results rendered with
      the error's own http_status and to_response() envelope

Design Decisions:
    - Service built per request from the shared session factory: stateless
      service, shared pool (ADR: injected resource handle)
    - get_registration_service is the override seam for tests
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from walletreg.config import get_settings
from walletreg.infrastructure.database import get_session_factory
from walletreg.schemas.registration import (
    ErrorBody, RegisterRequest, RegisterResponse,
)
from walletreg.services.registration import RegistrationService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1", tags=["auth"])


def get_registration_service(
    session_factory: Annotated[
        async_sessionmaker[AsyncSession], Depends(get_session_factory),
    ],
) -> RegistrationService:
    return RegistrationService(
        session_factory,
        timeout_seconds=get_settings().registration_timeout_seconds,
    )


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorBody, "description": "Invalid wallet"},
        409: {"model": ErrorBody, "description": "Wallet already registered"},
        500: {"model": ErrorBody, "description": "Internal failure"},
    },
)
async def register(
    body: RegisterRequest,
    service: Annotated[RegistrationService, Depends(get_registration_service)],
):
    """Register a wallet. The stored wallet is the canonical lower-case form."""
    result = await service.register(body.wallet, body.referral_code)
    if not result.ok:
        return JSONResponse(
            status_code=result.error.http_status,
            content=result.error.to_response(),
        )
    return RegisterResponse(
        user_id=result.user.user_id, wallet=result.user.wallet,
    )
