# authvault/adapters/inbound/api/v1/endpoints/oauth_endpoint.py

import logging
from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from authvault.adapters.inbound.api.deps import get_db_session
from authvault.application.dtos.oauth_dto import TokenRequest, TokenResponse
from authvault.application.use_cases.token_use_cases import AsyncTokenIssuerService
from authvault.domain.exceptions import (
    ClientInactiveException,
    InvalidCredentialsException,
    ScopeMismatchException,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/token",
    response_model=TokenResponse,
    summary="Issue Access Token - Client credentials grant",
    description="Exchanges client credentials for a one hour access token bound to the client's scope.",
    responses={
        200: {
            "description": "Access token issued",
            "content": {
                "application/json": {
                    "example": {
                        "access_token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                        "token_type": "Bearer",
                        "expires_in": 3600
                    }
                }
            }
        },
        401: {
            "description": "Invalid credentials, inactive client or scope mismatch",
            "content": {
                "application/json": {
                    "example": {
                        "error": "Invalid client credentials",
                        "code": "INVALID_CREDENTIALS"
                    }
                }
            }
        }
    }
)
async def issue_token(
        request: Request,
        token_request: TokenRequest,
        db: AsyncSession = Depends(get_db_session),
):
    # Attribute the audit row to the requesting client, issued or refused
    request.state.client_id = token_request.client_id

    service = AsyncTokenIssuerService(db)
    try:
        return await service.issue_access_token(
            client_id=token_request.client_id,
            client_secret=token_request.client_secret,
            scope=token_request.scope,
        )
    except (InvalidCredentialsException, ClientInactiveException, ScopeMismatchException) as e:
        # Every issuance refusal is an authentication failure on this endpoint
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.to_dict(),
            headers={"WWW-Authenticate": "Bearer"},
        )
