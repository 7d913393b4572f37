# authvault/adapters/inbound/api/v1/endpoints/transaction_endpoint.py

import logging
from fastapi import APIRouter, Depends, Security
from sqlalchemy.ext.asyncio import AsyncSession

from authvault.adapters.inbound.api.deps import bearer_scheme, get_db_session, require_scope
from authvault.application.dtos.transaction_dto import (
    InitiateRequest,
    InitiateResponse,
    ValidateRequest,
    ValidateResponse,
)
from authvault.application.use_cases.transaction_use_cases import AsyncTransactionService
from authvault.domain.exceptions import PermissionDeniedException
from authvault.domain.models.client_domain_model import Scope
from authvault.domain.models.token_domain_model import AccessClaims

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Security(bearer_scheme)])


@router.post(
    "/initiate",
    response_model=InitiateResponse,
    summary="Initiate Transaction - Create a single-use transaction token",
    description="Creates a transaction token valid for ten minutes. "
                "Requires an access token with the initiate_transaction scope.",
)
async def initiate_transaction(
        initiate_request: InitiateRequest,
        db: AsyncSession = Depends(get_db_session),
        claims: AccessClaims = Depends(require_scope(Scope.INITIATE_TRANSACTION)),
):
    if initiate_request.client_id != claims.client_id:
        logger.warning(
            f"Client {claims.client_id} attempted to initiate a transaction for {initiate_request.client_id}"
        )
        raise PermissionDeniedException(detail="Access token does not belong to this client")

    service = AsyncTransactionService(db)
    return await service.initiate(initiate_request.client_id)


@router.post(
    "/validate",
    response_model=ValidateResponse,
    summary="Validate Transaction - Consume a transaction token",
    description="Consumes a transaction token exactly once. "
                "Requires an access token with the execute_transaction scope.",
)
async def validate_transaction(
        validate_request: ValidateRequest,
        db: AsyncSession = Depends(get_db_session),
        claims: AccessClaims = Depends(require_scope(Scope.EXECUTE_TRANSACTION)),
):
    service = AsyncTransactionService(db)
    return await service.validate(
        validate_request.transaction_token,
        executor_client_id=claims.client_id,
    )
