# authvault/adapters/inbound/api/v1/endpoints/admin_endpoint.py

"""
Endpoints for client administration.

Every route requires the administrative password in the
``X-Admin-Password`` header.
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, Path, Query, Response, status
from fastapi_pagination import Page, Params
from sqlalchemy.ext.asyncio import AsyncSession

from authvault.adapters.inbound.api.deps import get_db_session, require_admin
from authvault.application.dtos.client_dto import (
    ClientCreate,
    ClientCreateResponse,
    ClientOutput,
    ClientSecretUpdateResponse,
    ClientUpdate,
    DashboardStats,
    TransactionOutput,
)
from authvault.application.use_cases.client_use_cases import AsyncClientAdminService
from authvault.shared.utils.pagination import pagination_params

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_admin)])


@router.post(
    "/clients",
    response_model=ClientCreateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create Client - Register a new client",
    description="Registers a client with generated credentials. The secret is only shown in this response.",
)
async def create_client(
        client_data: ClientCreate,
        db: AsyncSession = Depends(get_db_session),
):
    service = AsyncClientAdminService(db)
    return await service.create_client(client_data)


@router.get(
    "/clients",
    response_model=Page[ClientOutput],
    summary="List Clients - Paginated client list",
)
async def list_clients(
        owner: Optional[str] = Query(None, description="Only clients of this owner"),
        params: Params = Depends(pagination_params),
        db: AsyncSession = Depends(get_db_session),
):
    service = AsyncClientAdminService(db)
    return await service.list_clients(params, owner)


@router.get(
    "/clients/{client_id}",
    response_model=ClientOutput,
    summary="Get Client",
)
async def get_client(
        client_id: str = Path(..., description="Public client identifier"),
        db: AsyncSession = Depends(get_db_session),
):
    service = AsyncClientAdminService(db)
    return await service.get_client(client_id)


@router.patch(
    "/clients/{client_id}",
    response_model=ClientOutput,
    summary="Update Client - Rename or toggle a client",
    description="Updates the name or the active state of a client. The scope cannot be changed.",
)
async def update_client(
        client_id: str = Path(..., description="Public client identifier"),
        update_data: ClientUpdate = ...,
        db: AsyncSession = Depends(get_db_session),
):
    service = AsyncClientAdminService(db)
    return await service.update_client(client_id, update_data)


@router.post(
    "/clients/{client_id}/rotate-secret",
    response_model=ClientSecretUpdateResponse,
    summary="Rotate Secret - Replace a client secret",
)
async def rotate_client_secret(
        client_id: str = Path(..., description="Public client identifier"),
        db: AsyncSession = Depends(get_db_session),
):
    service = AsyncClientAdminService(db)
    return await service.rotate_secret(client_id)


@router.delete(
    "/clients/{client_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Client",
    description="Deletes a client. Its transaction tokens and ledger entries are kept.",
)
async def delete_client(
        client_id: str = Path(..., description="Public client identifier"),
        db: AsyncSession = Depends(get_db_session),
):
    service = AsyncClientAdminService(db)
    await service.delete_client(client_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/transactions",
    response_model=Page[TransactionOutput],
    summary="List Transactions - Ledger, newest first",
)
async def list_transactions(
        owner: Optional[str] = Query(None, description="Only transactions initiated by this owner's clients"),
        params: Params = Depends(pagination_params),
        db: AsyncSession = Depends(get_db_session),
):
    service = AsyncClientAdminService(db)
    return await service.list_transactions(params, owner)


@router.get(
    "/stats",
    response_model=DashboardStats,
    summary="Dashboard Stats",
)
async def dashboard_stats(
        owner: Optional[str] = Query(None, description="Restrict figures to this owner"),
        db: AsyncSession = Depends(get_db_session),
):
    service = AsyncClientAdminService(db)
    return await service.dashboard_stats(owner)
