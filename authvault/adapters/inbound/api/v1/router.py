# authvault/adapters/inbound/api/v1/router.py

from fastapi import APIRouter

from authvault.adapters.inbound.api.v1.endpoints import (
    admin_endpoint,
    oauth_endpoint,
    transaction_endpoint,
)

api_router = APIRouter()

# Token lifecycle
api_router.include_router(oauth_endpoint.router, prefix="/oauth", tags=["OAuth"])
api_router.include_router(transaction_endpoint.router, prefix="/transaction", tags=["Transaction"])

# Client administration
api_router.include_router(admin_endpoint.router, prefix="/admin", tags=["Admin"])
