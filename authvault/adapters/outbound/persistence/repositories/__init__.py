# authvault/adapters/outbound/persistence/repositories/__init__.py

from authvault.adapters.outbound.persistence.repositories.client_repository import client_repository
from authvault.adapters.outbound.persistence.repositories.access_token_repository import access_token_repository
from authvault.adapters.outbound.persistence.repositories.transaction_token_repository import (
    transaction_token_repository,
)
from authvault.adapters.outbound.persistence.repositories.transaction_repository import transaction_repository
from authvault.adapters.outbound.persistence.repositories.api_log_repository import api_log_repository

__all__ = [
    "client_repository",
    "access_token_repository",
    "transaction_token_repository",
    "transaction_repository",
    "api_log_repository",
]
