# authvault/adapters/outbound/persistence/models/__init__.py

"""
Data models module.

This module exports all SQLAlchemy models of the system so that
``Base.metadata`` knows every table.
"""

# Import Base
from authvault.adapters.outbound.persistence.models.base_model import Base

# Credential store
from authvault.adapters.outbound.persistence.models.client_model import Client

# Token lifecycle
from authvault.adapters.outbound.persistence.models.access_token_model import AccessTokenAudit
from authvault.adapters.outbound.persistence.models.transaction_token_model import TransactionToken
from authvault.adapters.outbound.persistence.models.transaction_model import Transaction

# Request audit trail
from authvault.adapters.outbound.persistence.models.api_log_model import ApiLog

__all__ = [
    "Base",
    "Client",
    "AccessTokenAudit",
    "TransactionToken",
    "Transaction",
    "ApiLog",
]
