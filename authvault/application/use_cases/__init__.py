# authvault/application/use_cases/__init__.py

"""
Application service module.

This package contains the application services that implement the token
lifecycle and client administration.
"""

from authvault.application.use_cases.token_use_cases import AsyncTokenIssuerService
from authvault.application.use_cases.transaction_use_cases import AsyncTransactionService
from authvault.application.use_cases.client_use_cases import AsyncClientAdminService

__all__ = [
    "AsyncTokenIssuerService",
    "AsyncTransactionService",
    "AsyncClientAdminService",
]
