# authvault/application/dtos/client_dto.py

"""
Schemas for client administration.

This module defines the Pydantic models used to validate and serialize
client records and the ledger views exposed to administrators. Client
secrets only ever appear in the creation and rotation responses.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from authvault.application.dtos.base_dto import CustomBaseModel
from authvault.domain.models.client_domain_model import Scope
from authvault.domain.models.token_domain_model import TransactionStatus


class ClientCreate(CustomBaseModel):
    """
    Schema for registering a new client.

    The scope is fixed for the lifetime of the client.
    """
    name: str = Field(..., min_length=1, max_length=255, description="Display name")
    scope: Scope = Field(..., description="Capability of the client")
    owner: str = Field(..., min_length=1, max_length=255, description="Owning principal")


class ClientUpdate(CustomBaseModel):
    """
    Schema for partial client updates. The scope cannot be changed.
    """
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    is_active: Optional[bool] = None


class ClientOutput(BaseModel):
    """
    Client data returned by the API, without the secret hash.
    """
    client_id: str
    name: str
    scope: Scope
    owner: str
    is_active: bool
    created_at: datetime
    last_activity: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ClientCreateResponse(ClientOutput):
    client_secret: str = Field(..., description="Plain secret, shown only once")


class ClientSecretUpdateResponse(BaseModel):
    client_id: str
    new_client_secret: str = Field(..., description="Plain secret, shown only once")


class TransactionOutput(BaseModel):
    transaction_token: str
    initiator_client_id: str
    executor_client_id: Optional[str] = None
    status: TransactionStatus
    created_at: datetime
    completed_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class DashboardStats(BaseModel):
    active_clients: int
    transactions_today: int
    success_rate: float = Field(..., description="Share of validated or completed transactions, in percent")
    avg_response_ms: float
