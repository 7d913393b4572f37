# authvault/application/dtos/oauth_dto.py

"""
Schemas for the client credentials grant.
"""

from typing import Literal

from pydantic import BaseModel, Field

from authvault.application.dtos.base_dto import CustomBaseModel
from authvault.domain.models.client_domain_model import Scope


class TokenRequest(CustomBaseModel):
    grant_type: Literal["client_credentials"] = Field(..., description="Only client_credentials is supported")
    client_id: str = Field(..., min_length=1, description="Public client identifier")
    client_secret: str = Field(..., min_length=1, description="Client secret")
    scope: Scope = Field(..., description="Scope the client was registered with")


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "Bearer"
    expires_in: int
