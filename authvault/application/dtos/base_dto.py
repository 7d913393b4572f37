# authvault/application/dtos/base_dto.py

"""
Base class for request and response schemas.
"""

from pydantic import BaseModel, ConfigDict


class CustomBaseModel(BaseModel):
    """
    Base model for every AuthVault schema.

    Unknown fields are rejected so that malformed requests fail at the
    boundary instead of being silently ignored.
    """
    model_config = ConfigDict(extra="forbid")
