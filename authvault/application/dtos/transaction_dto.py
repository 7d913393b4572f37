# authvault/application/dtos/transaction_dto.py

from pydantic import BaseModel, Field

from authvault.application.dtos.base_dto import CustomBaseModel


class InitiateRequest(CustomBaseModel):
    client_id: str = Field(..., min_length=1, description="Initiating client, must match the access token")


class InitiateResponse(BaseModel):
    transaction_token: str


class ValidateRequest(CustomBaseModel):
    transaction_token: str = Field(..., min_length=1, description="Single-use transaction token")


class ValidateResponse(BaseModel):
    valid: bool = True
    transaction_token: str
    client_id: str = Field(..., description="Client that initiated the transaction")
