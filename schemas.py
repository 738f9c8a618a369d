# schemas.py
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


# -------- AUTH --------
class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "Bearer"
    expires_in: int = 3600


# -------- COLLECTION --------
class PayerBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    party_id_type: Optional[Any] = Field(default=None, alias="partyIdType")
    party_id: Optional[Any] = Field(default=None, alias="partyId")


class RequestToPayRequest(BaseModel):
    # Required fields are checked by the service so that missing ones map to 400.
    # Values are taken as sent; only the payer fields are coerced to strings.
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    amount: Optional[Any] = None
    currency: Optional[Any] = None
    external_id: Optional[Any] = Field(default=None, alias="externalId")
    payer: Optional[PayerBody] = None
    payer_message: Optional[Any] = Field(default=None, alias="payerMessage")
    payee_note: Optional[Any] = Field(default=None, alias="payeeNote")


class Payer(BaseModel):
    partyIdType: str
    partyId: str


class RequestToPayStatusResponse(BaseModel):
    financialTransactionId: str
    externalId: str
    amount: Any
    currency: Any
    payer: Payer
    status: str


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    code: str
    message: str


# -------- ACCOUNT HOLDER --------
class BasicUserInfo(BaseModel):
    sub: str
    name: str
    given_name: str
    family_name: str
    birthdate: str
    locale: str
    gender: str
    updated_at: int


# -------- MOCK ADMIN --------
class ResetResponse(BaseModel):
    cleared: int


class ProfileResponse(BaseModel):
    profile: str
    status_table: dict[str, str]
    fallback: str
    final_policy: str
    final_status_table: dict[str, str]
    delay_min_s: float
    delay_max_s: float
    delay_step_s: float
    pending_jobs: list[str]
