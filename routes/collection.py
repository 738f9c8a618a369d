# routes/collection.py
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, Request
from pydantic import ValidationError as PydanticValidationError

from app.collection.errors import ValidationError
from app.collection.service import CollectionService
from app.collection.tokens import issue_token
from deps.auth import require_bearer, require_subscription_key
from deps.collection import get_collection_service
from schemas import (
    BasicUserInfo,
    ErrorResponse,
    MessageResponse,
    RequestToPayRequest,
    RequestToPayStatusResponse,
    TokenResponse,
)
from services.redaction import redact_value

logger = logging.getLogger("momo_mock.collection")

router = APIRouter(prefix="/collection", tags=["collection"])

_ERRORS = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
}

# Static sandbox account holder returned for every MSISDN
SANDBOX_USER_INFO = BasicUserInfo(
    sub="0",
    name="Sand Box",
    given_name="Sand",
    family_name="Box",
    birthdate="1976-08-13",
    locale="sv_SE",
    gender="MALE",
    updated_at=1757933796,
)


async def _read_request_to_pay(req: Request) -> RequestToPayRequest:
    try:
        payload = await req.json()
    except ValueError:
        raise ValidationError("Request body must be valid JSON")

    if not isinstance(payload, dict):
        raise ValidationError("Missing required fields in body")

    logger.debug("request to pay body=%s", redact_value(payload))
    try:
        return RequestToPayRequest.model_validate(payload)
    except PydanticValidationError:
        raise ValidationError("Missing required fields in body")


@router.post("/token/", response_model=TokenResponse, responses=_ERRORS)
async def create_access_token(
    subscription_key: Optional[str] = Header(default=None, alias="Ocp-Apim-Subscription-Key"),
    authorization: Optional[str] = Header(default=None, alias="Authorization"),
):
    return issue_token(subscription_key, authorization)


@router.post(
    "/v1_0/requesttopay",
    status_code=202,
    response_model=MessageResponse,
    responses=_ERRORS,
    dependencies=[Depends(require_bearer)],
)
async def request_to_pay(
    req: Request,
    reference_id: Optional[str] = Header(default=None, alias="X-Reference-Id"),
    service: CollectionService = Depends(get_collection_service),
):
    if not reference_id or not reference_id.strip():
        raise ValidationError("Missing X-Reference-Id header")

    body = await _read_request_to_pay(req)
    service.request_to_pay(reference_id, body)
    return MessageResponse(message="Request to pay accepted")


@router.get(
    "/v1_0/requesttopay/{reference_id}",
    response_model=RequestToPayStatusResponse,
    responses=_ERRORS,
    dependencies=[Depends(require_bearer)],
)
async def request_to_pay_status(
    reference_id: str,
    service: CollectionService = Depends(get_collection_service),
):
    record = service.get_transaction(reference_id)
    return record.to_status_payload()


@router.get(
    "/v1_0/accountholder/msisdn/{msisdn}/basicuserinfo",
    response_model=BasicUserInfo,
    responses=_ERRORS,
    dependencies=[Depends(require_bearer), Depends(require_subscription_key)],
)
async def basic_user_info(msisdn: str):
    if not msisdn.strip():
        raise ValidationError("MSISDN parameter is required")
    return SANDBOX_USER_INFO
