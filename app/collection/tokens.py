# app/collection/tokens.py
from __future__ import annotations

import logging
from typing import Optional

from app.collection.errors import MissingHeadersError, UnauthorizedError
from schemas import TokenResponse
from security import create_access_token, credentials_match
from services.metrics import increment_token_issued
from settings import settings

logger = logging.getLogger("momo_mock.collection")


def issue_token(subscription_key: Optional[str], authorization: Optional[str]) -> TokenResponse:
    """
    Check the API user credentials against the configured pair and mint a
    fresh one-hour token. Nothing is remembered about issued tokens.
    """
    if not subscription_key or not authorization:
        increment_token_issued("missing_headers")
        raise MissingHeadersError("Missing required headers")

    if not (
        credentials_match(subscription_key, settings.MOMO_SUBSCRIPTION_KEY)
        and credentials_match(authorization, settings.MOMO_AUTHORIZATION)
    ):
        increment_token_issued("unauthorized")
        logger.info("token request rejected: credentials mismatch")
        raise UnauthorizedError("Invalid Ocp-Apim-Subscription-Key or Authorization")

    token = create_access_token(settings.MOMO_CLIENT_ID, seconds=settings.MOMO_TOKEN_TTL_S)
    increment_token_issued("ok")
    return TokenResponse(access_token=token, expires_in=settings.MOMO_TOKEN_TTL_S)
