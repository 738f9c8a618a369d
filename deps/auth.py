from typing import Optional

from fastapi import Depends, Header
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.collection.errors import UnauthorizedError
from security import credentials_match, decode_token
from settings import settings

bearer = HTTPBearer(auto_error=False)


class TokenClaims:
    def __init__(self, client_id: str, session_id: Optional[str]):
        self.client_id = client_id
        self.session_id = session_id


def require_bearer(
    creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
) -> Optional[TokenClaims]:
    """Enforced only when MOMO_VERIFY_BEARER is on."""
    if not settings.MOMO_VERIFY_BEARER:
        return None

    if not creds or (creds.scheme or "").lower() != "bearer":
        raise UnauthorizedError("Missing or invalid access token")

    payload = decode_token(creds.credentials)
    client_id = payload.get("clientId")
    if not client_id:
        raise UnauthorizedError("Missing or invalid access token")
    return TokenClaims(client_id=client_id, session_id=payload.get("sessionId"))


def require_subscription_key(
    subscription_key: Optional[str] = Header(default=None, alias="Ocp-Apim-Subscription-Key"),
) -> str:
    if not subscription_key or not credentials_match(subscription_key, settings.MOMO_SUBSCRIPTION_KEY):
        raise UnauthorizedError("Invalid or missing subscription key")
    return subscription_key
