from __future__ import annotations

import hmac
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import jwt, JWTError

from settings import settings


# -----------------------
# Static credentials
# -----------------------
def credentials_match(given: str, expected: str) -> bool:
    return hmac.compare_digest(given.encode("utf-8"), expected.encode("utf-8"))


# -----------------------
# Access tokens (JWT)
# -----------------------
def create_access_token(client_id: str, seconds: Optional[int] = None) -> str:
    ttl = seconds or settings.MOMO_TOKEN_TTL_S
    now = datetime.now(timezone.utc)
    expires = now + timedelta(seconds=ttl)
    payload = {
        "clientId": client_id,
        "expires": expires.isoformat(),
        "sessionId": str(uuid.uuid4()),
        "iat": int(now.timestamp()),
        "exp": int(expires.timestamp()),
    }
    return jwt.encode(payload, settings.MOMO_JWT_SECRET, algorithm=settings.MOMO_JWT_ALG)


def decode_token(token: str) -> Dict[str, Any]:
    try:
        return jwt.decode(token, settings.MOMO_JWT_SECRET, algorithms=[settings.MOMO_JWT_ALG])
    except JWTError:
        return {}
