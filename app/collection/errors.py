# app/collection/errors.py
from __future__ import annotations


class CollectionError(Exception):
    """Base for errors surfaced to API callers as {"code", "message"}."""

    status_code: int = 500
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, *, code: str | None = None):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code

    def to_body(self) -> dict[str, str]:
        return {"code": self.code, "message": self.message}


class ValidationError(CollectionError):
    status_code = 400
    code = "BAD_REQUEST"


class AuthError(CollectionError):
    status_code = 401
    code = "AUTHORIZATION_FAILED"


class MissingHeadersError(AuthError):
    status_code = 400
    code = "MISSING_HEADERS"


class UnauthorizedError(AuthError):
    pass


class NotFoundError(CollectionError):
    status_code = 404
    code = "RESOURCE_NOT_FOUND"
