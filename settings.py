# settings.py
from __future__ import annotations

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_JWT_SECRET = "mock_secret_key"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    # -----------------------
    # Runtime
    # -----------------------
    ENV: str = "dev"  # "dev" | "staging" | "prod"
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"

    # -----------------------
    # Credentials accepted by /collection/token/
    # -----------------------
    MOMO_SUBSCRIPTION_KEY: str = "aafdc96047404458b0820691110fc362"
    MOMO_AUTHORIZATION: str = (
        "Basic YjVkZGM2ZTItNTI5Yi00MzhmLWFlNzAtYzFhZTViNTBhNDg3OjUxZTlhMzQzN2FmMzQ0NDdiZGUwZjg0OGE4NTJkZWZh"
    )
    MOMO_CLIENT_ID: str = "b5ddc6e2-529b-438f-ae70-c1ae5b50a487"

    # -----------------------
    # JWT (mock signing)
    # -----------------------
    MOMO_JWT_SECRET: str = Field(default=DEFAULT_JWT_SECRET)
    MOMO_JWT_ALG: str = "HS256"
    MOMO_TOKEN_TTL_S: int = 3600

    # require "Authorization: Bearer <token>" on collection endpoints
    MOMO_VERIFY_BEARER: bool = False

    # -----------------------
    # Transaction engine
    # -----------------------
    MOMO_PROFILE: str = "collection"  # "collection" | "sandbox" | "legacy"

    # Per-field overrides on top of the profile (None => profile value)
    MOMO_STATUS_TABLE: Optional[dict[str, str]] = None
    MOMO_FALLBACK_STATUS: Optional[str] = None  # "RANDOM" or a status
    MOMO_FINAL_POLICY: Optional[str] = None  # "fixed" | "random"
    MOMO_FINAL_STATUS_TABLE: Optional[dict[str, str]] = None
    MOMO_DELAY_MIN_S: Optional[float] = None
    MOMO_DELAY_MAX_S: Optional[float] = None
    MOMO_DELAY_STEP_S: Optional[float] = None


settings = Settings()


def validate_env_settings() -> None:
    """
    Fail-fast validation, called from create_app().

    Rules:
      - any env: profile and engine overrides must resolve
      - staging/prod: the JWT secret must be changed and at least 16 chars
      - raise RuntimeError listing every offending key
    """
    from app.collection.config import ConfigError, engine_config

    problems: list[str] = []

    try:
        engine_config()
    except ConfigError as exc:
        problems.append(str(exc))

    env = (settings.ENV or "dev").strip().lower()
    if env in ("staging", "prod"):
        secret = settings.MOMO_JWT_SECRET or ""
        if secret == DEFAULT_JWT_SECRET or len(secret) < 16:
            problems.append("MOMO_JWT_SECRET")

    if problems:
        raise RuntimeError(
            "Settings validation failed: " + ", ".join(problems)
        )
