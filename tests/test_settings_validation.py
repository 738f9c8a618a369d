from __future__ import annotations

import pytest

from settings import settings, validate_env_settings


def test_validate_env_allows_dev_defaults(monkeypatch):
    monkeypatch.setattr(settings, "ENV", "dev", raising=False)
    monkeypatch.setattr(settings, "MOMO_JWT_SECRET", "mock_secret_key", raising=False)
    validate_env_settings()


def test_validate_env_staging_requires_real_secret(monkeypatch):
    monkeypatch.setattr(settings, "ENV", "staging", raising=False)
    monkeypatch.setattr(settings, "MOMO_JWT_SECRET", "mock_secret_key", raising=False)

    with pytest.raises(RuntimeError) as exc:
        validate_env_settings()
    assert "MOMO_JWT_SECRET" in str(exc.value)


def test_validate_env_prod_accepts_long_secret(monkeypatch):
    monkeypatch.setattr(settings, "ENV", "prod", raising=False)
    monkeypatch.setattr(settings, "MOMO_JWT_SECRET", "a" * 32, raising=False)
    validate_env_settings()


def test_validate_env_reports_bad_profile(monkeypatch):
    monkeypatch.setattr(settings, "MOMO_PROFILE", "unknown", raising=False)
    with pytest.raises(RuntimeError) as exc:
        validate_env_settings()
    assert "MOMO_PROFILE" in str(exc.value)


def test_create_app_fails_fast_on_bad_override(monkeypatch):
    from main import create_app

    monkeypatch.setattr(settings, "MOMO_FALLBACK_STATUS", "PENDING", raising=False)
    with pytest.raises(RuntimeError) as exc:
        create_app()
    assert "MOMO_FALLBACK_STATUS" in str(exc.value)
