from __future__ import annotations

from jose import jwt

from security import create_access_token
from settings import settings
from tests.conftest import SUCCESS_MSISDN, get_status, submit, token_headers


def _bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def test_verification_off_by_default(client):
    assert submit(client, "ref-open", SUCCESS_MSISDN).status_code == 202
    assert get_status(client, "ref-open").status_code == 200


def test_requesttopay_requires_token_when_enabled(make_client):
    c = make_client(MOMO_VERIFY_BEARER=True)

    r = submit(c, "ref-1", SUCCESS_MSISDN)
    assert r.status_code == 401, r.text
    assert r.json()["code"] == "AUTHORIZATION_FAILED"

    r = submit(c, "ref-1", SUCCESS_MSISDN, headers=_bearer("not-a-jwt"))
    assert r.status_code == 401, r.text

    token = c.post("/collection/token/", headers=token_headers()).json()["access_token"]
    r = submit(c, "ref-1", SUCCESS_MSISDN, headers=_bearer(token))
    assert r.status_code == 202, r.text

    assert get_status(c, "ref-1").status_code == 401
    r = get_status(c, "ref-1", headers=_bearer(token))
    assert r.status_code == 200, r.text
    assert r.json()["status"] == "SUCCESSFUL"


def test_expired_token_rejected(make_client):
    c = make_client(MOMO_VERIFY_BEARER=True)
    token = create_access_token(settings.MOMO_CLIENT_ID, seconds=-60)
    r = submit(c, "ref-old", SUCCESS_MSISDN, headers=_bearer(token))
    assert r.status_code == 401, r.text


def test_token_from_other_secret_rejected(make_client):
    c = make_client(MOMO_VERIFY_BEARER=True)
    token = jwt.encode({"clientId": settings.MOMO_CLIENT_ID}, "some-other-secret-value", algorithm="HS256")

    r = submit(c, "ref-x", SUCCESS_MSISDN, headers=_bearer(token))
    assert r.status_code == 401, r.text


def test_token_endpoint_never_requires_bearer(make_client):
    c = make_client(MOMO_VERIFY_BEARER=True)
    assert c.post("/collection/token/", headers=token_headers()).status_code == 200
