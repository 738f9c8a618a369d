# tests/conftest.py

from typing import Callable, Dict, Optional

import pytest
from fastapi.testclient import TestClient

from main import create_app
from services.metrics import reset_metrics
from settings import settings


SUCCESS_MSISDN = "233900800111"
FAILED_MSISDN = "233900800114"
PENDING_FAILS_MSISDN = "233900800116"
PENDING_SUCCEEDS_MSISDN = "233900800117"


# ---------------------------
# Client Helpers
# ---------------------------

@pytest.fixture(autouse=True)
def _fresh_metrics():
    reset_metrics()
    yield
    reset_metrics()


@pytest.fixture
def make_client(monkeypatch) -> Callable[..., TestClient]:
    """
    Build a client after applying settings overrides.

    The client is entered as a context manager so the app lifespan runs and
    the transition scheduler is live on the client's event loop.
    """
    opened: list[TestClient] = []

    def _make(**overrides) -> TestClient:
        for key, value in overrides.items():
            monkeypatch.setattr(settings, key, value, raising=False)
        c = TestClient(create_app(), raise_server_exceptions=False)
        c.__enter__()
        opened.append(c)
        return c

    yield _make

    for c in opened:
        c.__exit__(None, None, None)


@pytest.fixture
def client(make_client) -> TestClient:
    return make_client(MOMO_PROFILE="collection")


@pytest.fixture
def fast_client(make_client) -> TestClient:
    # pending transactions resolve half a second after submission
    return make_client(MOMO_PROFILE="collection", MOMO_DELAY_MIN_S=0.5)


def token_headers() -> Dict[str, str]:
    return {
        "Ocp-Apim-Subscription-Key": settings.MOMO_SUBSCRIPTION_KEY,
        "Authorization": settings.MOMO_AUTHORIZATION,
    }


def rtp_body(msisdn: str, **extra) -> dict:
    body = {
        "amount": "100",
        "currency": "EUR",
        "externalId": "ext-001",
        "payer": {"partyIdType": "MSISDN", "partyId": msisdn},
        "payerMessage": "Pay for order",
        "payeeNote": "Thanks",
    }
    body.update(extra)
    return body


def submit(
    client: TestClient,
    reference_id: Optional[str],
    msisdn: str,
    headers: Optional[Dict[str, str]] = None,
    **extra,
):
    h = dict(headers or {})
    if reference_id is not None:
        h["X-Reference-Id"] = reference_id
    return client.post("/collection/v1_0/requesttopay", json=rtp_body(msisdn, **extra), headers=h)


def get_status(client: TestClient, reference_id: str, headers: Optional[Dict[str, str]] = None):
    return client.get(f"/collection/v1_0/requesttopay/{reference_id}", headers=headers or {})
