from services.metrics import render_prometheus
from tests.conftest import PENDING_FAILS_MSISDN, SUCCESS_MSISDN, submit


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200, r.text
    data = r.json()
    assert data["ok"] is True
    assert data["profile"] == "collection"
    assert data["scheduler_running"] is True
    assert data["transactions"] == 0


def test_health_counts_transactions(client):
    submit(client, "ref-1", SUCCESS_MSISDN)
    assert client.get("/health").json()["transactions"] == 1


def test_metrics_exposes_counters(client):
    submit(client, "ref-1", SUCCESS_MSISDN)
    submit(client, "ref-2", PENDING_FAILS_MSISDN)

    r = client.get("/metrics")
    assert r.status_code == 200, r.text
    assert r.headers["content-type"].startswith("text/plain")
    body = r.text
    assert 'requesttopay_total{status="SUCCESSFUL"} 1' in body
    assert 'requesttopay_total{status="PENDING"} 1' in body
    assert "# TYPE http_requests_total counter" in body


def test_render_prometheus_empty():
    assert render_prometheus() == ""


def test_startup_port_default(monkeypatch):
    from main import _resolve_port
    from settings import settings

    monkeypatch.delenv("PORT", raising=False)
    monkeypatch.setattr(settings, "PORT", 3000, raising=False)
    assert _resolve_port() == 3000


def test_render_prometheus_groups_series_by_name():
    from services.metrics import increment_request_to_pay, increment_token_issued

    increment_request_to_pay("PENDING")
    increment_request_to_pay("FAILED")
    increment_request_to_pay("FAILED")
    increment_token_issued("ok")

    assert render_prometheus() == (
        "# TYPE requesttopay_total counter\n"
        'requesttopay_total{status="FAILED"} 2\n'
        'requesttopay_total{status="PENDING"} 1\n'
        "# TYPE tokens_issued_total counter\n"
        'tokens_issued_total{result="ok"} 1\n'
    )
