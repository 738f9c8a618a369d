import os
import sys
import time
import uuid

import requests
from dotenv import load_dotenv


DEFAULT_BASE_URL = "http://localhost:3000"

# payer -> expected status right after submission
CASES = [
    ("233900800111", "SUCCESSFUL"),
    ("233900800114", "FAILED"),
    ("233900800116", "PENDING"),
]


def _die(message, code=1):
    print(message)
    sys.exit(code)


def _require_env(name: str) -> str:
    value = (os.getenv(name) or "").strip()
    if not value:
        _die(f"Missing env var: {name}")
    return value


def _get_token(base_url: str, sub_key: str, authorization: str) -> str:
    resp = requests.post(
        f"{base_url}/collection/token/",
        headers={"Ocp-Apim-Subscription-Key": sub_key, "Authorization": authorization},
    )
    if resp.status_code != 200:
        _die(f"Token request failed: HTTP {resp.status_code} {resp.text}")
    token = (resp.json() or {}).get("access_token")
    if not token:
        _die("Token response missing access_token")
    return token


def _request_to_pay(base_url: str, token: str, sub_key: str, reference_id: str, msisdn: str) -> None:
    headers = {
        "Authorization": f"Bearer {token}",
        "X-Reference-Id": reference_id,
        "X-Target-Environment": "sandbox",
        "Ocp-Apim-Subscription-Key": sub_key,
    }
    body = {
        "amount": "1",
        "currency": "EUR",
        "externalId": reference_id[:8],
        "payer": {"partyIdType": "MSISDN", "partyId": msisdn},
        "payerMessage": "smoke",
        "payeeNote": "smoke",
    }
    resp = requests.post(f"{base_url}/collection/v1_0/requesttopay", headers=headers, json=body)
    if resp.status_code != 202:
        _die(f"requesttopay failed: HTTP {resp.status_code} {resp.text}")


def _get_status(base_url: str, token: str, sub_key: str, reference_id: str) -> str:
    headers = {"Authorization": f"Bearer {token}", "Ocp-Apim-Subscription-Key": sub_key}
    resp = requests.get(f"{base_url}/collection/v1_0/requesttopay/{reference_id}", headers=headers)
    if resp.status_code != 200:
        _die(f"status lookup failed: HTTP {resp.status_code} {resp.text}")
    return (resp.json() or {}).get("status") or ""


def main() -> None:
    load_dotenv()
    base_url = (os.getenv("MOMO_MOCK_BASE_URL") or DEFAULT_BASE_URL).rstrip("/")
    sub_key = _require_env("MOMO_SUBSCRIPTION_KEY")
    authorization = _require_env("MOMO_AUTHORIZATION")
    wait_s = float(os.getenv("SMOKE_WAIT_S") or "0")

    token = _get_token(base_url, sub_key, authorization)
    print("token ok")

    refs = []
    for msisdn, expected in CASES:
        reference_id = str(uuid.uuid4())
        _request_to_pay(base_url, token, sub_key, reference_id, msisdn)
        status = _get_status(base_url, token, sub_key, reference_id)
        print(f"{msisdn} reference_id={reference_id} status={status}")
        if status != expected:
            _die(f"Expected {expected} for {msisdn}, got {status}")
        refs.append((reference_id, msisdn))

    if wait_s > 0:
        print(f"waiting {wait_s}s for pending transitions")
        time.sleep(wait_s)
        for reference_id, msisdn in refs:
            print(f"{msisdn} reference_id={reference_id} status={_get_status(base_url, token, sub_key, reference_id)}")

    print("SMOKE OK")


if __name__ == "__main__":
    main()
