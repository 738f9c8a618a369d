from app.collection.model import Payer, TransactionRecord
from app.collection.store import TransactionStore


def _record(reference_id: str, status: str = "SUCCESSFUL") -> TransactionRecord:
    return TransactionRecord(
        reference_id=reference_id,
        financial_transaction_id="1234567890",
        external_id="ext",
        amount="10",
        currency="EUR",
        payer=Payer(party_id_type="MSISDN", party_id="233900800111"),
        status=status,
    )


def test_put_get_has():
    store = TransactionStore()
    assert store.get("ref-1") is None
    assert not store.has("ref-1")

    rec = _record("ref-1")
    store.put("ref-1", rec)
    assert store.has("ref-1")
    assert store.get("ref-1") is rec
    assert len(store) == 1


def test_put_overwrites_last_write_wins():
    store = TransactionStore()
    store.put("ref-1", _record("ref-1", "FAILED"))
    store.put("ref-1", _record("ref-1", "SUCCESSFUL"))
    assert store.get("ref-1").status == "SUCCESSFUL"
    assert len(store) == 1


def test_delete_notifies_listeners():
    store = TransactionStore()
    deleted = []
    store.add_delete_listener(deleted.append)
    store.put("ref-1", _record("ref-1"))

    assert store.delete("ref-1") is True
    assert store.delete("ref-1") is False
    assert deleted == ["ref-1"]


def test_clear_deletes_everything():
    store = TransactionStore()
    deleted = []
    store.add_delete_listener(deleted.append)
    for i in range(3):
        store.put(f"ref-{i}", _record(f"ref-{i}"))

    assert store.clear() == 3
    assert len(store) == 0
    assert sorted(deleted) == ["ref-0", "ref-1", "ref-2"]


def test_status_payload_shape():
    payload = _record("ref-1").to_status_payload()
    assert payload == {
        "financialTransactionId": "1234567890",
        "externalId": "ext",
        "amount": "10",
        "currency": "EUR",
        "payer": {"partyIdType": "MSISDN", "partyId": "233900800111"},
        "status": "SUCCESSFUL",
    }
