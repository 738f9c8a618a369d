# app/collection/service.py
from __future__ import annotations

import logging
import random
from typing import Optional

from app.collection.classifier import StatusClassifier, normalize_payer_id
from app.collection.config import EngineConfig
from app.collection.errors import NotFoundError, ValidationError
from app.collection.ids import next_id
from app.collection.model import Payer, TransactionRecord
from app.collection.scheduler import TransitionScheduler
from app.collection.store import TransactionStore
from schemas import RequestToPayRequest
from services.metrics import increment_request_to_pay
from services.redaction import mask_msisdn

logger = logging.getLogger("momo_mock.collection")


def _missing(value) -> bool:
    return value is None or value == "" or value == 0


class CollectionService:
    def __init__(
        self,
        store: TransactionStore,
        classifier: StatusClassifier,
        scheduler: TransitionScheduler,
        *,
        config: Optional[EngineConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = config
        self.store = store
        self.classifier = classifier
        self.scheduler = scheduler
        self._rng = rng

    @classmethod
    def from_config(cls, cfg: EngineConfig, *, rng: Optional[random.Random] = None) -> "CollectionService":
        store = TransactionStore()
        classifier = StatusClassifier(cfg.status_table, fallback=cfg.fallback, rng=rng)
        scheduler = TransitionScheduler(store, delay=cfg.delay, final_policy=cfg.final_policy, rng=rng)
        return cls(store, classifier, scheduler, config=cfg, rng=rng)

    def request_to_pay(self, reference_id: Optional[str], body: RequestToPayRequest) -> TransactionRecord:
        if not reference_id or not reference_id.strip():
            raise ValidationError("Missing X-Reference-Id header")

        payer = body.payer
        if (
            _missing(body.amount)
            or _missing(body.currency)
            or payer is None
            or _missing(payer.party_id_type)
            or _missing(payer.party_id)
        ):
            raise ValidationError("Missing required fields in body")

        party_id = normalize_payer_id(payer.party_id)
        status = self.classifier.classify(party_id)

        record = TransactionRecord(
            reference_id=reference_id,
            financial_transaction_id=next_id(self._rng),
            external_id=str(body.external_id) if body.external_id else next_id(self._rng),
            amount=body.amount,
            currency=body.currency,
            payer=Payer(party_id_type=str(payer.party_id_type).strip(), party_id=party_id),
            status=status,
            payer_message=body.payer_message,
            payee_note=body.payee_note,
        )

        # nothing is written unless a PENDING record can also get its transition
        if record.is_pending and not self.scheduler.running:
            raise RuntimeError("transition scheduler is not running")

        # a resubmission replaces the record and any transition armed for it
        self.scheduler.cancel(reference_id)
        self.store.put(reference_id, record)
        if record.is_pending:
            self.scheduler.schedule_transition(reference_id, party_id)

        increment_request_to_pay(status)
        logger.info(
            "request to pay accepted reference_id=%s payer=%s status=%s",
            reference_id,
            mask_msisdn(party_id),
            status,
        )
        return record

    def get_transaction(self, reference_id: str) -> TransactionRecord:
        record = self.store.get(reference_id)
        if record is None:
            raise NotFoundError("Transaction not found")
        return record

    def delete_transaction(self, reference_id: str) -> None:
        if not self.store.delete(reference_id):
            raise NotFoundError("Transaction not found")

    def reset(self) -> int:
        cleared = self.store.clear()
        self.scheduler.cancel_all()
        return cleared
