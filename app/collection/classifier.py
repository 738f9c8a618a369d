# app/collection/classifier.py
from __future__ import annotations

import logging
import random
from typing import Any, Mapping, Optional

from app.collection.model import FAILED, SUCCESSFUL, TransactionStatus
from services.redaction import mask_msisdn

logger = logging.getLogger("momo_mock.collection")

RANDOM_FALLBACK = "RANDOM"


def normalize_payer_id(raw: Any) -> str:
    return str(raw).strip()


def random_terminal_status(rng: random.Random | None = None) -> TransactionStatus:
    r = rng or random
    return SUCCESSFUL if r.random() < 0.5 else FAILED


class StatusClassifier:
    """
    Maps a payer MSISDN to the initial status of a request-to-pay.

    Known test numbers resolve through an exact-match table; anything else
    uses the fallback, which is either RANDOM (50/50 SUCCESSFUL/FAILED) or a
    fixed status.
    """

    def __init__(
        self,
        table: Mapping[str, TransactionStatus],
        *,
        fallback: str = RANDOM_FALLBACK,
        rng: Optional[random.Random] = None,
    ):
        self.table = {normalize_payer_id(k): v for k, v in table.items()}
        self.fallback = fallback
        self._rng = rng

    def classify(self, payer_id: Any) -> TransactionStatus:
        msisdn = normalize_payer_id(payer_id)
        logger.debug("checking msisdn for status msisdn=%s", mask_msisdn(msisdn))

        status = self.table.get(msisdn)
        if status is not None:
            return status

        if self.fallback == RANDOM_FALLBACK:
            return random_terminal_status(self._rng)
        return self.fallback  # type: ignore[return-value]
