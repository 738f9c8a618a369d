# app/collection/model.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Literal, Optional

TransactionStatus = Literal["SUCCESSFUL", "FAILED", "PENDING"]

SUCCESSFUL: TransactionStatus = "SUCCESSFUL"
FAILED: TransactionStatus = "FAILED"
PENDING: TransactionStatus = "PENDING"

STATUSES: frozenset[str] = frozenset({SUCCESSFUL, FAILED, PENDING})
TERMINAL_STATUSES: frozenset[str] = frozenset({SUCCESSFUL, FAILED})


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Payer:
    party_id_type: str
    party_id: str

    def to_dict(self) -> dict[str, str]:
        return {"partyIdType": self.party_id_type, "partyId": self.party_id}


@dataclass
class TransactionRecord:
    reference_id: str
    financial_transaction_id: str
    external_id: str
    amount: Any
    currency: Any
    payer: Payer
    status: TransactionStatus
    payer_message: Optional[Any] = None
    payee_note: Optional[Any] = None
    created_at: datetime = field(default_factory=_now)

    @property
    def is_pending(self) -> bool:
        return self.status == PENDING

    def to_status_payload(self) -> dict[str, Any]:
        # shape returned by GET /requesttopay/{referenceId}
        return {
            "financialTransactionId": self.financial_transaction_id,
            "externalId": self.external_id,
            "amount": self.amount,
            "currency": self.currency,
            "payer": self.payer.to_dict(),
            "status": self.status,
        }
