# app/collection/store.py
from __future__ import annotations

from typing import Callable, Iterator, Optional

from app.collection.model import TransactionRecord

DeleteListener = Callable[[str], None]


class TransactionStore:
    """
    In-memory request-to-pay records keyed by reference id.

    Lives for the process lifetime and is never persisted. Callers on the
    event loop get atomic single operations; nothing more is promised.
    """

    def __init__(self) -> None:
        self._records: dict[str, TransactionRecord] = {}
        self._delete_listeners: list[DeleteListener] = []

    def add_delete_listener(self, listener: DeleteListener) -> None:
        self._delete_listeners.append(listener)

    def put(self, reference_id: str, record: TransactionRecord) -> None:
        # last write wins
        self._records[reference_id] = record

    def get(self, reference_id: str) -> Optional[TransactionRecord]:
        return self._records.get(reference_id)

    def has(self, reference_id: str) -> bool:
        return reference_id in self._records

    def delete(self, reference_id: str) -> bool:
        if self._records.pop(reference_id, None) is None:
            return False
        for listener in self._delete_listeners:
            listener(reference_id)
        return True

    def clear(self) -> int:
        ids = list(self._records)
        for reference_id in ids:
            self.delete(reference_id)
        return len(ids)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._records))
