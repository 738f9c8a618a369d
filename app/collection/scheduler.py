# app/collection/scheduler.py
from __future__ import annotations

import asyncio
import logging
import random
from datetime import datetime, timedelta, timezone
from typing import Optional

from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.date import DateTrigger

from app.collection.config import DelayPolicy, FinalStatusPolicy
from app.collection.model import PENDING
from app.collection.state_machine import assert_transition
from app.collection.store import TransactionStore
from services.metrics import increment_status_transition

logger = logging.getLogger("momo_mock.scheduler")

JOB_PREFIX = "rtp:"


def _job_id(reference_id: str) -> str:
    return f"{JOB_PREFIX}{reference_id}"


class TransitionScheduler:
    """
    One-shot PENDING -> terminal transitions, one job per reference id.

    Jobs are coroutines run by APScheduler's AsyncIOExecutor on the app's event
    loop, so a job and a request handler never touch the store at the same
    time. Deleting a record from the store cancels its job.
    """

    def __init__(
        self,
        store: TransactionStore,
        *,
        delay: DelayPolicy,
        final_policy: FinalStatusPolicy,
        rng: Optional[random.Random] = None,
    ):
        self.store = store
        self.delay = delay
        self.final_policy = final_policy
        self._rng = rng
        self._scheduler: Optional[AsyncIOScheduler] = None
        store.add_delete_listener(self.cancel)

    # -----------------------
    # Lifecycle
    # -----------------------
    def start(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        if self.running:
            return
        self._scheduler = AsyncIOScheduler(
            event_loop=loop or asyncio.get_running_loop(),
            timezone="UTC",
            job_defaults={"misfire_grace_time": None, "coalesce": True, "max_instances": 1},
        )
        self._scheduler.start()
        logger.info("transition scheduler started")

    def shutdown(self) -> None:
        if not self.running:
            return
        self._scheduler.shutdown(wait=False)
        self._scheduler = None
        logger.info("transition scheduler stopped")

    @property
    def running(self) -> bool:
        return bool(self._scheduler and self._scheduler.running)

    # -----------------------
    # Jobs
    # -----------------------
    def schedule_transition(self, reference_id: str, payer_id: str) -> float:
        """Arm the transition for a PENDING record. Returns the delay in seconds."""
        if not self.running:
            raise RuntimeError("transition scheduler is not running")

        delay_s = self.delay.draw(self._rng)
        run_date = datetime.now(timezone.utc) + timedelta(seconds=delay_s)
        self._scheduler.add_job(
            self._finalize,
            trigger=DateTrigger(run_date=run_date),
            args=[reference_id, payer_id],
            id=_job_id(reference_id),
            name=f"finalize {reference_id}",
            replace_existing=True,
        )
        logger.info("scheduled status update reference_id=%s delay_s=%s", reference_id, delay_s)
        return delay_s

    def cancel(self, reference_id: str) -> bool:
        if self._scheduler is None:
            return False
        try:
            self._scheduler.remove_job(_job_id(reference_id))
        except JobLookupError:
            return False
        logger.info("cancelled status update reference_id=%s", reference_id)
        return True

    def cancel_all(self) -> None:
        if self._scheduler is not None:
            self._scheduler.remove_all_jobs()

    def pending_jobs(self) -> list[str]:
        if self._scheduler is None:
            return []
        return sorted(
            job.id[len(JOB_PREFIX):]
            for job in self._scheduler.get_jobs()
            if job.id.startswith(JOB_PREFIX)
        )

    async def _finalize(self, reference_id: str, payer_id: str) -> None:
        record = self.store.get(reference_id)
        # deleted or already final: nothing to do
        if record is None or record.status != PENDING:
            return

        final_status = self.final_policy.resolve(payer_id, self._rng)
        assert_transition(record.status, final_status)
        record.status = final_status
        increment_status_transition(final_status)
        logger.info("transaction updated reference_id=%s status=%s", reference_id, final_status)
