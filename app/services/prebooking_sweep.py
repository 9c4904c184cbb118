# app/services/prebooking_sweep.py
"""
Expiry sweep for prebookings, meant to be triggered by a scheduler.

Two independent updates, both always attempted:
  1. expected_date before today            → consumed
  2. expected_date today, time before now  → consumed
Only unconsumed rows are touched, so re-running is harmless. Dates and
times are UTC.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from app.errors import GatewayError
from app.repositories.base import YardRepository
from app.utils.logger import get_logger
from app.utils.time_utils import hhmm, utcnow

logger = get_logger(__name__)

SUCCESS_MESSAGE = "Prebooking cleanup completed"


@dataclass
class SweepResult:
    ok: bool
    consumed_by_date: int = 0
    consumed_by_time: int = 0
    error: Optional[str] = None

    def to_response(self) -> dict:
        if self.ok:
            return {"ok": True, "message": SUCCESS_MESSAGE}
        return {"ok": False, "error": self.error}


def sweep_expired_prebookings(repo: YardRepository, now: datetime = None) -> SweepResult:
    now = now or utcnow()
    today = now.date()
    cutoff = hhmm(now)
    result = SweepResult(ok=True)
    errors = []

    try:
        result.consumed_by_date = repo.consume_prebookings_before(today)
    except GatewayError as e:
        errors.append(e.message)

    try:
        result.consumed_by_time = repo.consume_prebookings_due(today, cutoff)
    except GatewayError as e:
        errors.append(e.message)

    if errors:
        result.ok = False
        result.error = next((msg for msg in errors if msg), "Prebooking cleanup failed")
        logger.error(f"[Sweep] Prebooking cleanup failed: {result.error}")
    else:
        logger.info(f"[Sweep] Expired prebookings: {result.consumed_by_date} by date, "
                    f"{result.consumed_by_time} by time (cutoff {today} {cutoff})")
    return result
