import asyncio
from datetime import date, datetime, timezone, tzinfo
from typing import Callable, Optional

import structlog

from uptime_monitor.core.domain.day_bucket import DayBucket
from uptime_monitor.core.domain.monitor_snapshot import MonitorSnapshot
from uptime_monitor.core.domain.result_record import ResultRecord
from uptime_monitor.core.port.day_store import DayStore

logger = structlog.stdlib.get_logger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryDayStore(DayStore):
    """Day-bucketed result log kept for the lifetime of the process.

    Buckets are immutable; every ``record`` builds the next active bucket and
    history and swaps both references under the lock, so a snapshot never sees
    a half-applied append. History is ordered most-recent-first and unbounded;
    the active day key never moves backwards.
    """

    def __init__(self, time_zone: tzinfo, clock: Optional[Callable[[], datetime]] = None) -> None:
        self.time_zone = time_zone
        self._clock = clock or utc_now

        now = self._clock()
        self._active = DayBucket.open(self._day_key(now), now)
        self._history: tuple[DayBucket, ...] = ()

        self._lock = asyncio.Lock()

    def _day_key(self, instant: datetime) -> date:
        return instant.astimezone(self.time_zone).date()

    async def record(self, result: ResultRecord) -> bool:
        async with self._lock:
            now = self._clock()
            today = self._day_key(now)

            active = self._active
            history = self._history

            # A clock stepping back over midnight keeps appending to the active day.
            rolled_over = today > active.day_key
            if rolled_over:
                history = (active,) + history
                active = DayBucket.open(today, now)

            active = active.append(result)

            self._active, self._history = active, history

        if rolled_over:
            logger.info(
                f"Rolled over from {history[0].day_key.isoformat()} to {today.isoformat()} "
                f"(closed day: {history[0].summary.total_checks} checks, "
                f"uptime {history[0].summary.uptime_percentage}%)"
            )

        return rolled_over

    async def snapshot(self) -> MonitorSnapshot:
        async with self._lock:
            return MonitorSnapshot(active=self._active, history=self._history)
