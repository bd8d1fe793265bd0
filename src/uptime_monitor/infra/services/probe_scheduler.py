import asyncio
import contextlib
from typing import Optional

import structlog

from uptime_monitor.core.domain.probe_completed import ProbeCompleted
from uptime_monitor.core.domain.scheduler_state import SchedulerState
from uptime_monitor.core.exceptions.scheduler_stopped_error import SchedulerStoppedError
from uptime_monitor.core.port.prober import Prober
from uptime_monitor.core.port.scheduler import Scheduler
from uptime_monitor.infra.utils.formatters import format_interval_ms

logger = structlog.stdlib.get_logger(__name__)


class ProbeScheduler:
    """Drives the prober on a fixed, clock-anchored cadence.

    Ticks come from the interval job; a tick that arrives while a probe is in
    flight is remembered and dispatched as soon as that probe resolves, so
    there is never more than one probe running. Results are handed off through
    ``completed`` rather than processed here.
    """

    JOB_KEY = "probe_target"

    def __init__(
        self,
        scheduler: Scheduler,
        prober: Prober,
        completed: "asyncio.Queue[ProbeCompleted]",
        target_url: str,
        interval_ms: int = 60_000,
        timeout_ms: int = 10_000,
    ):
        self.scheduler = scheduler
        self.prober = prober
        self.completed = completed

        self.target_url = target_url
        self.interval_ms = interval_ms
        self.timeout_ms = timeout_ms

        self.state = SchedulerState.IDLE

        self._probe_task: Optional[asyncio.Task] = None
        self._tick_pending = False

    async def start(self) -> None:
        if self.state is SchedulerState.STOPPED:
            raise SchedulerStoppedError()

        if self.scheduler.has_job(self.JOB_KEY):
            logger.warning("Probe scheduler already started")
            return

        self.scheduler.add_job(
            job_key=self.JOB_KEY,
            func=self._on_tick,
            interval_seconds=self.interval_ms / 1_000,
            job_name=f"Probe {self.target_url}",
        )

        logger.info(
            f"Probe scheduler started for '{self.target_url}' "
            f"(interval: {format_interval_ms(self.interval_ms)}, timeout: {format_interval_ms(self.timeout_ms)})"
        )

        await self._on_tick()

    async def stop(self) -> None:
        if self.state is SchedulerState.STOPPED:
            return

        self.state = SchedulerState.STOPPED
        self._tick_pending = False
        self.scheduler.remove_job(self.JOB_KEY)

        task, self._probe_task = self._probe_task, None
        if task is not None and not task.done():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task

        logger.info("Probe scheduler stopped")

    @property
    def probe_task(self) -> Optional[asyncio.Task]:
        return self._probe_task

    async def _on_tick(self) -> None:
        if not self.state.accepts_ticks:
            return

        if self.state is SchedulerState.PROBE_IN_FLIGHT:
            logger.warning(f"Probe still in flight after {format_interval_ms(self.interval_ms)}, next probe deferred")
            self._tick_pending = True
            return

        self._dispatch()

    def _dispatch(self) -> None:
        self.state = SchedulerState.PROBE_IN_FLIGHT
        self._probe_task = asyncio.create_task(self._run_probe())

    async def _run_probe(self) -> None:
        try:
            result = await self.prober.probe(self.target_url, self.timeout_ms)
        except Exception as e:
            logger.exception(f"Probe of '{self.target_url}' raised, skipping cycle: {e}")
        else:
            self.completed.put_nowait(ProbeCompleted(result=result))

        self._on_probe_resolved()

    def _on_probe_resolved(self) -> None:
        if self.state is SchedulerState.STOPPED:
            return

        self.state = SchedulerState.IDLE

        if self._tick_pending:
            self._tick_pending = False
            self._dispatch()
