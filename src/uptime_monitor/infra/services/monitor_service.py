import asyncio
import contextlib
from typing import Optional

import structlog

from uptime_monitor.core.domain.probe_completed import ProbeCompleted
from uptime_monitor.use_cases.monitor.record_check_use_case import RecordCheckUseCase

logger = structlog.stdlib.get_logger(__name__)


class MonitorService:
    def __init__(
        self,
        completed: "asyncio.Queue[ProbeCompleted]",
        record_check_use_case: RecordCheckUseCase,
    ):
        self.completed = completed
        self.record_check_use_case = record_check_use_case

        self._consumer_task: Optional[asyncio.Task] = None

    async def start(self) -> None:
        if self._consumer_task is not None and not self._consumer_task.done():
            return

        self._consumer_task = asyncio.create_task(self._consume())
        logger.info("Monitor service started")

    async def stop(self) -> None:
        task, self._consumer_task = self._consumer_task, None

        if task is None:
            return

        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

        logger.info("Monitor service stopped")

    async def _consume(self) -> None:
        while True:
            message = await self.completed.get()

            try:
                await self.handle(message)
            finally:
                self.completed.task_done()

    async def handle(self, message: ProbeCompleted) -> None:
        try:
            await self.record_check_use_case.execute(message.result)
        except Exception as e:
            logger.exception(f"Failed to record probe result, skipping cycle: {e}")
