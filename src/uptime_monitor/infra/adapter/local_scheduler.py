from functools import lru_cache
from typing import Any, Callable, Optional

import structlog
from apscheduler.schedulers.asyncio import AsyncIOScheduler, BaseScheduler
from apscheduler.triggers.interval import IntervalTrigger

from uptime_monitor.core.port.scheduler import Scheduler

logger = structlog.stdlib.get_logger(__name__)


class LocalScheduler(Scheduler):
    def __init__(self, scheduler: BaseScheduler) -> None:
        self.scheduler = scheduler
        self._jobs: dict[str, str] = {}

    def start(self) -> None:
        self.scheduler.start()

    def stop(self) -> None:
        self.scheduler.shutdown(wait=True)

    def add_job(
        self,
        job_key: str,
        func: Callable[..., Any],
        interval_seconds: float,
        args: tuple = (),
        kwargs: Optional[dict] = None,
        job_name: Optional[str] = None,
    ) -> str:
        if job_key in self._jobs:
            self.remove_job(job_key)

        job = self.scheduler.add_job(
            func=func,
            trigger=IntervalTrigger(seconds=interval_seconds),
            args=args,
            kwargs=kwargs or {},
            id=job_key,
            name=job_name or job_key,
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )

        self._jobs[job_key] = job.id

        return job.id

    def remove_job(self, job_key: str) -> bool:
        if job_key not in self._jobs:
            return False

        job_id = self._jobs.pop(job_key)

        try:
            self.scheduler.remove_job(job_id)
        except Exception as e:
            logger.warning(f"Failed to remove job '{job_key}': {e}")
            return False

        return True

    def has_job(self, job_key: str) -> bool:
        return job_key in self._jobs

    def get_all_jobs(self) -> list[str]:
        return list(self._jobs.keys())


@lru_cache
def get_local_scheduler() -> Scheduler:
    return LocalScheduler(AsyncIOScheduler())
