import os
import time
from datetime import datetime, timezone
from typing import Any

import psutil
from fastapi import APIRouter, Depends, Response, status

from uptime_monitor.core.domain.scheduler_state import SchedulerState
from uptime_monitor.core.port.day_store import DayStore
from uptime_monitor.infra.config.config import get_config
from uptime_monitor.infra.services.probe_scheduler import ProbeScheduler
from uptime_monitor.infra.utils.formatters import format_bytes, format_time
from uptime_monitor.infra.web.deps import get_day_store, get_probe_scheduler

router = APIRouter(prefix="/stats", tags=["Stats"])

_start_time: float = time.time()
_current_process: psutil.Process = psutil.Process(os.getpid())


@router.get(
    "/health",
    response_model=dict[str, Any],
    status_code=status.HTTP_200_OK,
    summary="Get monitor health",
    description="Scheduler state, the latest check of the current day and the process footprint.",
)
async def get_health(
    response: Response,
    day_store: DayStore = Depends(get_day_store),
    probe_scheduler: ProbeScheduler = Depends(get_probe_scheduler),
):
    config = get_config()
    snapshot = await day_store.snapshot()
    today = snapshot.active
    last_check = today.log[-1] if today.log else None

    # A stopped scheduler records nothing more, so the monitor is down.
    if probe_scheduler.state is SchedulerState.STOPPED:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    health = {
        "status": "DOWN" if probe_scheduler.state is SchedulerState.STOPPED else "UP",
        "scheduler_state": probe_scheduler.state.value,
        "target_url": config.MONITOR_CONFIG.TARGET_URL,
        "last_check_at": last_check.timestamp.isoformat() if last_check else None,
        "last_check_success": last_check.success if last_check else None,
        "day": today.day_key.isoformat(),
        "checks_today": today.summary.total_checks,
        "uptime_today": today.summary.uptime_percentage,
        "version": config.VERSION,
        "timestamp": datetime.now(timezone.utc),
    }

    try:
        memory_info = _current_process.memory_full_info()

        return {
            **health,
            "uptime": format_time(time.time() - _start_time),
            "ram": format_bytes(memory_info.rss),
            "cpu_percent": _current_process.cpu_percent(interval=0.1),
        }

    except Exception as e:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

        return {
            **health,
            "status": "DEGRADED",
            "error": str(e),
        }
