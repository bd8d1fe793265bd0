import structlog
from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect, status

from uptime_monitor.core.domain.monitor_snapshot import MonitorSnapshot
from uptime_monitor.core.domain.summary import Summary
from uptime_monitor.core.port.day_store import DayStore
from uptime_monitor.infra.adapter.websocket_broadcaster import WebSocketBroadcaster
from uptime_monitor.infra.services.probe_scheduler import ProbeScheduler
from uptime_monitor.infra.web.deps import get_broadcaster, get_day_store, get_probe_scheduler
from uptime_monitor.infra.web.routers.schemas.monitor import (
    CurrentStateResponseDTO,
    DayBucketResponseDTO,
    MonitorStatusResponseDTO,
    SummaryResponseDTO,
)
from uptime_monitor.use_cases.monitor.get_current_state_use_case import GetCurrentStateUseCase

logger = structlog.stdlib.get_logger(__name__)

router = APIRouter(prefix="/monitor", tags=["Monitor"])


async def _current_state(day_store: DayStore) -> MonitorSnapshot:
    return await GetCurrentStateUseCase(day_store).execute()


@router.get(
    "/state",
    response_model=CurrentStateResponseDTO,
    status_code=status.HTTP_200_OK,
    summary="Current day log, summary and all day buckets",
)
async def get_state(day_store: DayStore = Depends(get_day_store)) -> CurrentStateResponseDTO:
    return CurrentStateResponseDTO.from_domain(await _current_state(day_store))


@router.get(
    "/summary",
    response_model=SummaryResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def get_summary(day_store: DayStore = Depends(get_day_store)) -> Summary:
    snapshot = await _current_state(day_store)
    return snapshot.active.summary


@router.get(
    "/days",
    response_model=list[DayBucketResponseDTO],
    status_code=status.HTTP_200_OK,
    summary="Day buckets, most recent first",
)
async def get_days(day_store: DayStore = Depends(get_day_store)) -> list[DayBucketResponseDTO]:
    snapshot = await _current_state(day_store)
    return [DayBucketResponseDTO.from_domain(bucket) for bucket in snapshot.days]


@router.get(
    "/status",
    response_model=MonitorStatusResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def get_status(
    probe_scheduler: ProbeScheduler = Depends(get_probe_scheduler),
    broadcaster: WebSocketBroadcaster = Depends(get_broadcaster),
) -> MonitorStatusResponseDTO:
    return MonitorStatusResponseDTO(
        target_url=probe_scheduler.target_url,
        interval_ms=probe_scheduler.interval_ms,
        timeout_ms=probe_scheduler.timeout_ms,
        scheduler_state=probe_scheduler.state,
        observers=broadcaster.observer_count,
    )


@router.websocket("/ws")
async def monitor_ws(
    websocket: WebSocket,
    broadcaster: WebSocketBroadcaster = Depends(get_broadcaster),
    day_store: DayStore = Depends(get_day_store),
):
    observer = await broadcaster.attach(websocket, lambda: _current_state(day_store))

    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        logger.debug(f"Observer {observer.id} closed the connection")
    finally:
        await broadcaster.detach(observer)
