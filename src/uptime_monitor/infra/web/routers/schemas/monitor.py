from datetime import datetime
from typing import Any, Optional

from pydantic import Field

from uptime_monitor.core.domain.day_bucket import DayBucket
from uptime_monitor.core.domain.monitor_event import MonitorEvent
from uptime_monitor.core.domain.monitor_snapshot import MonitorSnapshot
from uptime_monitor.core.domain.result_record import ResultRecord
from uptime_monitor.core.domain.scheduler_state import SchedulerState
from uptime_monitor.core.domain.summary import Summary
from uptime_monitor.infra.web.routers.schemas import CamelModel


# Keys follow what the dashboard reads: status, responseTime, error.
class ResultRecordResponseDTO(CamelModel):
    timestamp: datetime
    status_code: Optional[int] = Field(default=None, serialization_alias="status")
    response_time_ms: int = Field(serialization_alias="responseTime")
    success: bool
    error_message: Optional[str] = Field(default=None, serialization_alias="error")


class SummaryResponseDTO(CamelModel):
    total_checks: int
    successful: int
    failed: int
    uptime_percentage: str
    average_response_time_ms: str = Field(serialization_alias="averageResponseTime")


class DayBucketResponseDTO(CamelModel):
    date: str
    started_at: datetime
    summary: SummaryResponseDTO
    logs: list[ResultRecordResponseDTO]

    @classmethod
    def from_domain(cls, bucket: DayBucket) -> "DayBucketResponseDTO":
        return cls(
            date=bucket.day_key.isoformat(),
            started_at=bucket.started_at,
            summary=SummaryResponseDTO.model_validate(bucket.summary),
            logs=[ResultRecordResponseDTO.model_validate(record) for record in bucket.log],
        )


class CurrentStateResponseDTO(CamelModel):
    check_results: list[ResultRecordResponseDTO]
    summary: SummaryResponseDTO
    day_summaries: list[DayBucketResponseDTO]

    @classmethod
    def from_domain(cls, snapshot: MonitorSnapshot) -> "CurrentStateResponseDTO":
        return cls(
            check_results=[ResultRecordResponseDTO.model_validate(record) for record in snapshot.active.log],
            summary=SummaryResponseDTO.model_validate(snapshot.active.summary),
            day_summaries=[DayBucketResponseDTO.from_domain(bucket) for bucket in snapshot.days],
        )


class MonitorStatusResponseDTO(CamelModel):
    target_url: str
    interval_ms: int
    timeout_ms: int
    scheduler_state: SchedulerState
    observers: int


def _encode_payload(payload: Any) -> Any:
    if isinstance(payload, MonitorSnapshot):
        return CurrentStateResponseDTO.from_domain(payload).model_dump(mode="json", by_alias=True)

    if isinstance(payload, ResultRecord):
        return ResultRecordResponseDTO.model_validate(payload).model_dump(mode="json", by_alias=True)

    if isinstance(payload, Summary):
        return SummaryResponseDTO.model_validate(payload).model_dump(mode="json", by_alias=True)

    if isinstance(payload, DayBucket):
        return DayBucketResponseDTO.from_domain(payload).model_dump(mode="json", by_alias=True)

    if isinstance(payload, (list, tuple)):
        return [_encode_payload(item) for item in payload]

    raise TypeError(f"Cannot encode payload of type {type(payload).__name__}")


def encode_event(event: MonitorEvent, payload: Any) -> dict[str, Any]:
    return {"event": event.value, "data": _encode_payload(payload)}
