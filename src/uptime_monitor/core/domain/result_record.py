from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from uptime_monitor.core.exceptions.malformed_result_record_error import MalformedResultRecordError


@dataclass(frozen=True)
class ResultRecord:
    timestamp: datetime
    response_time_ms: int
    success: bool
    status_code: Optional[int] = None
    error_message: Optional[str] = None

    def __post_init__(self):
        if self.response_time_ms < 0:
            raise MalformedResultRecordError(f"negative response time {self.response_time_ms}ms")

        if self.success and self.error_message is not None:
            raise MalformedResultRecordError("successful probe cannot carry an error message")

        if not self.success and not self.error_message:
            raise MalformedResultRecordError("failed probe requires an error message")
