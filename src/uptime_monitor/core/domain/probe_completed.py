from dataclasses import dataclass

from uptime_monitor.core.domain.result_record import ResultRecord


@dataclass(frozen=True)
class ProbeCompleted:
    result: ResultRecord
