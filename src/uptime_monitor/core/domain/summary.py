from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence

from uptime_monitor.core.domain.result_record import ResultRecord

NOT_AVAILABLE = "N/A"


@dataclass(frozen=True)
class Summary:
    total_checks: int
    successful: int
    failed: int
    uptime_percentage: str
    average_response_time_ms: str


def _fixed(value: float) -> str:
    # Exact binary ties round up, as the dashboard expects.
    return str(Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def summarize(log: Sequence[ResultRecord]) -> Summary:
    """Aggregate a log of probe results.

    Ratios are rendered with two decimals; ``NOT_AVAILABLE`` stands in when
    there is nothing to divide by. Latency only averages successful probes.
    """
    total_checks = len(log)
    response_times = [record.response_time_ms for record in log if record.success]
    successful = len(response_times)

    uptime_percentage = NOT_AVAILABLE
    if total_checks:
        uptime_percentage = _fixed(successful / total_checks * 100)

    average_response_time_ms = NOT_AVAILABLE
    if successful:
        average_response_time_ms = _fixed(sum(response_times) / successful)

    return Summary(
        total_checks=total_checks,
        successful=successful,
        failed=total_checks - successful,
        uptime_percentage=uptime_percentage,
        average_response_time_ms=average_response_time_ms,
    )
