import asyncio
from datetime import datetime, timezone
from time import perf_counter
from typing import Optional

import httpx
import structlog

from uptime_monitor.core.domain.result_record import ResultRecord
from uptime_monitor.core.port.prober import Prober

logger = structlog.stdlib.get_logger(__name__)


def is_acceptable_status(status_code: int) -> bool:
    return 200 <= status_code < 400


class HttpxProber(Prober):
    def __init__(self, http_client: httpx.AsyncClient) -> None:
        self.http_client = http_client

    async def probe(self, target_url: str, timeout_ms: int) -> ResultRecord:
        timeout_seconds = timeout_ms / 1_000

        status_code: Optional[int] = None
        error_message: Optional[str] = None

        started_at = perf_counter()

        try:
            response = await asyncio.wait_for(
                self.http_client.get(target_url, timeout=timeout_seconds),
                timeout=timeout_seconds,
            )
            status_code = response.status_code

            if not is_acceptable_status(status_code):
                error_message = f"Request failed with status code {status_code}"

        except (asyncio.TimeoutError, httpx.TimeoutException):
            error_message = f"timeout of {timeout_ms}ms exceeded"

        except httpx.RequestError as e:
            error_message = str(e) or e.__class__.__name__

        except Exception as e:
            logger.exception(f"Unexpected error probing '{target_url}': {e}")
            error_message = f"{e.__class__.__name__}: {e}"

        response_time_ms = round((perf_counter() - started_at) * 1_000)

        result = ResultRecord(
            timestamp=datetime.now(timezone.utc),
            response_time_ms=response_time_ms,
            success=error_message is None,
            status_code=status_code,
            error_message=error_message,
        )

        if result.success:
            logger.info(f"Probe '{target_url}' succeeded: {status_code} in {response_time_ms}ms")
        else:
            logger.warning(f"Probe '{target_url}' failed: {error_message} in {response_time_ms}ms")

        return result
