from abc import ABC, abstractmethod

from uptime_monitor.core.domain.result_record import ResultRecord


class Prober(ABC):
    @abstractmethod
    async def probe(self, target_url: str, timeout_ms: int) -> ResultRecord:
        raise NotImplementedError
