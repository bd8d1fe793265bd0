from abc import ABC, abstractmethod

from uptime_monitor.core.domain.monitor_snapshot import MonitorSnapshot
from uptime_monitor.core.domain.result_record import ResultRecord


class DayStore(ABC):
    @abstractmethod
    async def record(self, result: ResultRecord) -> bool:
        """Append ``result`` to the current day, rolling over first if the day changed.

        Returns ``True`` when a rollover happened.
        """
        raise NotImplementedError

    @abstractmethod
    async def snapshot(self) -> MonitorSnapshot:
        raise NotImplementedError
