from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from typing import Any

from uptime_monitor.core.domain.monitor_event import MonitorEvent


class Broadcaster(ABC):
    @abstractmethod
    async def publish(self, event: MonitorEvent, payload: Any) -> None:
        raise NotImplementedError

    @abstractmethod
    def sequenced(self) -> AbstractAsyncContextManager[None]:
        """Exclusive section ordering state changes against observer replays.

        A state change and its events published inside this section are seen
        by a newly attached observer either entirely in its replay or entirely
        as live events, never both.
        """
        raise NotImplementedError

    @property
    @abstractmethod
    def observer_count(self) -> int:
        raise NotImplementedError
