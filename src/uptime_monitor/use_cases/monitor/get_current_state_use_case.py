from uptime_monitor.core.domain.monitor_snapshot import MonitorSnapshot
from uptime_monitor.core.port.day_store import DayStore


class GetCurrentStateUseCase:
    def __init__(self, day_store: DayStore) -> None:
        self.day_store = day_store

    async def execute(self) -> MonitorSnapshot:
        return await self.day_store.snapshot()
