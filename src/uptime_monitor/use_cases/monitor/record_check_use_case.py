from uptime_monitor.core.domain.monitor_event import MonitorEvent
from uptime_monitor.core.domain.result_record import ResultRecord
from uptime_monitor.core.port.broadcaster import Broadcaster
from uptime_monitor.core.port.day_store import DayStore


class RecordCheckUseCase:
    def __init__(self, day_store: DayStore, broadcaster: Broadcaster) -> None:
        self.day_store = day_store
        self.broadcaster = broadcaster

    async def execute(self, result: ResultRecord) -> bool:
        async with self.broadcaster.sequenced():
            rolled_over = await self.day_store.record(result)
            snapshot = await self.day_store.snapshot()

            await self.broadcaster.publish(MonitorEvent.NEW_CHECK, result)
            await self.broadcaster.publish(MonitorEvent.SUMMARY_UPDATE, snapshot.active.summary)
            await self.broadcaster.publish(MonitorEvent.DAILY_SUMMARY_UPDATE, snapshot.days)

        return rolled_over
