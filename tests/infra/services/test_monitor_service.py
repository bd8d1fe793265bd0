import asyncio
from zoneinfo import ZoneInfo

import pytest

from uptime_monitor.core.domain.monitor_snapshot import MonitorSnapshot
from uptime_monitor.core.domain.probe_completed import ProbeCompleted
from uptime_monitor.core.domain.result_record import ResultRecord
from uptime_monitor.core.port.day_store import DayStore
from uptime_monitor.infra.adapter.in_memory_day_store import InMemoryDayStore
from uptime_monitor.infra.services.monitor_service import MonitorService
from uptime_monitor.use_cases.monitor.record_check_use_case import RecordCheckUseCase
from tests.support.fakes import FakeBroadcaster, failure, success


class FailingOnceDayStore(DayStore):
    def __init__(self, delegate: DayStore) -> None:
        self.delegate = delegate
        self.failures_left = 1

    async def record(self, result: ResultRecord) -> bool:
        if self.failures_left:
            self.failures_left -= 1
            raise RuntimeError("summary blew up")

        return await self.delegate.record(result)

    async def snapshot(self) -> MonitorSnapshot:
        return await self.delegate.snapshot()


@pytest.mark.asyncio
async def test_service_records_and_broadcasts_queued_results() -> None:
    completed: asyncio.Queue[ProbeCompleted] = asyncio.Queue()
    day_store = InMemoryDayStore(time_zone=ZoneInfo("UTC"))
    broadcaster = FakeBroadcaster()
    service = MonitorService(completed, RecordCheckUseCase(day_store, broadcaster))

    await service.start()
    completed.put_nowait(ProbeCompleted(result=success(100)))
    completed.put_nowait(ProbeCompleted(result=failure("timeout")))
    await completed.join()
    await service.stop()

    snapshot = await day_store.snapshot()
    assert snapshot.active.summary.total_checks == 2
    assert broadcaster.names() == ["newCheck", "summaryUpdate", "dailySummaryUpdate"] * 2


@pytest.mark.asyncio
async def test_service_skips_faulty_cycle_and_keeps_consuming() -> None:
    completed: asyncio.Queue[ProbeCompleted] = asyncio.Queue()
    day_store = InMemoryDayStore(time_zone=ZoneInfo("UTC"))
    broadcaster = FakeBroadcaster()
    service = MonitorService(completed, RecordCheckUseCase(FailingOnceDayStore(day_store), broadcaster))

    await service.start()
    completed.put_nowait(ProbeCompleted(result=success(100)))
    completed.put_nowait(ProbeCompleted(result=success(300)))
    await completed.join()
    await service.stop()

    snapshot = await day_store.snapshot()
    assert [record.response_time_ms for record in snapshot.active.log] == [300]
    assert broadcaster.names() == ["newCheck", "summaryUpdate", "dailySummaryUpdate"]


@pytest.mark.asyncio
async def test_stop_without_start_is_noop() -> None:
    service = MonitorService(asyncio.Queue(), RecordCheckUseCase(InMemoryDayStore(ZoneInfo("UTC")), FakeBroadcaster()))

    await service.stop()
