import asyncio
from zoneinfo import ZoneInfo

import pytest

from uptime_monitor.core.domain.monitor_event import MonitorEvent
from uptime_monitor.infra.adapter.in_memory_day_store import InMemoryDayStore
from uptime_monitor.infra.adapter.websocket_broadcaster import WebSocketBroadcaster
from tests.support.fakes import FakeWebSocket, success


@pytest.fixture
async def day_store() -> InMemoryDayStore:
    store = InMemoryDayStore(time_zone=ZoneInfo("UTC"))
    await store.record(success(120))
    return store


@pytest.mark.asyncio
async def test_attach_accepts_and_replays_current_state(day_store: InMemoryDayStore) -> None:
    broadcaster = WebSocketBroadcaster()
    websocket = FakeWebSocket()

    observer = await broadcaster.attach(websocket, day_store.snapshot)

    assert websocket.accepted is True
    assert broadcaster.observer_count == 1
    assert websocket.events() == ["currentState"]

    data = websocket.sent[0]["data"]
    assert data["summary"]["totalChecks"] == 1
    assert data["summary"]["averageResponseTime"] == "120.00"
    assert data["checkResults"][0]["responseTime"] == 120
    assert len(data["daySummaries"]) == 1
    assert data["daySummaries"][0]["logs"][0]["status"] == 200

    await broadcaster.detach(observer)
    assert broadcaster.observer_count == 0


@pytest.mark.asyncio
async def test_publish_fans_out_to_every_observer(day_store: InMemoryDayStore) -> None:
    broadcaster = WebSocketBroadcaster()
    sockets = [FakeWebSocket(), FakeWebSocket()]

    for websocket in sockets:
        await broadcaster.attach(websocket, day_store.snapshot)

    result = success(80)
    await broadcaster.publish(MonitorEvent.NEW_CHECK, result)

    for websocket in sockets:
        assert websocket.events() == ["currentState", "newCheck"]
        assert websocket.sent[-1]["data"]["responseTime"] == 80
        assert websocket.sent[-1]["data"]["success"] is True


@pytest.mark.asyncio
async def test_failing_observer_is_dropped_without_affecting_others(day_store: InMemoryDayStore) -> None:
    broadcaster = WebSocketBroadcaster()
    healthy = FakeWebSocket()
    broken = FakeWebSocket()

    await broadcaster.attach(healthy, day_store.snapshot)
    await broadcaster.attach(broken, day_store.snapshot)
    broken.fail_on_send = True

    snapshot = await day_store.snapshot()
    await broadcaster.publish(MonitorEvent.SUMMARY_UPDATE, snapshot.active.summary)

    assert broadcaster.observer_count == 1
    assert healthy.events() == ["currentState", "summaryUpdate"]
    assert broken.events() == ["currentState"]


@pytest.mark.asyncio
async def test_slow_observer_is_dropped_after_send_timeout(day_store: InMemoryDayStore) -> None:
    broadcaster = WebSocketBroadcaster(send_timeout_seconds=0.05)
    healthy = FakeWebSocket()
    slow = FakeWebSocket()

    await broadcaster.attach(healthy, day_store.snapshot)
    await broadcaster.attach(slow, day_store.snapshot)
    slow.send_delay = 1.0

    snapshot = await day_store.snapshot()
    await broadcaster.publish(MonitorEvent.DAILY_SUMMARY_UPDATE, snapshot.days)

    assert broadcaster.observer_count == 1
    assert healthy.events() == ["currentState", "dailySummaryUpdate"]
    assert healthy.sent[-1]["data"][0]["summary"]["totalChecks"] == 1


@pytest.mark.asyncio
async def test_attach_failure_does_not_register_observer(day_store: InMemoryDayStore) -> None:
    broadcaster = WebSocketBroadcaster()

    with pytest.raises(RuntimeError, match="connection reset"):
        await broadcaster.attach(FakeWebSocket(fail_on_send=True), day_store.snapshot)

    assert broadcaster.observer_count == 0


@pytest.mark.asyncio
async def test_close_closes_all_observers(day_store: InMemoryDayStore) -> None:
    broadcaster = WebSocketBroadcaster()
    websocket = FakeWebSocket()
    await broadcaster.attach(websocket, day_store.snapshot)

    await broadcaster.close()

    assert websocket.closed is True
    assert broadcaster.observer_count == 0


@pytest.mark.asyncio
async def test_stalled_replay_times_out_without_registering(day_store: InMemoryDayStore) -> None:
    broadcaster = WebSocketBroadcaster(send_timeout_seconds=0.05)

    with pytest.raises(asyncio.TimeoutError):
        await broadcaster.attach(FakeWebSocket(send_delay=1.0), day_store.snapshot)

    assert broadcaster.observer_count == 0

    async with broadcaster.sequenced():
        pass
