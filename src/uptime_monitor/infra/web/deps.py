from starlette.requests import HTTPConnection

from uptime_monitor.core.port.day_store import DayStore
from uptime_monitor.infra.adapter.websocket_broadcaster import WebSocketBroadcaster
from uptime_monitor.infra.services.probe_scheduler import ProbeScheduler


def get_day_store(connection: HTTPConnection) -> DayStore:
    return connection.app.state.day_store


def get_broadcaster(connection: HTTPConnection) -> WebSocketBroadcaster:
    return connection.app.state.broadcaster


def get_probe_scheduler(connection: HTTPConnection) -> ProbeScheduler:
    return connection.app.state.probe_scheduler
