import asyncio
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Awaitable, Callable
from uuid import uuid4

import structlog
from fastapi import WebSocket

from uptime_monitor.core.domain.monitor_event import MonitorEvent
from uptime_monitor.core.domain.monitor_snapshot import MonitorSnapshot
from uptime_monitor.core.port.broadcaster import Broadcaster
from uptime_monitor.infra.web.routers.schemas.monitor import encode_event

logger = structlog.stdlib.get_logger(__name__)


@dataclass(eq=False)
class Observer:
    websocket: WebSocket
    id: str = field(default_factory=lambda: str(uuid4()))

    # Held while sending so currentState always reaches the observer first.
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)


class WebSocketBroadcaster(Broadcaster):
    def __init__(self, send_timeout_seconds: float = 5.0) -> None:
        self.send_timeout_seconds = send_timeout_seconds

        self._observers: dict[str, Observer] = {}
        self._lock = asyncio.Lock()
        # Orders state changes against the currentState replay of new observers.
        self._sequence = asyncio.Lock()

    @property
    def observer_count(self) -> int:
        return len(self._observers)

    @asynccontextmanager
    async def sequenced(self) -> AsyncIterator[None]:
        async with self._sequence:
            yield

    async def attach(
        self,
        websocket: WebSocket,
        current_state: Callable[[], Awaitable[MonitorSnapshot]],
    ) -> Observer:
        await websocket.accept()
        observer = Observer(websocket=websocket)

        async with self.sequenced(), observer.lock:
            async with self._lock:
                self._observers[observer.id] = observer

            try:
                snapshot = await current_state()
                await asyncio.wait_for(
                    websocket.send_json(encode_event(MonitorEvent.CURRENT_STATE, snapshot)),
                    timeout=self.send_timeout_seconds,
                )
            except Exception:
                async with self._lock:
                    self._observers.pop(observer.id, None)
                raise

        logger.info(f"Observer connected: {observer.id} (observers: {self.observer_count})")

        return observer

    async def detach(self, observer: Observer) -> None:
        async with self._lock:
            removed = self._observers.pop(observer.id, None)

        if removed is not None:
            logger.info(f"Observer disconnected: {observer.id} (observers: {self.observer_count})")

    async def publish(self, event: MonitorEvent, payload: Any) -> None:
        message = encode_event(event, payload)

        async with self._lock:
            observers = list(self._observers.values())

        await asyncio.gather(*[self._deliver(observer, message) for observer in observers])

    async def _deliver(self, observer: Observer, message: dict[str, Any]) -> None:
        try:
            async with observer.lock:
                await asyncio.wait_for(
                    observer.websocket.send_json(message),
                    timeout=self.send_timeout_seconds,
                )
        except Exception as e:
            logger.warning(f"Dropping observer {observer.id} after failed '{message['event']}' delivery: {e!r}")
            await self.detach(observer)

    async def close(self) -> None:
        async with self._lock:
            observers = list(self._observers.values())
            self._observers.clear()

        for observer in observers:
            try:
                await observer.websocket.close()
            except Exception as e:
                logger.debug(f"Observer {observer.id} already closed: {e!r}")
