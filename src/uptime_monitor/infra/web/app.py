import asyncio
from contextlib import asynccontextmanager
from pathlib import Path

import httpx
import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from uptime_monitor.core.domain.probe_completed import ProbeCompleted
from uptime_monitor.infra.adapter.httpx_prober import HttpxProber
from uptime_monitor.infra.adapter.in_memory_day_store import InMemoryDayStore
from uptime_monitor.infra.adapter.local_scheduler import get_local_scheduler
from uptime_monitor.infra.adapter.websocket_broadcaster import WebSocketBroadcaster
from uptime_monitor.infra.config.config import get_config
from uptime_monitor.infra.logging.config import configure_logging
from uptime_monitor.infra.services.monitor_service import MonitorService
from uptime_monitor.infra.services.probe_scheduler import ProbeScheduler
from uptime_monitor.infra.web.routers.monitor_router import router as monitor_router
from uptime_monitor.infra.web.routers.stats_router import router as stats_router
from uptime_monitor.use_cases.monitor.record_check_use_case import RecordCheckUseCase

logger = structlog.stdlib.get_logger(__name__)


def create_app() -> FastAPI:
    config = get_config()
    monitor_config = config.MONITOR_CONFIG

    configure_logging(
        log_level=config.LOGGING_CONFIG.LEVEL,
        json_logs=config.LOGGING_CONFIG.JSON_FORMAT,
        service_name=config.APP_NAME,
        environment=config.ENVIRONMENT,
        library_log_levels=config.LOGGING_CONFIG.LIBRARY_LOG_LEVELS,
    )

    scheduler = get_local_scheduler()

    http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(monitor_config.TIMEOUT_MS / 1_000),
        follow_redirects=True,
    )

    day_store = InMemoryDayStore(time_zone=monitor_config.zone_info)
    broadcaster = WebSocketBroadcaster(send_timeout_seconds=config.BROADCAST_SEND_TIMEOUT_MS / 1_000)
    completed: asyncio.Queue[ProbeCompleted] = asyncio.Queue()

    probe_scheduler = ProbeScheduler(
        scheduler=scheduler,
        prober=HttpxProber(http_client),
        completed=completed,
        target_url=monitor_config.TARGET_URL,
        interval_ms=monitor_config.INTERVAL_MS,
        timeout_ms=monitor_config.TIMEOUT_MS,
    )

    monitor_service = MonitorService(
        completed=completed,
        record_check_use_case=RecordCheckUseCase(day_store, broadcaster),
    )

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        scheduler.start()
        await monitor_service.start()
        await probe_scheduler.start()

        yield

        await probe_scheduler.stop()
        await monitor_service.stop()
        scheduler.stop()

        await broadcaster.close()
        await http_client.aclose()

    app = FastAPI(
        title=config.APP_NAME,
        version=config.VERSION,
        root_path=config.ROOT_PATH,
        docs_url="/apidocs",
        lifespan=lifespan,
    )

    app.state.host = config.HOST
    app.state.port = config.PORT

    app.state.day_store = day_store
    app.state.broadcaster = broadcaster
    app.state.probe_scheduler = probe_scheduler

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    app.include_router(stats_router)
    app.include_router(monitor_router)

    if config.STATIC_DIR:
        static_dir = Path(config.STATIC_DIR)

        if static_dir.is_dir():
            app.mount("/", StaticFiles(directory=static_dir, html=True), name="dashboard")
        else:
            logger.warning(f"Static directory '{static_dir}' not found, dashboard will not be served")

    return app
