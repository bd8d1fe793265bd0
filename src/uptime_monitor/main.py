import uvicorn

from uptime_monitor.infra.web.app import create_app


def main() -> None:
    app = create_app()

    uvicorn.run(
        app=app,
        host=app.state.host,
        port=app.state.port,
        access_log=False,
        log_config=None,
    )


if __name__ == "__main__":
    main()
