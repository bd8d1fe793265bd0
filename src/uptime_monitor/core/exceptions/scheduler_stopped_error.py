class SchedulerStoppedError(Exception):
    def __init__(self) -> None:
        super().__init__("Probe scheduler was stopped and cannot be restarted")
