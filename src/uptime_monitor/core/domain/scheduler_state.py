from enum import Enum


class SchedulerState(str, Enum):
    IDLE = "IDLE"
    PROBE_IN_FLIGHT = "PROBE_IN_FLIGHT"
    STOPPED = "STOPPED"

    @property
    def accepts_ticks(self) -> bool:
        return self is not SchedulerState.STOPPED
