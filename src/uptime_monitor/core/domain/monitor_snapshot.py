from dataclasses import dataclass

from uptime_monitor.core.domain.day_bucket import DayBucket


@dataclass(frozen=True)
class MonitorSnapshot:
    active: DayBucket
    history: tuple[DayBucket, ...] = ()

    @property
    def days(self) -> list[DayBucket]:
        return [self.active, *self.history]
