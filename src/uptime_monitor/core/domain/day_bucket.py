from dataclasses import dataclass, field, replace
from datetime import date, datetime

from uptime_monitor.core.domain.result_record import ResultRecord
from uptime_monitor.core.domain.summary import Summary, summarize


@dataclass(frozen=True)
class DayBucket:
    day_key: date
    started_at: datetime

    log: tuple[ResultRecord, ...] = ()
    summary: Summary = field(default_factory=lambda: summarize(()))

    @classmethod
    def open(cls, day_key: date, started_at: datetime) -> "DayBucket":
        return cls(day_key=day_key, started_at=started_at)

    def append(self, result: ResultRecord) -> "DayBucket":
        log = self.log + (result,)

        return replace(self, log=log, summary=summarize(log))
