from uptime_monitor.use_cases.monitor.get_current_state_use_case import GetCurrentStateUseCase
from uptime_monitor.use_cases.monitor.record_check_use_case import RecordCheckUseCase

__all__ = [
    "GetCurrentStateUseCase",
    "RecordCheckUseCase",
]
