from enum import Enum


class MonitorEvent(str, Enum):
    CURRENT_STATE = "currentState"
    NEW_CHECK = "newCheck"
    SUMMARY_UPDATE = "summaryUpdate"
    DAILY_SUMMARY_UPDATE = "dailySummaryUpdate"
