import uptime_monitor.use_cases.monitor as monitor_use_cases


def test_monitor_use_case_exports() -> None:
    assert "RecordCheckUseCase" in monitor_use_cases.__all__
    assert monitor_use_cases.GetCurrentStateUseCase is not None
