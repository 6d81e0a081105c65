from __future__ import annotations

from safepermit.core.metrics import SubmissionMetrics


def test_stopped_metrics_ignore_records() -> None:
    metrics = SubmissionMetrics()
    metrics.increment("submission.committed")
    metrics.observe("submission", 0.2)

    snapshot = metrics.snapshot()
    assert snapshot["running"] is False
    assert snapshot["counters"] == {}
    assert snapshot["durations"] == {}


def test_running_metrics_record_and_stop_clears() -> None:
    metrics = SubmissionMetrics(window=2)
    metrics.start()
    metrics.increment("submission.committed")
    metrics.increment("submission.committed", 2)
    for seconds in (0.1, 0.2, 0.4):
        metrics.observe("submission", seconds)

    snapshot = metrics.snapshot()
    assert snapshot["running"] is True
    assert snapshot["counters"]["submission.committed"] == 3
    assert snapshot["durations"]["submission"]["count"] == 2
    assert snapshot["durations"]["submission"]["max_ms"] == 400.0

    metrics.stop()
    assert metrics.snapshot()["counters"] == {}
