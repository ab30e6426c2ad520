"""Tests for metrics helpers."""
from __future__ import annotations

from typing import Any, Dict

import pytest

from flowspeak.observability import metrics
from flowspeak.observability import tracing


class _DummyTrace:
    def __init__(self, name: str, metadata: Dict[str, Any]):
        self.name = name
        self.metadata = metadata
        self.ended = False

    def end(self) -> None:
        self.ended = True


class _DummyClient:
    def __init__(self):
        self.traces: list[_DummyTrace] = []

    def trace(self, name: str, metadata: Dict[str, Any] | None = None):
        trace = _DummyTrace(name, metadata or {})
        self.traces.append(trace)
        return trace


def test_log_metric_closes_trace(monkeypatch) -> None:
    dummy_client = _DummyClient()
    monkeypatch.setattr(tracing, "get_opik_client", lambda: dummy_client)

    metrics.log_metric("demo_metric", 42, metadata={"foo": "bar"})

    assert dummy_client.traces, "Metric call should record a trace"
    assert dummy_client.traces[0].metadata["value"] == 42
    assert dummy_client.traces[0].metadata["foo"] == "bar"
    assert dummy_client.traces[0].ended is True


def test_log_metric_is_noop_without_client(monkeypatch) -> None:
    monkeypatch.setattr(tracing, "get_opik_client", lambda: None)

    metrics.log_metric("demo_metric", 1)


def test_timed_operation_emits_success_and_latency(monkeypatch) -> None:
    dummy_client = _DummyClient()
    monkeypatch.setattr(tracing, "get_opik_client", lambda: dummy_client)

    with metrics.timed_operation("progress.save", {"current_day": 3}) as extra:
        extra["bytes"] = 10

    names = [trace.name for trace in dummy_client.traces]
    assert names == ["metric:progress.save.success", "metric:progress.save.latency_ms"]
    assert dummy_client.traces[0].metadata == {"value": 1, "current_day": 3, "bytes": 10}
    assert dummy_client.traces[1].metadata["value"] >= 0


def test_timed_operation_reports_failure(monkeypatch) -> None:
    dummy_client = _DummyClient()
    monkeypatch.setattr(tracing, "get_opik_client", lambda: dummy_client)

    with pytest.raises(OSError):
        with metrics.timed_operation("progress.save"):
            raise OSError("disk full")

    assert [trace.name for trace in dummy_client.traces] == ["metric:progress.save.failure"]
