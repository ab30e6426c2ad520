"""Lightweight metrics helpers."""
from __future__ import annotations

import logging
from contextlib import contextmanager
from time import perf_counter
from typing import Any, Dict, Iterator, Optional

from flowspeak.observability import tracing

logger = logging.getLogger(__name__)


def log_metric(name: str, value: float | int, metadata: Optional[Dict[str, Any]] = None) -> None:
    """Record a metric as a short-lived Opik trace when tracing is enabled."""
    client = tracing.get_opik_client()
    if not client:
        return

    payload: Dict[str, Any] = {"value": value}
    if metadata:
        payload.update(metadata)

    try:
        metric_trace = client.trace(name=f"metric:{name}", metadata=payload)
        metric_trace.end()
    except Exception as exc:  # pragma: no cover - remote client failure
        logger.debug("Unable to record metric %s: %s", name, exc)


@contextmanager
def timed_operation(name: str, metadata: Optional[Dict[str, Any]] = None) -> Iterator[Dict[str, Any]]:
    """
    Emit `<name>.success` and `<name>.latency_ms` metrics around a block.

    The yielded dict may be filled by the caller with extra metadata. Failures
    emit `<name>.failure` and re-raise.
    """
    extra: Dict[str, Any] = dict(metadata or {})
    started = perf_counter()
    try:
        yield extra
    except Exception:
        log_metric(f"{name}.failure", 1, metadata=extra)
        raise
    latency_ms = (perf_counter() - started) * 1000
    log_metric(f"{name}.success", 1, metadata=extra)
    log_metric(f"{name}.latency_ms", latency_ms, metadata=extra)
