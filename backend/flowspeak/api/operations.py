"""Shared route plumbing: tracing, metrics and core error translation."""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

from fastapi import HTTPException, Request, status

from flowspeak.core.errors import FlowSpeakError, LoadFailure, SaveFailure
from flowspeak.observability.metrics import timed_operation
from flowspeak.observability.tracing import trace

logger = logging.getLogger(__name__)


def request_id_for(http_request: Request) -> str:
    return getattr(http_request.state, "request_id", None) or ""


@contextmanager
def core_operation(name: str, metadata: Optional[Dict[str, Any]] = None) -> Iterator[Dict[str, Any]]:
    """
    Run a service call inside an Opik trace with success/latency metrics.

    Store failures become 503 responses carrying the error text.
    """
    try:
        with trace(name, metadata=metadata), timed_operation(name, metadata) as extra:
            yield extra
    except (LoadFailure, SaveFailure) as exc:
        logger.warning("%s failed: %s", name, exc)
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    except FlowSpeakError as exc:
        logger.warning("%s failed: %s", name, exc)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc
