"""Opik SDK client helpers."""
from __future__ import annotations

import logging
from threading import Lock
from typing import Optional

from flowspeak.core.config import settings

try:
    from opik import Opik
except ImportError:  # pragma: no cover
    Opik = None  # type: ignore[assignment]

logger = logging.getLogger(__name__)

_client: Optional["Opik"] = None
_client_lock = Lock()
_init_attempted = False


def _disabled_reason() -> Optional[str]:
    if Opik is None:
        return "opik package not installed"
    if not settings.opik_enabled:
        return "OPIK_ENABLED is false"
    if not settings.opik_api_key:
        return "OPIK_API_KEY is missing"
    return None


def init_opik() -> Optional["Opik"]:
    """
    Create the process-wide Opik client on first use.

    Progress reads and writes never depend on Opik: when it is disabled or
    unreachable every trace and metric helper quietly does nothing.
    """
    global _client, _init_attempted

    with _client_lock:
        if _client is not None or _init_attempted:
            return _client
        _init_attempted = True

        reason = _disabled_reason()
        if reason:
            level = logging.WARNING if settings.opik_enabled else logging.DEBUG
            logger.log(level, "Opik tracing off (%s)", reason)
            return None

        try:
            _client = Opik(project_name=settings.opik_project, api_key=settings.opik_api_key)
        except Exception as exc:  # pragma: no cover - depends on remote service
            logger.warning("Failed to initialize Opik, tracing will be disabled: %s", exc)
            return None

    logger.info("Opik enabled (project=%s, storage=%s)", settings.opik_project, settings.storage_provider)
    return _client


def get_opik_client() -> Optional["Opik"]:
    """Return the cached Opik client if tracing is enabled."""
    if _client is not None:
        return _client
    return init_opik()


def reset_opik_client() -> None:
    """Forget the cached client so the next call re-reads settings."""
    global _client, _init_attempted
    with _client_lock:
        _client = None
        _init_attempted = False
