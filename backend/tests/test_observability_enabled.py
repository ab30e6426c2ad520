from __future__ import annotations

import importlib
import os

import pytest
from fastapi.testclient import TestClient

from flowspeak.observability import client as client_module
from flowspeak.services.curriculum import YEAR_PROGRAM, get_catalog
from flowspeak.services.program_resolver import ProgramResolver
from flowspeak.services.progress_service import ProgressService, get_progress_service
from flowspeak.services.progress_store import ProgressStore
from flowspeak.services.storage.memory import MemoryStorage


class _DummyTrace:
    def __init__(self, name=None, metadata=None, **kwargs):
        self.name = name
        self.metadata = metadata or {}

    def update(self, metadata=None, **kwargs):
        if metadata:
            self.metadata = metadata

    def end(self):
        pass


class _DummyOpik:
    def __init__(self, *args, **kwargs):
        self.traces = []

    def trace(self, **kwargs):
        trace = _DummyTrace(name=kwargs.get("name"), metadata=kwargs.get("metadata"))
        self.traces.append(trace)
        return trace


@pytest.mark.skipif("OPIK_API_KEY" not in os.environ, reason="OPIK_API_KEY env var required for Opik tests")
def test_app_runs_with_opik_enabled(monkeypatch):
    api_key = os.environ["OPIK_API_KEY"]
    monkeypatch.setenv("OPIK_ENABLED", "true")
    monkeypatch.setenv("OPIK_PROJECT", "flowspeak-test")
    monkeypatch.setenv("OPIK_API_KEY", api_key)

    import flowspeak.core.config as config_module
    import flowspeak.main as main_module

    importlib.reload(config_module)
    importlib.reload(client_module)
    monkeypatch.setattr(client_module, "Opik", _DummyOpik)
    client_module.reset_opik_client()
    reloaded_main = importlib.reload(main_module)

    service = ProgressService(
        ProgressStore(MemoryStorage(), storage_key="@opik_progress"),
        ProgramResolver(YEAR_PROGRAM, get_catalog()),
    )
    reloaded_main.app.dependency_overrides[get_progress_service] = lambda: service

    with TestClient(reloaded_main.app) as test_client:
        assert test_client.get("/health").status_code == 200
        resp = test_client.post("/mood", json={"mood": "good", "note": "Testing the opik path."})
        assert resp.status_code == 200

    reloaded_main.app.dependency_overrides.clear()

    monkeypatch.setenv("OPIK_ENABLED", "false")
    importlib.reload(config_module)
    importlib.reload(client_module)
    client_module.reset_opik_client()
    importlib.reload(main_module)
