"""Tests for the Flask status dashboard."""

import json

import pytest

from logspace.dashboard import create_dashboard_app
from logspace.exporter import WriteResult
from logspace.manager import LogManager
from logspace.severity import Severity
from logspace.source import LocalEventSource


class StubWriter:
    def __init__(self, ok=True):
        self.ok = ok

    def write(self, name, content, destination):
        return WriteResult(ok=self.ok, path=f"{destination}/{name}", reason="" if self.ok else "read-only")


def _make_client(writer_ok=True):
    manager = LogManager(writer=StubWriter(writer_ok))
    manager.initialize(LocalEventSource(), categories={"Gameplay", "System"}, general_capacity=10)
    manager.write(Severity.INFO, "Gameplay", "hello")
    manager.write(Severity.INFO, "Other", "dropped")
    manager.write(Severity.ERROR, "System", "disk full", stack_trace="io.py:9")

    app = create_dashboard_app(manager)
    app.config["TESTING"] = True
    return app.test_client(), manager


@pytest.fixture
def client():
    return _make_client()[0]


class TestHealthEndpoint:
    def test_health_returns_ok(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        data = json.loads(resp.data)
        assert data["status"] == "ok"
        assert data["state"] == "active"


class TestStatsEndpoint:
    def test_stats(self, client):
        data = json.loads(client.get("/stats").data)
        assert data["error_count"] == 1
        assert data["general_count"] == 1
        assert data["general_capacity"] == 10
        assert data["minimum_level"] == "Info"
        assert data["categories"] == ["Gameplay", "System"]
        assert data["accepted"] == 2
        # "[LogManager] Initialized..." and "[Other] dropped"
        assert data["rejected"] == 2


class TestErrorsEndpoint:
    def test_recent_errors(self, client):
        data = json.loads(client.get("/errors?n=5").data)
        assert len(data["errors"]) == 1
        assert "[Error][System] disk full" in data["errors"][0]
        assert "io.py:9" in data["errors"][0]


class TestFlushEndpoint:
    def test_flush_success(self, client):
        resp = client.post("/flush")
        assert resp.status_code == 200
        data = json.loads(resp.data)
        assert data["ok"] is True
        assert data["path"].endswith(".txt")

    def test_flush_failure(self):
        client, manager = _make_client(writer_ok=False)
        resp = client.post("/flush")
        assert resp.status_code == 500
        assert json.loads(resp.data)["reason"] == "read-only"
        assert manager.snapshot_counts()[0] == 2

    def test_flush_requires_post(self, client):
        assert client.get("/flush").status_code == 405
