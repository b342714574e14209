"""Tests for the HTTP API."""

import base64

import pytest
from fastapi.testclient import TestClient

from stream_archive.api import create_fastapi_app
from stream_archive.app import Application
from stream_archive.config import ArchiverOptions


def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


@pytest.fixture
def client():
    """TestClient around an in-memory application."""
    application = Application(
        db_path=":memory:",
        room_num="123456",
        room_id="room-1",
        options=ArchiverOptions(enabled=True, max_messages=3, include_decoded=True),
        sink_kind="sqlite",
    )
    with TestClient(create_fastapi_app(application)) as test_client:
        yield test_client


def _capture(client, method="WebcastChatMessage", msg_id="m1", payload=b"\x00\x01"):
    return client.post(
        "/api/capture",
        json={
            "method": method,
            "msg_id": msg_id,
            "payload": _b64(payload),
            "decoded": {"content": "hi", "junk": 1},
            "display_id": "user_001",
        },
    )


class TestCaptureRoute:
    """Tests for POST /api/capture."""

    def test_capture(self, client):
        """Test capturing one frame."""
        response = _capture(client)

        assert response.status_code == 200
        assert response.json() == {"captured": True, "message_count": 1}

    def test_invalid_payload(self, client):
        """Test that bad base64 is a 400."""
        response = client.post(
            "/api/capture",
            json={"method": "A", "msg_id": "m1", "payload": "not base64!"},
        )
        assert response.status_code == 400

    def test_capture_when_disabled(self, client):
        """Test capture after /disable."""
        client.post("/api/control/disable")
        response = _capture(client)
        assert response.json() == {"captured": False, "message_count": 0}


class TestControlRoutes:
    """Tests for /api/control."""

    def test_export(self, client):
        """Test manual export."""
        _capture(client, msg_id="m1")
        _capture(client, msg_id="m2")

        response = client.post("/api/control/export")

        assert response.json() == {"status": "ok", "message_count": 2}
        assert client.get("/api/stats").json()["message_count"] == 0

    def test_clear(self, client):
        """Test /clear."""
        _capture(client)
        assert client.post("/api/control/clear").json() == {"status": "ok"}
        assert client.get("/api/stats").json()["message_count"] == 0

    def test_sim_not_configured(self, client):
        """Test SIM routes without a SIM."""
        assert client.post("/api/control/sim/start").status_code == 404


class TestObservabilityRoutes:
    """Tests for /api observability routes."""

    def test_stats(self, client):
        """Test /stats."""
        _capture(client)
        stats = client.get("/api/stats").json()

        assert stats["enabled"] is True
        assert stats["message_count"] == 1
        assert stats["estimated_size"] > 0

    def test_archives_and_analysis(self, client):
        """Test that threshold exports can be listed and analyzed."""
        _capture(client, method="A", msg_id="m1")
        _capture(client, method="B", msg_id="m2")
        _capture(client, method="A", msg_id="m3")

        archives = client.get("/api/archives").json()
        assert len(archives) == 1
        assert archives[0]["message_count"] == 3

        analysis = client.get(f"/api/archives/{archives[0]['name']}/analysis").json()
        assert analysis["total_messages"] == 3
        assert analysis["distribution"] == [["A", 2], ["B", 1]]

    def test_analysis_unknown_archive(self, client):
        """Test 404 for unknown archives."""
        assert client.get("/api/archives/missing.json/analysis").status_code == 404

    def test_trace_events(self, client):
        """Test /trace-events filtering."""
        client.post("/api/control/clear")
        events = client.get(
            "/api/trace-events", params={"event_type": "archive_cleared"}
        ).json()
        assert len(events) == 1
        assert events[0]["actor"] == "archive_store"

    def test_trace_events_bad_after(self, client):
        """Test 400 on bad timestamps."""
        response = client.get("/api/trace-events", params={"after": "yesterday"})
        assert response.status_code == 400

    def test_trace_events_after_without_offset(self, client):
        """Test that a naive after timestamp is read as UTC."""
        client.post("/api/control/clear")
        response = client.get(
            "/api/trace-events", params={"after": "2020-01-01T00:00:00"}
        )
        assert response.status_code == 200
        assert any(e["event_type"] == "archive_cleared" for e in response.json())

        later = client.get(
            "/api/trace-events", params={"after": "2999-01-01T00:00:00"}
        )
        assert later.status_code == 200
        assert later.json() == []

    def test_debugger_stats(self, client):
        """Test /debugger/stats."""
        _capture(client, method="A")
        stats = client.get("/api/debugger/stats").json()
        assert stats == [
            {"method": "A", "count": 1, "last_seen": stats[0]["last_seen"], "processed": True}
        ]
