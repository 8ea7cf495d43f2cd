"""WebSocket integration tests for real-time play."""

from __future__ import annotations

import json

import pytest
from starlette.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from snake_arena.server.app import create_app


@pytest.fixture()
def tc():
    """Starlette TestClient kept open so tick drivers share one event loop."""
    with TestClient(create_app()) as client:
        yield client


def _create_session(tc, move_interval_ms=20):
    resp = tc.post(
        "/sessions",
        json={"move_interval_ms": move_interval_ms, "food_interval_ms": 10000},
    )
    assert resp.status_code == 201
    return resp.json()["session_id"]


class TestPlayWebSocket:
    def test_connect_and_receive_initial_state(self, tc):
        session_id = _create_session(tc, move_interval_ms=5000)

        with tc.websocket_connect(f"/sessions/{session_id}/play") as ws:
            msg = json.loads(ws.receive_text())
            assert msg["tick"] == 0
            assert msg["events"] == []
            assert msg["state"]["snake"]["segments"] == [[3, 3], [3, 2]]

    def test_receives_ticks(self, tc):
        session_id = _create_session(tc)

        with tc.websocket_connect(f"/sessions/{session_id}/play") as ws:
            ws.receive_text()
            ticks = [json.loads(ws.receive_text())["tick"] for _ in range(3)]
        assert ticks == sorted(ticks)
        assert ticks[0] >= 1

    def test_direction_steers_snake(self, tc):
        session_id = _create_session(tc)

        with tc.websocket_connect(f"/sessions/{session_id}/play") as ws:
            ws.receive_text()
            ws.send_text(json.dumps({"direction": "right"}))
            headings = [
                json.loads(ws.receive_text())["state"]["snake"]["heading"]
                for _ in range(4)
            ]
        assert "right" in headings

    def test_game_over_event_streamed(self, tc):
        session_id = _create_session(tc)

        with tc.websocket_connect(f"/sessions/{session_id}/play") as ws:
            ws.receive_text()
            # The default snake runs up into the top wall on tick 7.
            for _ in range(7):
                msg = json.loads(ws.receive_text())
                if msg["events"]:
                    break
        assert msg["events"][0]["type"] == "game_over"
        assert msg["events"][0]["kind"] == "wall"
        assert msg["state"]["snake"]["segments"] == [[3, 3], [3, 2]]

    def test_invalid_messages_ignored(self, tc):
        session_id = _create_session(tc, move_interval_ms=5000)

        with tc.websocket_connect(f"/sessions/{session_id}/play") as ws:
            ws.receive_text()
            ws.send_text("not-json")
            ws.send_text("[]")
            ws.send_text(json.dumps({"direction": 5}))
            ws.send_text(json.dumps({"direction": "invalid_dir"}))
            ws.send_text(json.dumps({"no_direction_key": True}))

        resp = tc.get(f"/sessions/{session_id}")
        assert resp.status_code == 200

    def test_nonexistent_session_rejected(self, tc):
        with pytest.raises(WebSocketDisconnect), tc.websocket_connect(
            "/sessions/nonexistent/play",
        ):
            pass
