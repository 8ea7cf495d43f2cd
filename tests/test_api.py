"""REST API endpoint tests."""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from snake_arena.server.app import create_app
from snake_arena.server.session_manager import SessionManager

BASE = "http://test"

# Slow cadence so no tick fires while a test runs.
_IDLE = {"move_interval_ms": 5000, "food_interval_ms": 10000}


@pytest.fixture()
async def app():
    application = create_app()
    application.state.session_manager = SessionManager()
    yield application
    await application.state.session_manager.cleanup()


@pytest.fixture()
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url=BASE) as c:
        yield c


async def _create(client, **overrides) -> str:
    resp = await client.post("/sessions", json={**_IDLE, **overrides})
    assert resp.status_code == 201
    return resp.json()["session_id"]


class TestCreateSession:
    async def test_create_default(self, client):
        resp = await client.post("/sessions", json={})
        assert resp.status_code == 201
        data = resp.json()
        assert data["tick"] == 0
        assert data["arena_width"] == 10
        assert data["move_interval_ms"] == 500
        assert data["running"] is True
        assert "session_id" in data

    async def test_create_custom(self, client):
        resp = await client.post(
            "/sessions",
            json={**_IDLE, "arena_width": 20, "arena_height": 15, "seed": 3},
        )
        assert resp.status_code == 201
        data = resp.json()
        assert data["arena_width"] == 20
        assert data["arena_height"] == 15
        assert data["move_interval_ms"] == 5000

    async def test_create_invalid_arena(self, client):
        resp = await client.post("/sessions", json={"arena_width": 3})
        assert resp.status_code == 422

    async def test_session_limit(self, app, client):
        app.state.session_manager = SessionManager(max_sessions=1)
        await _create(client)
        resp = await client.post("/sessions", json=_IDLE)
        assert resp.status_code == 422
        assert "limit" in resp.json()["detail"]
        await app.state.session_manager.cleanup()


class TestListAndGet:
    async def test_list_empty(self, client):
        resp = await client.get("/sessions")
        assert resp.status_code == 200
        assert resp.json() == []

    async def test_list_after_create(self, client):
        session_id = await _create(client)
        resp = await client.get("/sessions")
        assert [s["session_id"] for s in resp.json()] == [session_id]

    async def test_get_existing(self, client):
        session_id = await _create(client)
        resp = await client.get(f"/sessions/{session_id}")
        assert resp.status_code == 200
        data = resp.json()
        assert data["session_id"] == session_id
        assert data["state"]["snake"]["segments"] == [[3, 3], [3, 2]]
        assert data["state"]["state"] == "running"

    async def test_get_not_found(self, client):
        resp = await client.get("/sessions/nonexistent")
        assert resp.status_code == 404


class TestDirection:
    async def test_set_direction(self, app, client):
        session_id = await _create(client)
        resp = await client.post(
            f"/sessions/{session_id}/direction", json={"direction": "left"},
        )
        assert resp.status_code == 200
        assert resp.json()["direction"] == "left"

        engine = app.state.session_manager.get_session(session_id).engine
        engine.advance()
        assert engine.snake.head == (2, 3)

    async def test_release_direction(self, client):
        session_id = await _create(client)
        resp = await client.post(
            f"/sessions/{session_id}/direction", json={"direction": None},
        )
        assert resp.status_code == 200
        assert resp.json()["direction"] is None

    async def test_invalid_direction(self, client):
        session_id = await _create(client)
        resp = await client.post(
            f"/sessions/{session_id}/direction", json={"direction": "north"},
        )
        assert resp.status_code == 422

    async def test_direction_not_found(self, client):
        resp = await client.post(
            "/sessions/nonexistent/direction", json={"direction": "up"},
        )
        assert resp.status_code == 404


class TestDeleteSession:
    async def test_delete(self, app, client):
        session_id = await _create(client)
        driver = app.state.session_manager.get_session(session_id).driver
        resp = await client.delete(f"/sessions/{session_id}")
        assert resp.status_code == 204
        assert not driver.running
        resp = await client.get(f"/sessions/{session_id}")
        assert resp.status_code == 404

    async def test_delete_not_found(self, client):
        resp = await client.delete("/sessions/nonexistent")
        assert resp.status_code == 404
