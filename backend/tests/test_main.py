from fastapi.testclient import TestClient

from app.main import app
from models import Player
from routes.deps import get_matchmaker
from services.matchmaker import Matchmaker
from services.player_token import create_player_token
from services.registry import SessionRegistry

SECRET = "test-secret-for-websockets"


def test_health() -> None:
    client = TestClient(app)
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_private_notice_reaches_player_socket(monkeypatch) -> None:
    monkeypatch.setenv("PLAYER_TOKEN_SECRET", SECRET)
    app.dependency_overrides[get_matchmaker] = lambda: Matchmaker(registry=SessionRegistry(), sessions={})
    token = create_player_token(SECRET, Player(id=5, name="eve"))
    try:
        with TestClient(app) as client:
            with client.websocket_connect(f"/ws/players/updates?token={token}") as ws:
                assert ws.receive_json() == {"type": "subscribed", "channel": "player:5"}
                response = client.post(
                    "/api/challenges",
                    json={"opponent": {"id": 5}},
                    headers={"Authorization": f"Bearer {token}"},
                )
                assert response.status_code == 400
                notice = ws.receive_json()
    finally:
        app.dependency_overrides.pop(get_matchmaker, None)

    assert notice["type"] == "invalid_opponent"
    assert notice["ephemeral"] is True
    assert notice["title"] == "Failure!"


def test_player_socket_rejects_bad_token(monkeypatch) -> None:
    monkeypatch.setenv("PLAYER_TOKEN_SECRET", SECRET)
    with TestClient(app) as client:
        with client.websocket_connect("/ws/players/updates?token=garbage") as ws:
            frame = ws.receive_json()
    assert frame == {"type": "error", "detail": "Invalid player token"}


def test_public_updates_reach_session_socket(monkeypatch) -> None:
    monkeypatch.setenv("PLAYER_TOKEN_SECRET", SECRET)
    registry = SessionRegistry()
    mm = Matchmaker(registry=registry, sessions={})
    app.dependency_overrides[get_matchmaker] = lambda: mm
    alice = {"Authorization": f"Bearer {create_player_token(SECRET, Player(id=6))}"}
    bob = {"Authorization": f"Bearer {create_player_token(SECRET, Player(id=7))}"}
    try:
        with TestClient(app) as client:
            created = client.post("/api/challenges", json={"opponent": {"id": 7}}, headers=alice)
            assert created.status_code == 201
            session_id = created.json()["session_id"]
            with client.websocket_connect(f"/ws/sessions/{session_id}/updates") as ws:
                assert ws.receive_json()["type"] == "subscribed"
                clicked = client.post(
                    f"/api/sessions/{session_id}/interactions",
                    json={"custom_id": "deny"},
                    headers=bob,
                )
                assert clicked.status_code == 202
                update = ws.receive_json()
    finally:
        app.dependency_overrides.pop(get_matchmaker, None)

    assert update["type"] == "declined"
    assert update["mention"] == "<@6>"
    assert len(registry) == 0
