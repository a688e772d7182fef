from __future__ import annotations

from fastapi.testclient import TestClient

from gtodrill.web.app import app


def test_web_endpoints_session_flow():
    client = TestClient(app)
    r = client.get("/healthz")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}

    r = client.get("/")
    assert r.status_code == 200
    assert "gtodrill" in r.text
    assert "card poker-card placeholder" in r.text
    assert 'id="game-mode"' in r.text

    base = "/api/v1/session"
    r = client.post(base, json={"mode": "training", "game_mode": "turn_river", "players": 3, "seed": 21})
    assert r.status_code == 200
    sid = r.json()["session"]

    # Guess the first allowed action on every street through the river.
    streets = []
    while True:
        view = client.get(f"{base}/{sid}").json()
        streets.append(view["street"])
        assert len(view["hand"]["cards"]) == 2
        action = view["allowed_guesses"][0]
        r = client.post(f"{base}/{sid}/guess", json={"action": action})
        assert r.status_code == 200
        assert r.json()["view"]["revealed"] is True
        if not view.get("next_street"):
            break
        r = client.post(f"{base}/{sid}/street")
        assert r.status_code == 200
        assert len(streets) < 5

    assert streets == ["preflop", "flop", "turn", "river"]

    summary = client.get(f"{base}/{sid}/summary").json()
    assert summary["decisions"] == 4
    assert summary["hands"] == 1
    assert set(summary["by_street"]) == {"preflop", "flop", "turn", "river"}


def test_hx_requests_receive_html_fragments():
    client = TestClient(app)
    headers = {"HX-Request": "true"}

    r = client.post("/api/v1/session", json={"game_mode": "postflop"}, headers=headers)
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/html")
    assert "hx-view" in r.text
    assert "data-strategy" in r.text
