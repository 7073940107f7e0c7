"""
End-to-end HTTP flows through the FastAPI app.
"""

from fastapi.testclient import TestClient


def _create_team(client: TestClient, captain_id: int, name: str, zone_id: int = 7) -> dict:
    response = client.post("/api/teams", json={"captain_id": captain_id, "name": name, "zone_id": zone_id})
    assert response.status_code == 201, response.text
    return response.json()


def test_health(client: TestClient):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_team_endpoints(client: TestClient):
    team = _create_team(client, 1, "Lions")
    assert team["status"] == "DRAFT"

    assert client.get("/api/teams/name-check", params={"name": "Lions", "zone_id": 7}).json()["taken"] is True

    duplicate = client.post("/api/teams", json={"captain_id": 2, "name": "Lions", "zone_id": 7})
    assert duplicate.status_code == 422
    assert duplicate.json()["detail"].startswith("DUPLICATE_TEAM_NAME")

    joined = client.post(f"/api/teams/{team['id']}/members", json={"user_id": 5, "jersey_number": 7})
    assert joined.status_code == 201
    roster = client.get(f"/api/teams/{team['id']}/roster").json()
    assert [m["user_id"] for m in roster] == [1, 5]

    assert client.delete(f"/api/teams/{team['id']}/members/5").status_code == 204
    assert client.delete(f"/api/teams/{team['id']}/members/1").status_code == 422
    assert client.get("/api/teams/9999").status_code == 404


def test_match_submit_and_confirm_flow(client: TestClient):
    lions = _create_team(client, 1, "Lions")
    tigers = _create_team(client, 2, "Tigers")

    submit = client.post(
        "/api/matches",
        json={
            "creator_id": 1,
            "team_a_id": lions["id"],
            "team_b_id": tigers["id"],
            "score_a": 3,
            "score_b": 2,
            "lineup": [1, 11, 12, 13, 14],
            "scorers": [11, 12, 12],
        },
    )
    assert submit.status_code == 201, submit.text
    body = submit.json()
    assert body["status"] == "PENDING_VERIFICATION"
    assert body["lineup_written"] == 5
    assert body["events_written"] == 3
    match_id = body["match_id"]

    pending = client.get("/api/matches/pending", params={"user_id": 2}).json()
    assert [m["id"] for m in pending] == [match_id]

    assert client.post(f"/api/matches/{match_id}/confirm", json={"verifier_id": 1}).status_code == 403

    confirmed = client.post(f"/api/matches/{match_id}/confirm", json={"verifier_id": 2})
    assert confirmed.status_code == 200
    assert confirmed.json()["status"] == "CONFIRMED"

    again = client.post(f"/api/matches/{match_id}/reject", json={"verifier_id": 2})
    assert again.status_code == 409
    assert again.json()["detail"].startswith("MATCH_ALREADY_RESOLVED")

    detail = client.get(f"/api/matches/{match_id}").json()
    assert detail["status"] == "CONFIRMED"
    assert [v["action"] for v in detail["verifications"]] == ["CONFIRM"]

    recent = client.get("/api/matches/recent").json()
    assert [m["id"] for m in recent] == [match_id]

    inbox = client.get("/api/users/1/notifications").json()
    assert [n["notification_type"] for n in inbox] == ["MATCH_CONFIRMED"]


def test_cooldown_blocks_second_submit(client: TestClient):
    lions = _create_team(client, 1, "Lions")
    tigers = _create_team(client, 2, "Tigers")
    payload = {"creator_id": 1, "team_a_id": lions["id"], "team_b_id": tigers["id"], "score_a": 1, "score_b": 0}

    assert client.post("/api/matches", json=payload).status_code == 201

    blocked = client.post("/api/matches", json=payload)
    assert blocked.status_code == 422
    assert blocked.json()["detail"].startswith("COOLDOWN_ACTIVE")

    constraints = client.get(f"/api/teams/{lions['id']}/constraints").json()
    assert constraints["ok"] is False
    assert [f["code"] for f in constraints["failures"]] == ["COOLDOWN_ACTIVE"]


def test_submit_checks_the_creators_own_team(client: TestClient):
    lions = _create_team(client, 1, "Lions")
    tigers = _create_team(client, 2, "Tigers")
    bears = _create_team(client, 3, "Bears")
    earlier = {"creator_id": 3, "team_a_id": tigers["id"], "team_b_id": bears["id"], "score_a": 0, "score_b": 2}
    assert client.post("/api/matches", json=earlier).status_code == 201

    payload = {"team_a_id": lions["id"], "team_b_id": tigers["id"], "score_a": 1, "score_b": 1}

    from_tigers = client.post("/api/matches", json={**payload, "creator_id": 2})
    assert from_tigers.status_code == 422
    assert from_tigers.json()["detail"].startswith("COOLDOWN_ACTIVE")

    stranger = client.post("/api/matches", json={**payload, "creator_id": 99})
    assert stranger.status_code == 403
    assert stranger.json()["detail"].startswith("NOT_A_CAPTAIN")

    from_lions = client.post("/api/matches", json={**payload, "creator_id": 1})
    assert from_lions.status_code == 201, from_lions.text
    pending = client.get("/api/matches/pending", params={"user_id": 2}).json()
    assert from_lions.json()["match_id"] in [m["id"] for m in pending]


def test_unknown_match(client: TestClient):
    assert client.get("/api/matches/12345").status_code == 404
    assert client.post("/api/matches/12345/confirm", json={"verifier_id": 2}).status_code == 404


def test_operations_flow(client: TestClient):
    posted = client.post(
        "/api/operations/requests",
        json={
            "requester_id": 1,
            "zone_id": 7,
            "detail": {
                "type": "WANTED_JOKER",
                "match_time": "2026-03-20T19:30:00",
                "venue_name": "Riverside 5s",
                "position": "def",
            },
        },
    )
    assert posted.status_code == 201, posted.text
    request = posted.json()
    assert request["status"] == "OPEN"
    assert request["details"]["position"] == "DEF"

    feed = client.get("/api/zones/7/operations").json()
    assert [r["id"] for r in feed] == [request["id"]]

    assert client.post(f"/api/operations/requests/{request['id']}/accept", json={"responder_id": 1}).status_code == 400

    accepted = client.post(f"/api/operations/requests/{request['id']}/accept", json={"responder_id": 2})
    assert accepted.status_code == 200
    assert accepted.json()["responder_id"] == 2

    late = client.post(f"/api/operations/requests/{request['id']}/accept", json={"responder_id": 3})
    assert late.status_code == 409
    assert late.json()["detail"].startswith("ALREADY_LOCKED")

    assert client.get("/api/zones/7/operations").json() == []


def test_operations_rejects_bad_variant(client: TestClient):
    missing_time = client.post(
        "/api/operations/requests",
        json={"requester_id": 1, "zone_id": 7, "detail": {"type": "WANTED_REF", "venue_name": "Riverside 5s"}},
    )
    assert missing_time.status_code == 422

    unknown_type = client.post(
        "/api/operations/requests",
        json={"requester_id": 1, "zone_id": 7, "detail": {"type": "WANTED_COACH"}},
    )
    assert unknown_type.status_code == 422


def test_duplicate_availability(client: TestClient):
    body = {"requester_id": 5, "zone_id": 7, "detail": {"type": "I_AM_AVAILABLE", "position": "GK"}}
    assert client.post("/api/operations/requests", json=body).status_code == 201

    second = client.post("/api/operations/requests", json=body)
    assert second.status_code == 422
    assert second.json()["detail"].startswith("DUPLICATE_AVAILABILITY")


def test_tournament_flow(client: TestClient):
    created = client.post(
        "/api/tournaments",
        json={"organizer_id": 500, "name": "Spring Cup", "config": {"bracket_type": "GROUPS", "max_teams": 8}},
    )
    assert created.status_code == 201, created.text
    tournament_id = created.json()["id"]

    too_early = client.post(f"/api/tournaments/{tournament_id}/start", json={"organizer_id": 500})
    assert too_early.status_code == 422
    assert too_early.json()["detail"].startswith("INSUFFICIENT_ENTRANTS")

    for i in range(6):
        team = _create_team(client, 100 + i, f"Team {i}")
        entry = client.post(f"/api/tournaments/{tournament_id}/entries", json={"team_id": team["id"]})
        assert entry.status_code == 201

    assert client.post(f"/api/tournaments/{tournament_id}/start", json={"organizer_id": 1}).status_code == 403

    started = client.post(f"/api/tournaments/{tournament_id}/start", json={"organizer_id": 500})
    assert started.status_code == 200
    sizes = started.json()["group_sizes"]
    assert sorted(sizes.values()) == [1, 1, 2, 2]

    again = client.post(f"/api/tournaments/{tournament_id}/start", json={"organizer_id": 500})
    assert again.status_code == 409

    standings = client.get(f"/api/tournaments/{tournament_id}/standings").json()
    assert sorted(standings) == ["A", "B", "C", "D"]
    assert sum(len(group) for group in standings.values()) == 6

    mine = client.get("/api/tournaments", params={"scope": "MY", "user_id": 500}).json()
    assert [t["id"] for t in mine] == [tournament_id]
    assert client.get(f"/api/tournaments/{tournament_id}").json()["status"] == "ACTIVE"


def test_tournament_config_validation(client: TestClient):
    response = client.post(
        "/api/tournaments", json={"organizer_id": 500, "name": "Odd Cup", "config": {"max_teams": 10}}
    )
    assert response.status_code == 422
