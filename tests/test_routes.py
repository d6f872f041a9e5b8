import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from polo_backend.core.database import get_session
from polo_backend.main import app


@pytest.fixture
def client(engine):
    def override_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = override_session
    yield TestClient(app)
    app.dependency_overrides.clear()


def _create(client, path, **payload):
    response = client.post(path, json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def _teams_with_match(client):
    blue = _create(client, "/teams/", name="Blue", grade="medium")
    red = _create(client, "/teams/", name="Red", grade="low")
    for first, handicap in (("Jack", 4.0), ("Sophie", 6.0)):
        player = _create(client, "/players/", first_name=first, last_name="Archer", handicap=handicap)
        assert client.post(f"/teams/{blue['id']}/players/{player['id']}").status_code == 200
    match = _create(
        client, "/matches/",
        team_a_id=blue["id"], team_b_id=red["id"],
        match_date="2024-10-05", start_time="2024-10-05T14:00:00", total_chukkers=4,
    )
    return blue, red, match


def test_crud_round(client):
    club = _create(client, "/clubs/", name="Windsor Park", location="Windsor")
    assert client.get(f"/clubs/{club['id']}").json()["name"] == "Windsor Park"

    updated = client.patch(f"/clubs/{club['id']}", json={"location": "Richmond"})
    assert updated.status_code == 200
    assert updated.json()["location"] == "Richmond"
    assert [c["id"] for c in client.get("/clubs/").json()] == [club["id"]]

    deleted = client.delete(f"/clubs/{club['id']}")
    assert deleted.status_code == 200
    assert deleted.json()["deleted"] == {"Club": 1}
    assert client.get(f"/clubs/{club['id']}").status_code == 404


def test_handicap_clamped_over_http(client):
    player = _create(client, "/players/", first_name="Adolfo", last_name="Cambiaso", handicap=12)
    assert player["handicap"] == 10.0


def test_validation_errors(client):
    assert client.post("/teams/", json={"name": "Blue", "grade": "legendary"}).status_code == 422
    team = _create(client, "/teams/", name="Blue", grade="low")
    response = client.post(
        "/matches/",
        json={"team_a_id": team["id"], "team_b_id": team["id"], "match_date": "2024-10-05", "start_time": "2024-10-05T14:00:00"},
    )
    assert response.status_code == 422
    assert response.json()["detail"]["entity_type"] == "Match"


def test_statistic_rows_have_no_update_route(client):
    assert client.patch("/player-statistics/00000000-0000-0000-0000-000000000000", json={}).status_code == 405


def test_live_match_flow(client):
    blue, red, match = _teams_with_match(client)
    base = f"/matches/{match['id']}"

    assert client.post(f"{base}/goal/a").status_code == 409
    state = client.post(f"{base}/start").json()
    assert state["status"] == "in_progress" and state["current_chukker"] == 1

    client.put(f"{base}/score", json={"team_a_score": 3, "team_b_score": 2})
    ended = client.post(f"{base}/chukkers/end").json()
    assert ended["snapshot"]["chukker_number"] == 1
    assert ended["match"]["current_chukker"] == 2
    client.post(f"{base}/goal/a")
    assert client.post(f"{base}/goal/x").status_code == 400

    final = client.post(f"{base}/complete").json()
    assert final["status"] == "completed"
    assert final["winner_id"] == blue["id"]
    assert client.post(f"{base}/start").status_code == 409
    assert [c["team_a_score"] for c in client.get(f"{base}/chukkers").json()] == [3]

    stats = client.get(f"/statistics/teams/{blue['id']}").json()
    assert stats["wins"] == 1 and stats["win_percentage"] == 100.0
    assert stats["total_handicap"] == 10.0
    assert stats["grade_allows_roster"] is True
    assert client.get(f"/statistics/teams/{red['id']}").json()["losses"] == 1


def test_match_lifecycle_fields_not_patchable(client):
    _, _, match = _teams_with_match(client)
    response = client.patch(f"/matches/{match['id']}", json={"total_chukkers": 6})
    assert response.status_code == 200
    assert client.patch(f"/matches/{match['id']}", json={"status": "completed"}).json()["status"] == "scheduled"


def test_postpone_and_reschedule_over_http(client):
    _, _, match = _teams_with_match(client)
    base = f"/matches/{match['id']}"
    assert client.post(f"{base}/postpone").json()["status"] == "postponed"
    response = client.post(f"{base}/reschedule", json={"match_date": "2024-10-12", "start_time": "2024-10-12T15:00:00"})
    assert response.json()["status"] == "scheduled"
    assert client.get(base).json()["match_date"] == "2024-10-12"


def test_roster_and_tournament_membership(client):
    blue, _, _ = _teams_with_match(client)
    roster = client.get(f"/teams/{blue['id']}/players").json()
    assert len(roster) == 2
    removed = client.delete(f"/teams/{blue['id']}/players/{roster[0]['id']}")
    assert removed.status_code == 200
    assert len(client.get(f"/teams/{blue['id']}/players").json()) == 1

    tournament = _create(client, "/tournaments/", name="Spring Cup", grade="medium", start_date="2024-10-01", end_date="2024-10-08")
    field = _create(client, "/fields/", name="Ground 1", grade="medium")
    club = _create(client, "/clubs/", name="Windsor Park")
    assert client.post(f"/tournaments/{tournament['id']}/fields/{field['id']}").status_code == 200
    assert client.post(f"/tournaments/{tournament['id']}/clubs/{club['id']}").status_code == 200

    summary = client.get(f"/statistics/tournaments/{tournament['id']}").json()
    assert summary["field_count"] == 1
    assert summary["duration_days"] == 7


def test_rankings_and_overview(client):
    _, _, match = _teams_with_match(client)
    players = client.get("/players/").json()
    for player, goals in zip(players, (1, 4)):
        _create(client, "/player-statistics/", player_id=player["id"], match_id=match["id"], goals=goals)

    top = client.get("/statistics/top-scorers", params={"limit": 5}).json()
    assert [row["total_goals"] for row in top] == [4, 1]
    assert top[0]["rank"] == 1

    career = client.get(f"/statistics/players/{players[1]['id']}").json()
    assert career["total_goals"] == 4 and career["total_matches"] == 1

    overview = client.get("/statistics/overview").json()
    assert overview["total_matches"] == 1 and overview["completed_matches"] == 0
    assert client.get("/statistics/most-active-horses").json() == []


def test_rule_violations_over_http_are_422(client):
    blue, red, match = _teams_with_match(client)
    base = f"/matches/{match['id']}"
    player = client.get("/players/").json()[0]
    row = {"player_id": player["id"], "match_id": match["id"], "goals": 1}
    _create(client, "/player-statistics/", **row)
    duplicate = client.post("/player-statistics/", json=row)
    assert duplicate.status_code == 422
    assert duplicate.json()["detail"]["entity_type"] == "PlayerStatistic"

    client.post(f"{base}/start")
    assert client.put(f"{base}/score", json={"team_a_score": -1, "team_b_score": 0}).status_code == 422
    client.post(f"{base}/complete")
    edit = client.patch(base, json={"team_b_id": blue["id"], "team_a_id": red["id"]})
    assert edit.status_code == 422
    assert client.get(base).json()["team_a_id"] == blue["id"]
