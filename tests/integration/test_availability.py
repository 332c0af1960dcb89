from datetime import time, timedelta

import pytest

from db.models import Game
from utils.dates import league_today


@pytest.fixture
def upcoming(season, home_team, away_team):
    return Game.create(
        season=season, home_team=home_team, away_team=away_team,
        game_date=league_today() + timedelta(days=7), game_time=time(18, 30),
    )


def url(game):
    return f"/api/games/{game.id}/availability"


class TestSetAvailability:

    def test_player_responds(self, client, upcoming, home_team, make_player, auth_headers):
        player = make_player(home_team)
        response = client.put(url(upcoming), json={"status": "tentative", "note": "Late from work"}, headers=auth_headers(player.user))

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["playerId"] == player.id
        assert data["status"] == "tentative"

    def test_no_response_is_not_settable(self, client, upcoming, home_team, make_player, auth_headers):
        player = make_player(home_team)
        response = client.put(url(upcoming), json={"status": "no_response"}, headers=auth_headers(player.user))
        assert response.status_code == 422

    def test_must_be_playing(self, client, upcoming, make_user, auth_headers):
        response = client.put(url(upcoming), json={"status": "available"}, headers=auth_headers(make_user("player")))

        assert response.status_code == 403
        assert response.json()["error"]["message"] == "You must be on a team playing in this game to set availability"

    def test_closed_game(self, client, upcoming, home_team, make_player, auth_headers):
        upcoming.status = "cancelled"
        upcoming.save()
        player = make_player(home_team)

        response = client.put(url(upcoming), json={"status": "available"}, headers=auth_headers(player.user))
        assert response.status_code == 400


class TestTeamAvailability:

    def test_summary_counts(self, client, upcoming, home_team, make_player, manager, auth_headers):
        coming, unsure = make_player(home_team, jersey="1"), make_player(home_team, jersey="2")
        make_player(home_team, jersey="3")
        client.put(url(upcoming), json={"status": "available"}, headers=auth_headers(coming.user))
        client.put(url(upcoming), json={"status": "tentative"}, headers=auth_headers(unsure.user))

        data = client.get(url(upcoming), headers=auth_headers(manager)).json()["data"]
        assert data["teamId"] == home_team.id
        assert data["summary"] == {"available": 1, "unavailable": 0, "tentative": 1, "no_response": 1}
        assert len(data["players"]) == 3

    def test_other_team_is_hidden(self, client, upcoming, away_team, make_player, auth_headers):
        opponent = make_player(away_team)
        response = client.get(url(upcoming), params={"teamId": upcoming.home_team_id}, headers=auth_headers(opponent.user))
        assert response.status_code == 403

    def test_admin_must_pick_team(self, client, upcoming, admin, auth_headers):
        response = client.get(url(upcoming), headers=auth_headers(admin))

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "teamId is required"


def test_my_upcoming_games(client, upcoming, game, home_team, make_player, auth_headers):
    game.game_date = league_today() - timedelta(days=1)
    game.save()
    player = make_player(home_team)
    client.put(url(upcoming), json={"status": "available"}, headers=auth_headers(player.user))

    data = client.get("/api/users/me/availability", headers=auth_headers(player.user)).json()["data"]
    assert [g["gameId"] for g in data] == [upcoming.id]
    assert data[0]["availabilityStatus"] == "available"
    assert data[0]["isHome"] is True
    assert data[0]["opponent"]["abbreviation"] == "PIR"
