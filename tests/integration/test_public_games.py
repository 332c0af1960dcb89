from datetime import date, time

from db.models import Game, Team


def schedule(season, home, away, day, status="scheduled", **kwargs):
    return Game.create(season=season, home_team=home, away_team=away, game_date=day, game_time=time(18, 30),
                       status=status, **kwargs)


class TestGameList:

    def test_filters_and_pagination(self, client, season, home_team, away_team):
        schedule(season, home_team, away_team, date(2026, 6, 7), status="final", home_score=5, away_score=2)
        schedule(season, away_team, home_team, date(2026, 6, 14))
        schedule(season, home_team, away_team, date(2026, 6, 21))

        response = client.get("/api/games", params={"status": "scheduled", "startDate": "2026-06-10", "pageSize": 1})

        assert response.status_code == 200
        body = response.json()
        assert [g["gameDate"] for g in body["data"]] == ["2026-06-14"]
        assert body["data"][0]["homeTeam"]["abbreviation"] == "PIR"
        assert body["pagination"]["totalItems"] == 2
        assert body["pagination"]["hasNextPage"] is True

    def test_descending_sort(self, client, season, home_team, away_team):
        schedule(season, home_team, away_team, date(2026, 6, 7))
        schedule(season, home_team, away_team, date(2026, 6, 21))

        response = client.get("/api/games", params={"sortDir": "desc"})

        assert [g["gameDate"] for g in response.json()["data"]] == ["2026-06-21", "2026-06-07"]

    def test_team_filter_matches_either_side(self, client, season, home_team, away_team):
        other = Team.create(season=season, name="Owls", abbreviation="OWL")
        schedule(season, home_team, away_team, date(2026, 6, 7))
        schedule(season, away_team, home_team, date(2026, 6, 14))
        schedule(season, other, away_team, date(2026, 6, 21))

        response = client.get("/api/games", params={"teamId": home_team.id})

        assert response.json()["pagination"]["totalItems"] == 2

    def test_bad_filters(self, client):
        response = client.get("/api/games", params={"status": "finished", "startDate": "06/01/2026"})

        assert response.status_code == 422
        errors = response.json()["error"]["details"]["errors"]
        assert errors["status"] == ["Invalid status: finished"]
        assert errors["startDate"] == ["Date must be in YYYY-MM-DD format"]

    def test_start_after_end(self, client):
        response = client.get("/api/games", params={"startDate": "2026-07-01", "endDate": "2026-06-01"})
        assert response.status_code == 422


class TestLiveAndDetail:

    def test_live_lists_in_progress_only(self, client, season, home_team, away_team):
        live = schedule(season, home_team, away_team, date(2026, 6, 14), status="in_progress",
                        current_inning=3, current_inning_half="bottom", outs=1)
        schedule(season, home_team, away_team, date(2026, 6, 21))

        data = client.get("/api/games/live").json()["data"]

        assert data["count"] == 1
        assert data["games"][0]["id"] == live.id
        assert data["games"][0]["currentInningHalf"] == "bottom"

    def test_game_detail(self, client, game):
        response = client.get(f"/api/games/{game.id}")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["locationName"] == "Riverside Park"
        assert data["homeTeam"]["name"] == "Rays"
        assert data["status"] == "scheduled"

    def test_missing_game(self, client):
        response = client.get("/api/games/404")
        assert response.status_code == 404
        assert response.json()["success"] is False
