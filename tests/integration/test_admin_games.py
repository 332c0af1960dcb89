from datetime import date

from db.models import BattingStats, Game, PitchingStats, Team


class TestAdminAccess:

    def test_player_is_forbidden(self, client, make_user, auth_headers):
        response = client.get("/api/admin/games", headers=auth_headers(make_user("player")))

        assert response.status_code == 403
        assert response.json()["error"]["message"] == "Admin access required"

    def test_delete_needs_commissioner(self, client, game, admin, auth_headers):
        response = client.delete(f"/api/admin/games/{game.id}", headers=auth_headers(admin))

        assert response.status_code == 403
        assert response.json()["error"]["message"] == "Commissioner access required"


class TestCreateGames:

    def test_single_game(self, client, home_team, away_team, admin, season, auth_headers):
        response = client.post(
            "/api/admin/games",
            json={"homeTeamId": home_team.id, "awayTeamId": away_team.id, "gameDate": "2026-07-04", "gameTime": "13:00"},
            headers=auth_headers(admin),
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["seasonId"] == season.id
        assert data["status"] == "scheduled"
        assert data["homeTeam"]["abbreviation"] == "RAY"

    def test_series(self, client, home_team, away_team, admin, auth_headers):
        games = [
            {"homeTeamId": home_team.id, "awayTeamId": away_team.id, "gameDate": "2026-07-11", "gameTime": "13:00"},
            {"homeTeamId": away_team.id, "awayTeamId": home_team.id, "gameDate": "2026-07-18", "gameTime": "13:00"},
        ]
        response = client.post("/api/admin/games", json={"games": games}, headers=auth_headers(admin))

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["message"] == "Created 2 games"
        assert len(data["games"]) == 2

    def test_field_errors(self, client, home_team, admin, auth_headers):
        response = client.post(
            "/api/admin/games",
            json={"homeTeamId": home_team.id, "awayTeamId": home_team.id, "gameDate": "07/04/2026"},
            headers=auth_headers(admin),
        )

        assert response.status_code == 422
        errors = response.json()["error"]["details"]["errors"]
        assert errors["awayTeamId"] == ["Home and away teams must be different"]
        assert errors["gameDate"] == ["Game date must be in YYYY-MM-DD format"]
        assert errors["gameTime"] == ["Game time is required"]


class TestCancelAndPostpone:

    def test_cancel_appends_note(self, client, game, admin, auth_headers):
        response = client.post(f"/api/admin/games/{game.id}/cancel", json={"reason": "Field flooded"}, headers=auth_headers(admin))

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["action"] == "cancelled"
        assert data["message"] == "Game has been cancelled"
        assert data["game"]["status"] == "cancelled"
        assert "Cancelled: Field flooded" in data["game"]["notes"]

    def test_cannot_cancel_twice(self, client, game, admin, auth_headers):
        client.post(f"/api/admin/games/{game.id}/cancel", headers=auth_headers(admin))
        response = client.post(f"/api/admin/games/{game.id}/cancel", headers=auth_headers(admin))

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Game is already cancelled"

    def test_cannot_cancel_live_game(self, client, game, admin, auth_headers):
        game.status = "in_progress"
        game.save()

        response = client.post(f"/api/admin/games/{game.id}/cancel", headers=auth_headers(admin))
        assert response.status_code == 400
        assert response.json()["error"]["message"].startswith("Cannot cancel a game in progress")

    def test_postpone(self, client, game, admin, auth_headers):
        response = client.post(f"/api/admin/games/{game.id}/postpone", headers=auth_headers(admin))

        data = response.json()["data"]
        assert data["action"] == "postponed"
        assert data["game"]["status"] == "postponed"

    def test_postpone_with_new_date(self, client, game, admin, auth_headers):
        response = client.post(
            f"/api/admin/games/{game.id}/postpone",
            json={"reason": "Rain", "rescheduleDate": "2026-06-21", "rescheduleTime": "10:00"},
            headers=auth_headers(admin),
        )

        data = response.json()["data"]
        assert data["action"] == "rescheduled"
        assert data["message"] == "Game has been rescheduled to 2026-06-21"
        assert data["game"]["status"] == "scheduled"
        assert Game.get_by_id(game.id).game_date == date(2026, 6, 21)

    def test_cannot_postpone_final(self, client, game, admin, auth_headers):
        game.status = "final"
        game.save()

        response = client.post(f"/api/admin/games/{game.id}/postpone", headers=auth_headers(admin))
        assert response.status_code == 400


class TestDelete:

    def test_deletes_scheduled_game(self, client, game, commissioner, auth_headers):
        response = client.delete(f"/api/admin/games/{game.id}", headers=auth_headers(commissioner))

        assert response.status_code == 204
        assert Game.get_or_none(Game.id == game.id) is None

    def test_refuses_final_game(self, client, game, commissioner, auth_headers):
        game.status = "final"
        game.save()

        response = client.delete(f"/api/admin/games/{game.id}", headers=auth_headers(commissioner))
        assert response.status_code == 400
        assert Game.get_or_none(Game.id == game.id) is not None


class TestStatsStatus:

    def test_missing_partial_complete(self, client, game, home_team, away_team, make_player, admin, auth_headers):
        headers = auth_headers(admin)
        assert client.get(f"/api/admin/games/{game.id}", headers=headers).json()["data"]["statsStatus"] == "missing"

        home_player, away_player = make_player(home_team), make_player(away_team)
        BattingStats.create(game=game, player=home_player, team=home_team)
        assert client.get(f"/api/admin/games/{game.id}", headers=headers).json()["data"]["statsStatus"] == "partial"

        BattingStats.create(game=game, player=away_player, team=away_team)
        PitchingStats.create(game=game, player=home_player, team=home_team)
        PitchingStats.create(game=game, player=away_player, team=away_team)
        assert client.get(f"/api/admin/games/{game.id}", headers=headers).json()["data"]["statsStatus"] == "complete"

        listed = client.get("/api/admin/games", params={"statsStatus": "complete"}, headers=headers).json()["data"]
        assert [g["id"] for g in listed] == [game.id]


class TestUpdateGame:

    def test_moves_along_valid_transition(self, client, game, admin, auth_headers):
        response = client.patch(f"/api/admin/games/{game.id}", json={"status": "postponed"}, headers=auth_headers(admin))

        assert response.status_code == 200
        assert response.json()["data"]["status"] == "postponed"

    def test_refuses_invalid_transition(self, client, game, admin, auth_headers):
        game.status = "final"
        game.save()

        response = client.patch(f"/api/admin/games/{game.id}", json={"status": "scheduled"}, headers=auth_headers(admin))

        assert response.status_code == 422
        assert response.json()["error"]["details"]["errors"]["status"] == [
            "Cannot change game status from 'final' to 'scheduled'"
        ]
        assert Game.get_by_id(game.id).status == "final"

    def test_rejects_negative_score(self, client, game, admin, auth_headers):
        response = client.patch(f"/api/admin/games/{game.id}", json={"awayScore": -1}, headers=auth_headers(admin))

        assert response.status_code == 422
        assert response.json()["error"]["details"]["errors"]["awayScore"] == ["Away score must be a non-negative number"]

    def test_rejects_null_score_and_timezone(self, client, game, admin, auth_headers):
        response = client.patch(
            f"/api/admin/games/{game.id}",
            json={"homeScore": None, "timezone": None},
            headers=auth_headers(admin),
        )

        assert response.status_code == 422
        errors = response.json()["error"]["details"]["errors"]
        assert errors["homeScore"] == ["Home score must be a non-negative number"]
        assert errors["timezone"] == ["Timezone cannot be empty"]
        assert Game.get_by_id(game.id).home_score == 0

    def test_corrected_final_refreshes_records(self, client, game, home_team, away_team, admin, auth_headers):
        headers = auth_headers(admin)
        client.patch(f"/api/admin/games/{game.id}", json={"status": "in_progress"}, headers=headers)
        client.patch(
            f"/api/admin/games/{game.id}",
            json={"status": "final", "homeScore": 5, "awayScore": 2},
            headers=headers,
        )
        assert Team.get_by_id(home_team.id).wins == 1

        response = client.patch(f"/api/admin/games/{game.id}", json={"homeScore": 1}, headers=headers)

        assert response.status_code == 200
        home = Team.get_by_id(home_team.id)
        away = Team.get_by_id(away_team.id)
        assert (home.wins, home.losses, home.runs_scored) == (0, 1, 1)
        assert (away.wins, away.losses) == (1, 0)
