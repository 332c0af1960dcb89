import pytest

from db.models import BattingStats, PlateAppearance, Team


@pytest.fixture
def batter(home_team, make_player):
    return make_player(home_team, jersey="24")


def player_url(game, player):
    return f"/api/games/{game.id}/plate-appearances/players/{player.id}"


LINE = {
    "plateAppearances": [
        {"paNumber": 1, "resultType": "hit", "resultSubtype": "2B", "rbiOnPlay": 1},
        {"paNumber": 2, "resultType": "out", "resultSubtype": "K", "notation": "K"},
        {"paNumber": 3, "resultType": "walk", "resultSubtype": "BB"},
        {"paNumber": 4, "resultType": "sacrifice", "resultSubtype": "SF", "notation": "F9", "rbiOnPlay": 1},
    ],
    "runs": 1,
    "rbis": 2,
    "stolenBases": 1,
}


class TestPlayerScorebook:

    def test_save_writes_batting_line(self, client, game, batter, admin, auth_headers):
        response = client.put(player_url(game, batter), json=LINE, headers=auth_headers(admin))

        assert response.status_code == 200
        data = response.json()["data"]
        assert [pa["paNumber"] for pa in data["plateAppearances"]] == [1, 2, 3, 4]
        assert data["computed"]["atBats"] == 2
        assert data["computed"]["hits"] == 1
        assert data["rbis"] == 2

        line = BattingStats.get((BattingStats.game == game.id) & (BattingStats.player == batter.id))
        assert (line.plate_appearances, line.at_bats, line.hits, line.doubles) == (4, 2, 1, 1)
        assert (line.walks, line.strikeouts, line.sacrifice_flies) == (1, 1, 1)
        assert (line.runs, line.rbis, line.stolen_bases) == (1, 2, 1)

    def test_save_replaces_previous_line(self, client, game, batter, admin, auth_headers):
        headers = auth_headers(admin)
        client.put(player_url(game, batter), json=LINE, headers=headers)
        client.put(
            player_url(game, batter),
            json={"plateAppearances": [{"paNumber": 1, "resultType": "hit", "resultSubtype": "HR", "rbiOnPlay": 1}]},
            headers=headers,
        )

        lines = list(BattingStats.select().where(BattingStats.player == batter.id))
        assert len(lines) == 1
        assert lines[0].home_runs == 1
        assert lines[0].plate_appearances == 1

    def test_invalid_line_is_rejected(self, client, game, batter, admin, auth_headers):
        bad = {"plateAppearances": [
            {"paNumber": 1, "resultType": "out", "resultSubtype": "GO"},
            {"paNumber": 3, "resultType": "hit", "resultSubtype": "1B", "rbiOnPlay": 4},
        ]}
        response = client.put(player_url(game, batter), json=bad, headers=auth_headers(admin))

        assert response.status_code == 422
        error = response.json()["error"]
        assert error["message"] == "Invalid plate appearances"
        assert error["details"]["errors"]["plateAppearances"] == [
            "PA #1: Notation is required for outs",
            "PA #3: 4 RBI is only valid on a home run",
            "PA numbers must be sequential: gap between 1 and 3",
        ]
        assert BattingStats.select().count() == 0

    def test_unnumbered_pa_clashing_with_numbered_one(self, client, game, batter, admin, auth_headers):
        body = {"plateAppearances": [
            {"resultType": "hit", "resultSubtype": "1B"},
            {"paNumber": 1, "resultType": "walk", "resultSubtype": "BB"},
        ]}
        response = client.put(player_url(game, batter), json=body, headers=auth_headers(admin))

        assert response.status_code == 422
        assert "PA #1: Duplicate PA number 1" in response.json()["error"]["details"]["errors"]["plateAppearances"]
        assert PlateAppearance.select().count() == 0

    def test_notation_length_is_bounded(self, client, game, batter, admin, auth_headers):
        body = {"plateAppearances": [{"paNumber": 1, "resultType": "out", "resultSubtype": "GO", "notation": "6-4-3" * 5}]}
        response = client.put(player_url(game, batter), json=body, headers=auth_headers(admin))

        assert response.status_code == 422
        assert "plateAppearances.0.notation" in response.json()["error"]["details"]["errors"]
        assert PlateAppearance.select().count() == 0

    def test_player_not_in_game(self, client, game, season, make_player, admin, auth_headers):
        bystander_team = Team.create(season=season, name="Owls", abbreviation="OWL")
        bystander = make_player(bystander_team)

        response = client.put(player_url(game, bystander), json=LINE, headers=auth_headers(admin))
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Player is not on either team in this game"

    def test_requires_admin(self, client, game, batter, manager, auth_headers):
        response = client.put(player_url(game, batter), json=LINE, headers=auth_headers(manager))
        assert response.status_code == 403

    def test_delete(self, client, game, batter, admin, auth_headers):
        headers = auth_headers(admin)
        client.put(player_url(game, batter), json=LINE, headers=headers)

        response = client.delete(player_url(game, batter), headers=headers)
        assert response.status_code == 204
        assert BattingStats.select().count() == 0

        data = client.get(player_url(game, batter)).json()["data"]
        assert data["plateAppearances"] == []
        assert data["computed"]["plateAppearances"] == 0


class TestGameScorebook:

    def test_summary_and_team_listing(self, client, game, batter, away_team, make_player, admin, auth_headers):
        headers = auth_headers(admin)
        client.put(player_url(game, batter), json=LINE, headers=headers)

        summary = client.get(f"/api/games/{game.id}/plate-appearances/summary").json()["data"]
        assert summary["homePlayerCount"] == 1
        assert summary["homeTotalPAs"] == 4
        assert summary["awayTotalPAs"] == 0
        assert summary["isComplete"] is False

        home = client.get(f"/api/games/{game.id}/plate-appearances", params={"team": "home"}).json()["data"]
        assert [p["playerId"] for p in home["players"]] == [batter.id]

        response = client.get(f"/api/games/{game.id}/plate-appearances", params={"team": "middle"})
        assert response.status_code == 422

    def test_team_save_rejects_wrong_side(self, client, game, batter, admin, auth_headers):
        response = client.put(
            f"/api/games/{game.id}/plate-appearances",
            params={"team": "away"},
            json={"players": [{"playerId": batter.id, **LINE}]},
            headers=auth_headers(admin),
        )

        assert response.status_code == 400
        assert response.json()["error"]["message"] == f"Player {batter.id} is not on the away team"
