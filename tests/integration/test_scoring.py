from db.models import Game, Team


def url(game, action):
    return f"/api/games/{game.id}/{action}"


class TestScoringAccess:

    def test_player_cannot_score(self, client, game, home_team, make_player, auth_headers):
        player = make_player(home_team)
        response = client.post(url(game, "start"), headers=auth_headers(player.user))

        assert response.status_code == 403
        assert response.json()["error"]["message"] == "Only team managers can record scores"

    def test_manager_of_other_team(self, client, game, season, make_user, auth_headers):
        other_manager = make_user("manager")
        Team.create(season=season, name="Owls", abbreviation="OWL", manager=other_manager)

        response = client.post(url(game, "start"), headers=auth_headers(other_manager))
        assert response.status_code == 403
        assert response.json()["error"]["message"] == "You can only score games for your team"

    def test_state_is_public(self, client, game):
        response = client.get(url(game, "state"))

        assert response.status_code == 200
        assert response.json()["data"]["status"] == "scheduled"


class TestScoringFlow:
    """A game scored from first pitch to final"""

    def test_full_game(self, client, game, manager, home_team, away_team, auth_headers):
        headers = auth_headers(manager)

        started = client.post(url(game, "start"), headers=headers).json()["data"]
        assert started["previousState"]["status"] == "scheduled"
        assert started["newState"]["status"] == "in_progress"
        assert started["newState"]["currentInning"] == 1
        assert started["newState"]["currentInningHalf"] == "top"

        client.post(url(game, "score"), json={"runs": 2}, headers=headers)
        out = client.post(url(game, "out"), json={"count": 3}, headers=headers).json()["data"]
        assert out["autoAdvanced"] is True
        assert out["newState"]["currentInningHalf"] == "bottom"
        assert out["newState"]["outs"] == 0
        assert out["newState"]["awayInningScores"] == [2]

        client.post(url(game, "score"), json={"runs": 3}, headers=headers)
        one_out = client.post(url(game, "out"), headers=headers).json()["data"]
        assert one_out["autoAdvanced"] is False
        assert one_out["newState"]["outs"] == 1

        advanced = client.post(url(game, "advance"), headers=headers).json()["data"]
        assert advanced["newState"]["currentInning"] == 2
        assert advanced["newState"]["currentInningHalf"] == "top"
        assert advanced["newState"]["homeInningScores"] == [3]

        ended = client.post(url(game, "end"), headers=headers).json()["data"]
        assert ended["newState"]["status"] == "final"

        game = Game.get_by_id(game.id)
        assert (game.home_score, game.away_score) == (3, 2)
        assert game.ended_at is not None

        home, away = Team.get_by_id(home_team.id), Team.get_by_id(away_team.id)
        assert (home.wins, home.losses, home.runs_scored) == (1, 0, 3)
        assert (away.wins, away.losses, away.runs_allowed) == (0, 1, 3)

    def test_cannot_score_before_start(self, client, game, manager, auth_headers):
        response = client.post(url(game, "score"), json={"runs": 1}, headers=auth_headers(manager))

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Can only score games that are in progress"

    def test_cannot_restart_final_game(self, client, game, manager, auth_headers):
        game.status = "final"
        game.save()

        response = client.post(url(game, "start"), headers=auth_headers(manager))
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Game has already ended"

    def test_warmup_can_be_started_again(self, client, game, manager, auth_headers):
        headers = auth_headers(manager)
        client.post(url(game, "start"), json={"status": "warmup"}, headers=headers)
        started_at = Game.get_by_id(game.id).started_at

        response = client.post(url(game, "start"), json={"status": "warmup"}, headers=headers)

        assert response.status_code == 200
        assert response.json()["data"]["newState"]["status"] == "warmup"
        assert Game.get_by_id(game.id).started_at == started_at

    def test_resume_keeps_score(self, client, game, manager, auth_headers):
        headers = auth_headers(manager)
        client.post(url(game, "start"), headers=headers)
        client.post(url(game, "score"), json={"runs": 4}, headers=headers)
        client.post(url(game, "end"), json={"status": "suspended"}, headers=headers)

        resumed = client.post(url(game, "start"), headers=headers).json()["data"]
        assert resumed["newState"]["status"] == "in_progress"
        assert resumed["newState"]["awayScore"] == 4

    def test_forced_advance(self, client, game, manager, auth_headers):
        headers = auth_headers(manager)
        client.post(url(game, "start"), headers=headers)

        response = client.post(url(game, "advance"), json={"forceInning": 10, "forceHalf": "bottom"}, headers=headers)
        state = response.json()["data"]["newState"]
        assert (state["currentInning"], state["currentInningHalf"]) == (10, "bottom")
        assert state["isExtraInnings"] is True

    def test_negative_runs_rejected(self, client, game, manager, auth_headers):
        client.post(url(game, "start"), headers=auth_headers(manager))
        response = client.post(url(game, "score"), json={"runs": -1}, headers=auth_headers(manager))
        assert response.status_code == 422


class TestStateCorrection:

    def test_admin_corrects_inning_lines(self, client, game, admin, auth_headers):
        response = client.patch(
            url(game, "state"),
            json={"homeInningScores": [1, 0, 2], "awayInningScores": [0, 0, 0]},
            headers=auth_headers(admin),
        )

        assert response.status_code == 200
        state = response.json()["data"]["newState"]
        assert state["homeScore"] == 3
        assert state["awayScore"] == 0

    def test_manager_cannot_correct(self, client, game, manager, auth_headers):
        response = client.patch(url(game, "state"), json={"homeScore": 9}, headers=auth_headers(manager))
        assert response.status_code == 403

    def test_null_score_is_rejected(self, client, game, admin, auth_headers):
        response = client.patch(url(game, "state"), json={"awayScore": None}, headers=auth_headers(admin))

        assert response.status_code == 422
        assert response.json()["error"]["details"]["errors"]["awayScore"] == ["Score must be a non-negative number"]
