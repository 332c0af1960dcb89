from db.models import Player


class TestAssignPlayer:

    def test_assign_and_jersey_conflict(self, client, home_team, make_user, admin, auth_headers):
        headers = auth_headers(admin)
        first, second = make_user("player"), make_user("player")

        response = client.post(
            "/api/admin/players",
            json={"userId": first.id, "teamId": home_team.id, "jerseyNumber": "8", "primaryPosition": "SS"},
            headers=headers,
        )
        assert response.status_code == 201
        assert response.json()["data"]["seasonId"] == home_team.season_id

        response = client.post(
            "/api/admin/players",
            json={"userId": second.id, "teamId": home_team.id, "jerseyNumber": "8"},
            headers=headers,
        )
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Jersey number 8 is already taken on this team"

    def test_one_team_per_season(self, client, home_team, away_team, make_player, admin, auth_headers):
        player = make_player(home_team)
        response = client.post(
            "/api/admin/players",
            json={"userId": player.user_id, "teamId": away_team.id, "jerseyNumber": "99"},
            headers=auth_headers(admin),
        )

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "User is already assigned to a team. Remove them first."

    def test_move_to_taken_jersey(self, client, home_team, away_team, make_player, admin, auth_headers):
        mover = make_player(home_team, jersey="5")
        make_player(away_team, jersey="5")

        response = client.patch(f"/api/admin/players/{mover.id}", json={"teamId": away_team.id}, headers=auth_headers(admin))
        assert response.status_code == 400
        assert Player.get_by_id(mover.id).team_id == home_team.id

    def test_remove_is_soft(self, client, home_team, make_player, admin, auth_headers):
        player = make_player(home_team, is_captain=True)

        assert client.delete(f"/api/admin/players/{player.id}", headers=auth_headers(admin)).status_code == 204
        player = Player.get_by_id(player.id)
        assert not player.is_active
        assert not player.is_captain

        again = client.delete(f"/api/admin/players/{player.id}", headers=auth_headers(admin))
        assert again.status_code == 400
