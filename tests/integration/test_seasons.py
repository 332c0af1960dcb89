from datetime import date, time

from db.models import Game, Season

NEW_SEASON = {"name": "2027 Summer", "year": 2027, "startDate": "2027-05-01", "endDate": "2027-09-30"}


def schedule(season, home, away, day, status="scheduled"):
    return Game.create(season=season, home_team=home, away_team=away, game_date=day, game_time=time(18, 30),
                       status=status)


class TestPublicSeasons:

    def test_list_newest_first(self, client, season):
        Season.create(name="2025 Summer", year=2025, start_date=date(2025, 5, 1), end_date=date(2025, 9, 30))

        body = client.get("/api/seasons").json()

        assert [s["year"] for s in body["data"]] == [2026, 2025]
        assert body["pagination"]["totalItems"] == 2

    def test_filters(self, client, season):
        Season.create(name="2025 Summer", year=2025, start_date=date(2025, 5, 1), end_date=date(2025, 9, 30))
        Season.create(name="2025 Fall", year=2025, start_date=date(2025, 10, 1), end_date=date(2025, 11, 30))

        by_year = client.get("/api/seasons", params={"year": 2025}).json()["data"]
        active = client.get("/api/seasons", params={"activeOnly": "true"}).json()["data"]

        assert [s["name"] for s in by_year] == ["2025 Fall", "2025 Summer"]
        assert [s["id"] for s in active] == [season.id]

    def test_active_season(self, client, season):
        data = client.get("/api/seasons/active").json()["data"]
        assert data["id"] == season.id
        assert data["isActive"] is True

    def test_no_active_season(self, client):
        assert client.get("/api/seasons/active").status_code == 404

    def test_season_detail(self, client, season, home_team, away_team):
        schedule(season, home_team, away_team, date(2026, 6, 7), status="final")
        schedule(season, home_team, away_team, date(2026, 6, 21))
        schedule(season, away_team, home_team, date(2026, 7, 5))

        data = client.get(f"/api/seasons/{season.id}").json()["data"]

        assert data["stats"]["gamesPlayed"] == 1
        assert data["stats"]["gamesScheduled"] == 2
        assert data["stats"]["teamsCount"] == 2
        assert [t["name"] for t in data["teams"]] == ["Pirates", "Rays"]
        assert data["scheduleOverview"] == [
            {"month": "2026-06", "gamesCount": 2, "completedCount": 1},
            {"month": "2026-07", "gamesCount": 1, "completedCount": 0},
        ]

    def test_unknown_season(self, client):
        assert client.get("/api/seasons/999").status_code == 404


class TestCreateAndUpdate:

    def test_create(self, client, admin, auth_headers):
        response = client.post("/api/admin/seasons", json=NEW_SEASON, headers=auth_headers(admin))

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["name"] == "2027 Summer"
        assert data["isActive"] is False

    def test_create_requires_end_after_start(self, client, admin, auth_headers):
        body = {**NEW_SEASON, "endDate": "2027-04-01"}
        response = client.post("/api/admin/seasons", json=body, headers=auth_headers(admin))

        assert response.status_code == 422
        assert Season.select().count() == 0

    def test_create_active_deactivates_others(self, client, season, admin, auth_headers):
        body = {**NEW_SEASON, "isActive": True}
        created = client.post("/api/admin/seasons", json=body, headers=auth_headers(admin)).json()["data"]

        assert Season.get_active().id == created["id"]
        assert not Season.get_by_id(season.id).is_active

    def test_player_cannot_create(self, client, make_user, auth_headers):
        response = client.post("/api/admin/seasons", json=NEW_SEASON, headers=auth_headers(make_user("player")))
        assert response.status_code == 403

    def test_update(self, client, season, admin, auth_headers):
        response = client.patch(
            f"/api/admin/seasons/{season.id}",
            json={"name": "2026 Summer League", "registrationOpen": True},
            headers=auth_headers(admin),
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["name"] == "2026 Summer League"
        assert data["registrationOpen"] is True

    def test_update_end_before_existing_start(self, client, season, admin, auth_headers):
        response = client.patch(
            f"/api/admin/seasons/{season.id}", json={"endDate": "2026-04-01"}, headers=auth_headers(admin),
        )

        assert response.status_code == 422
        assert response.json()["error"]["details"]["errors"]["endDate"] == ["End date must be after start date"]
        assert Season.get_by_id(season.id).end_date == date(2026, 9, 30)

    def test_update_needs_a_field(self, client, season, admin, auth_headers):
        response = client.patch(f"/api/admin/seasons/{season.id}", json={}, headers=auth_headers(admin))
        assert response.status_code == 422


class TestActivateAndDelete:

    def test_activate_is_exclusive(self, client, season, commissioner, auth_headers):
        headers = auth_headers(commissioner)
        created = client.post("/api/admin/seasons", json=NEW_SEASON, headers=headers).json()["data"]

        response = client.post(f"/api/admin/seasons/{created['id']}/activate", headers=headers)

        assert response.status_code == 200
        assert Season.get_active().id == created["id"]
        assert not Season.get_by_id(season.id).is_active
        assert Season.select().where(Season.is_active == True).count() == 1  # noqa: E712

    def test_delete_refused(self, client, season, game, commissioner, auth_headers):
        response = client.delete(f"/api/admin/seasons/{season.id}", headers=auth_headers(commissioner))
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Cannot delete an active season. Deactivate it first."

        season.is_active = False
        season.save()
        response = client.delete(f"/api/admin/seasons/{season.id}", headers=auth_headers(commissioner))
        assert response.json()["error"]["message"] == "Cannot delete season with 1 game(s). Remove its games first."

        Game.delete().execute()
        response = client.delete(f"/api/admin/seasons/{season.id}", headers=auth_headers(commissioner))
        assert response.status_code == 204
        assert Season.get_or_none(Season.id == season.id) is None

    def test_admin_cannot_delete(self, client, admin, auth_headers):
        inactive = Season.create(name="Old", year=2020, start_date=date(2020, 5, 1), end_date=date(2020, 9, 1))
        response = client.delete(f"/api/admin/seasons/{inactive.id}", headers=auth_headers(admin))

        assert response.status_code == 403
        assert response.json()["error"]["message"] == "Only commissioners can delete seasons"
