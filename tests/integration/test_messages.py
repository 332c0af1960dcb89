import pytest

from db.models import Message


@pytest.fixture
def member(home_team, make_player):
    return make_player(home_team, jersey="12").user


@pytest.fixture
def outsider(away_team, make_player):
    return make_player(away_team, jersey="3").user


def messages_url(team, suffix=""):
    return f"/api/teams/{team.id}/messages{suffix}"


class TestPosting:

    def test_member_posts_to_general(self, client, home_team, member, auth_headers):
        response = client.post(messages_url(home_team), json={"content": "  Bring   the cooler  "}, headers=auth_headers(member))

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["content"] == "Bring the cooler"
        assert data["channel"] == "general"
        assert data["author"]["id"] == member.id

    def test_member_cannot_post_important(self, client, home_team, member, auth_headers):
        response = client.post(
            messages_url(home_team),
            json={"content": "Practice cancelled", "channel": "important"},
            headers=auth_headers(member),
        )

        assert response.status_code == 403
        assert response.json()["error"]["message"] == "Only team managers can post to the Important channel"

    def test_manager_posts_important(self, client, home_team, manager, auth_headers):
        response = client.post(
            messages_url(home_team),
            json={"content": "Game moved to 7pm", "channel": "important"},
            headers=auth_headers(manager),
        )
        assert response.status_code == 201

    def test_outsider_is_forbidden(self, client, home_team, outsider, auth_headers):
        response = client.post(messages_url(home_team), json={"content": "hi"}, headers=auth_headers(outsider))

        assert response.status_code == 403
        assert response.json()["error"]["message"] == "You must be a member of this team to send messages"

    def test_blank_content_rejected(self, client, home_team, member, auth_headers):
        response = client.post(messages_url(home_team), json={"content": "   "}, headers=auth_headers(member))
        assert response.status_code == 422

    def test_reply_must_be_in_team(self, client, home_team, away_team, member, outsider, auth_headers):
        other = Message.create(team=away_team, author=outsider, content="theirs")
        response = client.post(
            messages_url(home_team),
            json={"content": "replying", "replyToId": other.id},
            headers=auth_headers(member),
        )

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Reply target must be a message in this team"


class TestEditingAndDeleting:

    def test_only_author_edits(self, client, home_team, member, manager, auth_headers):
        message = Message.create(team=home_team, author=member, content="original")

        response = client.patch(messages_url(home_team, f"/{message.id}"), json={"content": "hijack"}, headers=auth_headers(manager))
        assert response.status_code == 403

        response = client.patch(messages_url(home_team, f"/{message.id}"), json={"content": "fixed"}, headers=auth_headers(member))
        assert response.status_code == 200
        assert response.json()["data"]["content"] == "fixed"
        assert response.json()["data"]["isEdited"] is True

    def test_manager_deletes_any_message(self, client, home_team, member, manager, auth_headers):
        message = Message.create(team=home_team, author=member, content="oops", is_pinned=True)

        response = client.delete(messages_url(home_team, f"/{message.id}"), headers=auth_headers(manager))
        assert response.status_code == 204

        message = Message.get_by_id(message.id)
        assert message.is_deleted
        assert not message.is_pinned

        response = client.get(messages_url(home_team, f"/{message.id}"), headers=auth_headers(member))
        assert response.status_code == 404

    def test_member_cannot_delete_others(self, client, home_team, member, make_player, auth_headers):
        teammate = make_player(home_team, jersey="44").user
        message = Message.create(team=home_team, author=member, content="mine")

        response = client.delete(messages_url(home_team, f"/{message.id}"), headers=auth_headers(teammate))
        assert response.status_code == 403
        assert response.json()["error"]["message"] == "You can only delete your own messages"


class TestPinning:

    def test_manager_pins(self, client, home_team, member, manager, auth_headers):
        message = Message.create(team=home_team, author=member, content="carpool sheet")

        response = client.patch(messages_url(home_team, f"/{message.id}/pin"), json={"isPinned": True}, headers=auth_headers(manager))
        assert response.status_code == 200
        assert response.json()["data"]["isPinned"] is True

        listing = client.get(messages_url(home_team), params={"pinnedOnly": "true"}, headers=auth_headers(member)).json()["data"]
        assert [m["id"] for m in listing["messages"]] == [message.id]
        assert listing["totalPinned"] == 1

    def test_member_cannot_pin(self, client, home_team, member, auth_headers):
        message = Message.create(team=home_team, author=member, content="pin me")
        response = client.patch(messages_url(home_team, f"/{message.id}/pin"), json={"isPinned": True}, headers=auth_headers(member))

        assert response.status_code == 403
        assert response.json()["error"]["message"] == "Only team managers can pin messages"


class TestListing:

    def test_cursor_paging(self, client, home_team, member, auth_headers):
        ids = [Message.create(team=home_team, author=member, content=f"m{i}").id for i in range(5)]

        first = client.get(messages_url(home_team), params={"limit": 2}, headers=auth_headers(member)).json()["data"]
        assert [m["id"] for m in first["messages"]] == [ids[4], ids[3]]
        assert first["hasMore"] is True
        assert first["cursor"]["next"] == ids[3]
        assert first["cursor"]["previous"] is None

        second = client.get(
            messages_url(home_team), params={"limit": 2, "cursor": first["cursor"]["next"]}, headers=auth_headers(member)
        ).json()["data"]
        assert [m["id"] for m in second["messages"]] == [ids[2], ids[1]]

        newer = client.get(
            messages_url(home_team),
            params={"limit": 2, "cursor": ids[1], "direction": "newer"},
            headers=auth_headers(member),
        ).json()["data"]
        assert [m["id"] for m in newer["messages"]] == [ids[3], ids[2]]
        assert newer["hasMore"] is True

    def test_unknown_channel(self, client, home_team, member, auth_headers):
        response = client.get(messages_url(home_team), params={"channel": "random"}, headers=auth_headers(member))
        assert response.status_code == 422


class TestUnread:

    def test_counts_and_mark_read(self, client, home_team, member, manager, auth_headers):
        Message.create(team=home_team, author=member, content="one")
        Message.create(team=home_team, author=member, content="two")
        Message.create(team=home_team, author=manager, content="own message", channel="important")

        unread = client.get(f"/api/teams/{home_team.id}/unread", headers=auth_headers(manager)).json()["data"]
        assert unread["channels"]["general"] == 2
        assert unread["channels"]["important"] == 0
        assert unread["total"] == 2

        response = client.post(f"/api/teams/{home_team.id}/channels/general/read", headers=auth_headers(manager))
        assert response.status_code == 200

        unread = client.get(f"/api/teams/{home_team.id}/unread", headers=auth_headers(manager)).json()["data"]
        assert unread["total"] == 0

    def test_channel_list(self, client, home_team, member, auth_headers):
        Message.create(team=home_team, author=member, content="hello")
        channels = client.get(f"/api/teams/{home_team.id}/channels", headers=auth_headers(member)).json()["data"]

        by_id = {c["id"]: c for c in channels}
        assert set(by_id) == {"important", "general", "substitutes"}
        assert by_id["important"]["canWrite"] is False
        assert by_id["general"]["canWrite"] is True
        assert by_id["general"]["messageCount"] == 1
