from services.channels import can_moderate, can_pin, can_post, can_view, is_roster_member


class TestChannelAccess:
    """Who may read and write each team channel"""

    def test_roster_member_reads_and_posts_general(self, home_team, make_player):
        player = make_player(home_team)
        user = player.user

        assert is_roster_member(user, home_team.id)
        assert can_view(user, home_team)
        assert can_post(user, home_team, "general")
        assert can_post(user, home_team, "substitutes")

    def test_only_managers_post_important(self, home_team, make_player, manager):
        player = make_player(home_team)

        assert not can_post(player.user, home_team, "important")
        assert can_post(manager, home_team, "important")

    def test_outsider_sees_nothing(self, home_team, away_team, make_player):
        other = make_player(away_team)

        assert not can_view(other.user, home_team)
        assert not can_post(other.user, home_team, "general")

    def test_removed_player_loses_access(self, home_team, make_player):
        player = make_player(home_team, is_active=False)
        assert not can_view(player.user, home_team)

    def test_admin_moderates_any_team(self, home_team, admin):
        assert can_view(admin, home_team)
        assert can_pin(admin, home_team)
        assert can_moderate(admin, home_team)

    def test_unknown_channel(self, home_team, manager):
        assert not can_post(manager, home_team, "random")
