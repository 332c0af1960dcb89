"""Who may read, write and moderate a team's chat channels."""

from typing import Optional

from db.models import Player, Team, User
from utils.constants import CHANNELS


def is_team_manager(user: User, team: Team) -> bool:
    return team.manager_id is not None and team.manager_id == user.id


def is_roster_member(user: User, team_id: int) -> bool:
    return Player.active_for_user(user.id, team_id).exists()


def can_view(user: User, team: Team) -> bool:
    return user.is_admin or is_team_manager(user, team) or is_roster_member(user, team.id)


def can_post(user: User, team: Team, channel: str) -> bool:
    config: Optional[dict] = CHANNELS.get(channel)
    if config is None or not can_view(user, team):
        return False
    if config['can_all_post']:
        return True
    return user.is_admin or is_team_manager(user, team)


def can_pin(user: User, team: Team) -> bool:
    return user.is_admin or is_team_manager(user, team)


def can_moderate(user: User, team: Team) -> bool:
    """Delete other members' messages."""
    return user.is_admin or is_team_manager(user, team)
