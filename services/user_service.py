from typing import Dict, Optional

from core.errors import BadRequestError, NotFoundError, ValidationFailedError
from core.logging import get_logger
from core.security import check_password, hash_password
from db.models import Player, Team, User
from schemas.auth import PasswordChangeReq
from schemas.common import MessageData, MessageResp, PageParams
from schemas.user import (
    AdminUserListResp,
    AdminUserOut,
    AdminUserResp,
    AdminUserUpdateReq,
    ProfileOut,
    ProfileResp,
    ProfileUpdateReq,
    TeamMembershipOut,
    TeamStatusOut,
    TeamStatusResp,
)
from utils.sanitize import sanitize_name, sanitize_string

log = get_logger("users")

ASSIGNMENT_STATUSES = ('assigned', 'unassigned', 'all')
USER_SORTS = {
    'name': User.full_name,
    'email': User.email,
    'createdAt': User.created_at,
}


def _active_spots(user_ids):
    """Active roster spots (with team) for a set of users, newest first."""
    return (
        Player.select(Player, Team)
        .join(Team)
        .where((Player.user.in_(list(user_ids))) & (Player.is_active == True))  # noqa: E712
        .order_by(Player.joined_at.desc())
    )


def _membership(player: Player) -> TeamMembershipOut:
    return TeamMembershipOut(
        player_id=player.id,
        team_id=player.team_id,
        team_name=player.team.name,
        team_abbreviation=player.team.abbreviation,
        season_id=player.season_id,
        jersey_number=player.jersey_number,
        primary_position=player.primary_position,
        is_captain=player.is_captain,
    )


def profile_out(user: User) -> ProfileOut:
    teams = [_membership(p) for p in _active_spots([user.id])]
    managed = [t.id for t in Team.select(Team.id).where(Team.manager == user.id).order_by(Team.id)]
    return ProfileOut.model_validate({
        **user.__data__,
        'teams': teams,
        'managed_team_ids': managed,
    })


def admin_user_out(user: User, spot: Optional[Player]) -> AdminUserOut:
    return AdminUserOut.model_validate({
        **user.__data__,
        'team_id': spot.team_id if spot else None,
        'team_name': spot.team.name if spot else None,
        'player_id': spot.id if spot else None,
    })


class UserService:

    @staticmethod
    async def get_profile(user: User) -> ProfileResp:
        return ProfileResp(data=profile_out(user))

    @staticmethod
    async def update_profile(user: User, req: ProfileUpdateReq) -> ProfileResp:
        changes = req.model_dump(exclude_unset=True)

        if 'full_name' in changes:
            name = sanitize_name(changes['full_name'] or "")
            if len(name) < 2:
                raise ValidationFailedError({'fullName': ["Name must be at least 2 characters"]})
            user.full_name = name
        if 'phone' in changes:
            user.phone = sanitize_string(changes['phone']) or None
        if 'avatar_url' in changes:
            user.avatar_url = sanitize_string(changes['avatar_url']) or None

        user.save()
        log.info("profile_updated", user_id=user.id, fields=sorted(changes))
        return ProfileResp(data=profile_out(user))

    @staticmethod
    async def change_password(user: User, req: PasswordChangeReq) -> MessageResp:
        if not check_password(req.current_password, user.password_hash):
            raise BadRequestError("Current password is incorrect")
        if req.current_password == req.new_password:
            raise BadRequestError("New password must be different from the current password")

        user.password_hash = hash_password(req.new_password)
        user.save()
        log.info("password_changed", user_id=user.id)
        return MessageResp(data=MessageData(message="Password updated successfully"))

    @staticmethod
    async def team_status(user: User) -> TeamStatusResp:
        spot = _active_spots([user.id]).first()
        if spot is None:
            return TeamStatusResp(data=TeamStatusOut(has_team=False))
        return TeamStatusResp(data=TeamStatusOut(has_team=True, team_id=spot.team_id, team_name=spot.team.name))


class AdminUserService:

    @staticmethod
    async def list_users(page: PageParams, search: Optional[str] = None, role: Optional[str] = None,
                         team_id: Optional[int] = None, assignment_status: Optional[str] = None,
                         is_active: Optional[bool] = None, sort: str = 'name', sort_dir: str = 'asc') -> AdminUserListResp:
        if assignment_status and assignment_status not in ASSIGNMENT_STATUSES:
            raise ValidationFailedError({
                'assignmentStatus': [f"Assignment status must be one of: {', '.join(ASSIGNMENT_STATUSES)}"]
            })

        query = User.select()
        term = sanitize_string(search)
        if term:
            query = query.where(User.full_name.contains(term) | User.email.contains(term.lower()))
        if role:
            query = query.where(User.role == role)
        if is_active is not None:
            query = query.where(User.is_active == is_active)

        active_spots = Player.select(Player.user).where(Player.is_active == True)  # noqa: E712
        if team_id is not None:
            query = query.where(User.id.in_(active_spots.where(Player.team == team_id)))
        if assignment_status == 'assigned':
            query = query.where(User.id.in_(active_spots))
        elif assignment_status == 'unassigned':
            query = query.where(User.id.not_in(active_spots))

        column = USER_SORTS.get(sort, User.full_name)
        query = query.order_by(column.desc() if sort_dir == 'desc' else column, User.id)

        total = query.count()
        users = list(page.paginate(query))

        spots: Dict[int, Player] = {}
        for spot in _active_spots(u.id for u in users):
            spots.setdefault(spot.user_id, spot)

        return AdminUserListResp(
            data=[admin_user_out(u, spots.get(u.id)) for u in users],
            pagination=page.pagination(total),
        )

    @staticmethod
    async def update_user(user_id: int, req: AdminUserUpdateReq, acting_user: User) -> AdminUserResp:
        user = User.get_or_none(User.id == user_id)
        if user is None:
            raise NotFoundError("User", user_id)

        changes = req.model_dump(exclude_unset=True, exclude_none=True)
        if user.id == acting_user.id and (changes.get('is_active') is False or 'role' in changes):
            raise BadRequestError("You cannot change your own role or deactivate your own account")

        for field, value in changes.items():
            setattr(user, field, value)
        user.save()

        log.info("user_updated", user_id=user.id, by=acting_user.id, fields=sorted(changes))
        return AdminUserResp(data=admin_user_out(user, _active_spots([user.id]).first()))
