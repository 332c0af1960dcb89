from fastapi import APIRouter, Depends

from core.security import get_current_user
from db.models import User
from schemas.auth import PasswordChangeReq
from schemas.availability import MyAvailabilityResp
from schemas.common import MessageResp
from schemas.user import ProfileResp, ProfileUpdateReq, TeamStatusResp
from services.availability_service import AvailabilityService
from services.user_service import UserService

router = APIRouter(prefix="/users", tags=["Users"])


@router.get('/me/profile', response_model=ProfileResp)
async def get_profile(user: User = Depends(get_current_user)) -> ProfileResp:
    return await UserService.get_profile(user)


@router.patch('/me/profile', response_model=ProfileResp)
async def update_profile(req: ProfileUpdateReq, user: User = Depends(get_current_user)) -> ProfileResp:
    return await UserService.update_profile(user, req)


@router.post('/me/password', response_model=MessageResp)
async def change_password(req: PasswordChangeReq, user: User = Depends(get_current_user)) -> MessageResp:
    return await UserService.change_password(user, req)


@router.get('/me/team-status', response_model=TeamStatusResp)
async def team_status(user: User = Depends(get_current_user)) -> TeamStatusResp:
    return await UserService.team_status(user)


@router.get('/me/availability', response_model=MyAvailabilityResp)
async def my_availability(user: User = Depends(get_current_user)) -> MyAvailabilityResp:
    """Upcoming games for the caller's teams, with their response."""
    return await AvailabilityService.my_availability(user)
