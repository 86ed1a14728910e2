"""User profile API.

Learn: The profile is always "me": the user id comes from the token,
so there is no path parameter to tamper with.
- GET /user/profile → current user (no password hash)
- PUT /user/profile → replace name/email/phone, optionally rotate password
"""

from fastapi import APIRouter, Depends

from homelist.api.auth import get_user_service
from homelist.auth.dependencies import CurrentIdentity, get_current_user
from homelist.schemas.user import ProfileResponse, ProfileUpdate, UserRead
from homelist.services.user_service import UserService

router = APIRouter(prefix="/user")


@router.get("/profile", response_model=UserRead)
async def get_profile(
    identity: CurrentIdentity = Depends(get_current_user),
    svc: UserService = Depends(get_user_service),
):
    return await svc.get_profile(identity.user_id)


@router.put("/profile", response_model=ProfileResponse)
async def update_profile(
    body: ProfileUpdate,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: UserService = Depends(get_user_service),
):
    user = await svc.update_profile(
        identity.user_id,
        name=body.name,
        email=body.email,
        phone=body.phone,
        current_password=body.current_password,
        new_password=body.new_password,
    )
    return ProfileResponse(
        message="Profile updated successfully",
        user=UserRead.model_validate(user),
    )
