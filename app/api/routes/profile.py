# app/api/routes/profile.py
from fastapi import APIRouter, Depends

from app.api.deps import get_current_user, get_user_repo
from app.db.models.user import User
from app.db.repositories.users import UserRepository
from app.schemas.auth import PasswordChangeRequest
from app.schemas.user import MessageResponse, ProfileResponse, ProfileUpdate, UserPublic
from app.services import auth as auth_service

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("", response_model=ProfileResponse)
def get_profile(
    users: UserRepository = Depends(get_user_repo),
    current_user: User = Depends(get_current_user),
):
    return auth_service.get_profile(users, current_user.id)


@router.put("", response_model=UserPublic)
def update_profile(
    payload: ProfileUpdate,
    users: UserRepository = Depends(get_user_repo),
    current_user: User = Depends(get_current_user),
):
    return auth_service.update_profile(
        users,
        current_user.id,
        username=payload.username,
        email=payload.email,
        phone=payload.phone,
        address=payload.address,
    )


@router.put("/password", response_model=MessageResponse)
def change_password(
    payload: PasswordChangeRequest,
    users: UserRepository = Depends(get_user_repo),
    current_user: User = Depends(get_current_user),
):
    return auth_service.change_password(
        users, current_user.id, payload.current_password, payload.new_password
    )
