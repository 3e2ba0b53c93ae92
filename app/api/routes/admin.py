# app/api/routes/admin.py
from typing import List

from fastapi import APIRouter, Depends

from app.api.deps import get_user_repo, require_admin
from app.db.models.user import User
from app.db.repositories.users import UserRepository
from app.schemas.admin import AdminProfileUpdate, RoleChange, RoleChangeResponse, UserListItem
from app.schemas.user import ProfileResponse
from app.services import users as user_service

router = APIRouter(prefix="/admin", tags=["admin"])


# -------------------------
# 1. List users
# -------------------------
@router.get("/users", response_model=List[UserListItem])
def list_users(
    users: UserRepository = Depends(get_user_repo),
    current_user: User = Depends(require_admin),
):
    return user_service.list_users(users)


# --------------------------------------------------
# 2. Change a user's role
# --------------------------------------------------
@router.patch("/users/{user_id}/role", response_model=RoleChangeResponse)
def change_role(
    user_id: int,
    payload: RoleChange,
    users: UserRepository = Depends(get_user_repo),
    current_user: User = Depends(require_admin),
):
    return user_service.change_role(users, user_id, payload.role_id)


# --------------------------------------------------
# 3. Edit another user's profile
# --------------------------------------------------
@router.patch("/users/{user_id}/profile", response_model=ProfileResponse)
def update_user_profile(
    user_id: int,
    payload: AdminProfileUpdate,
    users: UserRepository = Depends(get_user_repo),
    current_user: User = Depends(require_admin),
):
    return user_service.update_user_profile(users, user_id, **payload.model_dump())
