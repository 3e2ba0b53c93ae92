from fastapi import APIRouter, Depends

from app.api.deps import get_user_repo
from app.db.repositories.users import UserRepository
from app.schemas.auth import LoginRequest, RegisterRequest, TokenResponse
from app.services import auth as auth_service

router = APIRouter(tags=["auth"])


@router.post("/register", response_model=TokenResponse)
def register(payload: RegisterRequest, users: UserRepository = Depends(get_user_repo)):
    return auth_service.register(
        users,
        username=payload.username,
        email=payload.email,
        password=payload.password,
        phone=payload.phone,
        address=payload.address,
        role_id=payload.role_id,
    )


@router.post("/login", response_model=TokenResponse)
def login(payload: LoginRequest, users: UserRepository = Depends(get_user_repo)):
    return auth_service.login(users, payload.email, payload.password)
