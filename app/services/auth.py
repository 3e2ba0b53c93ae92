# app/services/auth.py
"""Registration, login and self-service profile changes."""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError

from app.core.errors import ConflictError, InvalidCredentials, NotFoundError, ValidationError
from app.core.roles import Role, parse_role_id
from app.core.security import create_access_token, hash_password, verify_password
from app.db.models.user import User
from app.db.repositories.users import UserRepository

logger = logging.getLogger(__name__)


def user_public(user: User) -> dict:
    return {
        "id": user.id,
        "username": user.username,
        "email": user.email,
        "phone": user.phone,
        "address": user.address,
        "role": user.role_name,
        "role_id": user.role_id,
    }


def user_profile(user: User) -> dict:
    data = user_public(user)
    data.update(
        full_name=user.full_name,
        birthday=user.birthday,
        discount_amount=user.discount_amount or 0,
        created_at=user.created_at,
    )
    return data


def register(
    users: UserRepository,
    username: Optional[str],
    email: Optional[str],
    password: Optional[str],
    phone: Optional[str] = None,
    address: Optional[str] = None,
    role_id: Optional[int] = None,
) -> dict:
    if not username or not email or not password:
        raise ValidationError("Username, email and password are required")

    if users.find_taken(username, email):
        raise ConflictError("A user with this username or email already exists")

    role = Role.GUEST
    if role_id:
        role = parse_role_id(role_id)
        if role is None:
            raise ValidationError("Invalid role id")

    try:
        user = users.add(
            User(
                username=username,
                email=email,
                password=hash_password(password),
                phone=phone or None,
                address=address or None,
                role_id=int(role),
            )
        )
        users.commit()
    except IntegrityError as e:
        users.rollback()
        raise ConflictError("A user with this username or email already exists") from e
    users.refresh(user)

    logger.info(f"Registered user {user.id} ({user.username})")
    return {"token": create_access_token(user.id), "user": user_public(user)}


def login(users: UserRepository, email: Optional[str], password: Optional[str]) -> dict:
    if not email or not password:
        raise ValidationError("Email and password are required")

    user = users.get_by_email(email)
    if not user or not verify_password(password, user.password):
        logger.warning(f"Failed login for {email}")
        raise InvalidCredentials()

    logger.info(f"User {user.id} logged in")
    return {"token": create_access_token(user.id), "user": user_public(user)}


def get_profile(users: UserRepository, user_id: int) -> dict:
    user = users.get(user_id)
    if not user:
        raise NotFoundError("User not found")
    return user_profile(user)


def update_profile(
    users: UserRepository,
    user_id: int,
    username: Optional[str],
    email: Optional[str],
    phone: Optional[str] = None,
    address: Optional[str] = None,
) -> dict:
    if not username or not email:
        raise ValidationError("Username and email are required")

    user = users.get(user_id)
    if not user:
        raise NotFoundError("User not found")

    if users.find_taken(username, email, exclude_id=user_id):
        raise ConflictError("A user with this username or email already exists")

    user.username = username
    user.email = email
    user.phone = phone or None
    user.address = address or None
    try:
        users.commit()
    except IntegrityError as e:
        users.rollback()
        raise ConflictError("A user with this username or email already exists") from e
    users.refresh(user)
    return user_public(user)


def change_password(
    users: UserRepository,
    user_id: int,
    current_password: Optional[str],
    new_password: Optional[str],
) -> dict:
    if not current_password or not new_password:
        raise ValidationError("Current and new password are required")

    user = users.get(user_id)
    if not user:
        raise NotFoundError("User not found")

    if not verify_password(current_password, user.password):
        raise InvalidCredentials("Current password is incorrect")

    user.password = hash_password(new_password)
    users.commit()
    logger.info(f"User {user_id} changed password")
    return {"message": "Password changed successfully"}
