# app/services/users.py
"""Back-office user management (admin only)."""

import logging
from datetime import date
from typing import Optional

from sqlalchemy.exc import IntegrityError

from app.core.errors import ConflictError, NotFoundError, ValidationError
from app.core.roles import parse_role_id
from app.db.repositories.users import UserRepository
from app.services.auth import user_profile, user_public

logger = logging.getLogger(__name__)


def list_users(users: UserRepository) -> list[dict]:
    rows = []
    for user in users.list_newest_first():
        item = user_public(user)
        item["created_at"] = user.created_at
        rows.append(item)
    return rows


def change_role(users: UserRepository, user_id: int, role_id) -> dict:
    role = parse_role_id(role_id)
    if role is None:
        raise ValidationError("Invalid role id")

    user = users.get(user_id)
    if not user:
        raise NotFoundError("User not found")

    user.role_id = int(role)
    users.commit()
    users.refresh(user)
    logger.info(f"User {user_id} role changed to {role.label}")
    return {"id": user.id, "username": user.username, "role": user.role_name}


def update_user_profile(
    users: UserRepository,
    user_id: int,
    username: Optional[str],
    email: Optional[str],
    phone: Optional[str] = None,
    address: Optional[str] = None,
    full_name: Optional[str] = None,
    birthday: Optional[date] = None,
    discount_amount: Optional[float] = None,
) -> dict:
    if not username or not email:
        raise ValidationError("Username and email are required")

    if discount_amount is not None and discount_amount < 0:
        raise ValidationError("Discount amount cannot be negative")

    user = users.get(user_id)
    if not user:
        raise NotFoundError("User not found")

    if users.find_taken(username, email, exclude_id=user_id):
        raise ConflictError("A user with this username or email already exists")

    user.username = username
    user.email = email
    user.phone = phone or None
    user.address = address or None
    user.full_name = full_name or None
    user.birthday = birthday
    user.discount_amount = discount_amount or 0
    try:
        users.commit()
    except IntegrityError as e:
        users.rollback()
        raise ConflictError("A user with this username or email already exists") from e
    users.refresh(user)
    return user_profile(user)
